from .common_schema import CamelModel


class DashboardStatsOut(CamelModel):
    total_questions: int = 0
    active_questions: int = 0
    total_passages: int = 0
    total_attempts: int = 0
    verbal_questions: int = 0
    quant_questions: int = 0
    reading_comprehension: int = 0
    verbal_analogies: int = 0
    sentence_completion: int = 0
    contextual_error: int = 0
    draft_questions: int = 0
    active_passages: int = 0
    draft_passages: int = 0
