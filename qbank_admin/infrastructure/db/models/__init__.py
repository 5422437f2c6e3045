from .question_type_model import QuestionType
from .internal_type_model import InternalType
from .passage_model import Passage
from .question_model import Question
from .question_attempt_model import QuestionAttempt

__all__ = [
    "QuestionType",
    "InternalType",
    "Passage",
    "Question",
    "QuestionAttempt",
]
