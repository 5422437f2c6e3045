from datetime import datetime
from pydantic import Field
from typing import Optional

from .common_schema import CamelModel, OptionLetter


class QuestionAttemptCreate(CamelModel):
    q_no: int
    student_id: Optional[str] = Field(default=None, max_length=100)
    selected_answer: OptionLetter
    is_correct: bool
    time_taken_seconds: Optional[int] = Field(default=None, ge=0)


class QuestionAttemptOut(CamelModel):
    attempt_id: int
    q_no: int
    student_id: Optional[str] = None
    selected_answer: str
    is_correct: bool
    time_taken_seconds: Optional[int] = None
    attempt_date: Optional[datetime] = None
