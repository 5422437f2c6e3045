from datetime import datetime
from pydantic import Field, computed_field, field_validator
from typing import List, Optional, Union

from .common_schema import (
    CamelModel,
    OptionLetter,
    RecordStatus,
    NonBlankStr,
    reject_null,
)

REQUIRED_QUESTION_FIELDS = [
    "question_text",
    "mc_a",
    "mc_b",
    "mc_c",
    "mc_d",
    "mc_correct",
    "type_id",
    "internal_type_id",
    "status",
]


def normalize_tags(value: Union[str, List[str], None]) -> Optional[str]:
    """Store tags as a trimmed, comma-joined string; NULL when nothing is left."""
    if value is None:
        return None
    if not isinstance(value, (str, list, tuple)):
        return value
    parts = value.split(",") if isinstance(value, str) else value
    cleaned = [str(p).strip() for p in parts if str(p).strip()]
    return ",".join(cleaned) if cleaned else None


def split_tags(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [t.strip() for t in value.split(",") if t.strip()]


# ------------------ Question Schemas ------------------

class QuestionCreate(CamelModel):
    question_title: Optional[str] = Field(default=None, max_length=200)
    question_text: NonBlankStr
    question_image: Optional[str] = Field(default=None, max_length=500)
    mc_a: NonBlankStr
    mc_b: NonBlankStr
    mc_c: NonBlankStr
    mc_d: NonBlankStr
    mc_correct: OptionLetter
    type_id: int
    internal_type_id: int
    passage_id: Optional[int] = None
    question_order: Optional[int] = Field(default=1, ge=1)
    explanation_image: Optional[str] = Field(default=None, max_length=500)
    hint_image: Optional[str] = Field(default=None, max_length=500)
    tags: Optional[str] = None
    status: RecordStatus = "draft"

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value):
        return normalize_tags(value)


class QuestionUpdate(CamelModel):
    question_title: Optional[str] = Field(default=None, max_length=200)
    question_text: Optional[NonBlankStr] = None
    question_image: Optional[str] = Field(default=None, max_length=500)
    mc_a: Optional[NonBlankStr] = None
    mc_b: Optional[NonBlankStr] = None
    mc_c: Optional[NonBlankStr] = None
    mc_d: Optional[NonBlankStr] = None
    mc_correct: Optional[OptionLetter] = None
    type_id: Optional[int] = None
    internal_type_id: Optional[int] = None
    passage_id: Optional[int] = None
    question_order: Optional[int] = Field(default=None, ge=1)
    explanation_image: Optional[str] = Field(default=None, max_length=500)
    hint_image: Optional[str] = Field(default=None, max_length=500)
    tags: Optional[str] = None
    status: Optional[RecordStatus] = None

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value):
        return normalize_tags(value)

    @field_validator(*REQUIRED_QUESTION_FIELDS)
    @classmethod
    def _required_fields_not_cleared(cls, value):
        return reject_null(value)


class QuestionOut(CamelModel):
    q_no: int
    question_title: Optional[str] = None
    question_text: str
    question_image: Optional[str] = None
    mc_a: str
    mc_b: str
    mc_c: str
    mc_d: str
    mc_correct: str
    type_id: int
    internal_type_id: int
    passage_id: Optional[int] = None
    question_order: Optional[int] = None
    avg_difficulty: float = 0
    total_attempts: int = 0
    correct_attempts: int = 0
    explanation_image: Optional[str] = None
    hint_image: Optional[str] = None
    tags: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    status: str

    @computed_field(alias="tagList")
    @property
    def tag_list(self) -> List[str]:
        return split_tags(self.tags)


class QuestionDetailOut(QuestionOut):
    type_name: str
    internal_name: str
    passage_title: Optional[str] = None
    passage_image: Optional[str] = None
