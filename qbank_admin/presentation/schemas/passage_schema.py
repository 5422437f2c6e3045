from datetime import datetime
from pydantic import Field, field_validator
from typing import Optional

from .common_schema import CamelModel, NonBlankStr, RecordStatus, reject_null

# ------------------ Passage Schemas ------------------

class PassageCreate(CamelModel):
    passage_title: Optional[str] = Field(default=None, max_length=200)
    passage_image: NonBlankStr = Field(max_length=500)
    status: RecordStatus = "draft"


class PassageUpdate(CamelModel):
    passage_title: Optional[str] = Field(default=None, max_length=200)
    passage_image: Optional[NonBlankStr] = Field(default=None, max_length=500)
    status: Optional[RecordStatus] = None

    @field_validator("passage_image", "status")
    @classmethod
    def _required_fields_not_cleared(cls, value):
        return reject_null(value)


class PassageOut(CamelModel):
    passage_id: int
    passage_title: Optional[str] = None
    passage_image: str
    avg_difficulty: float = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    status: str
    question_count: int = 0
