from datetime import datetime
from pydantic import Field
from typing import Optional

from .common_schema import CamelModel

# ------------------ Question Type Schemas ------------------

class QuestionTypeCreate(CamelModel):
    type_name: str = Field(min_length=1, max_length=50)
    type_name_en: str = Field(min_length=1, max_length=50)
    description: Optional[str] = None


class QuestionTypeOut(CamelModel):
    type_id: int
    type_name: str
    type_name_en: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None

# ------------------ Internal Type Schemas ------------------

class InternalTypeCreate(CamelModel):
    type_id: int
    internal_name: str = Field(min_length=1, max_length=100)
    internal_name_en: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None


class InternalTypeOut(CamelModel):
    internal_type_id: int
    type_id: int
    internal_name: str
    internal_name_en: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
