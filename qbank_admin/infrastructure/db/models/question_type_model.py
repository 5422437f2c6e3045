from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..base import Base


class QuestionType(Base):
    __tablename__ = "question_types"

    type_id = Column(Integer, primary_key=True, index=True)
    type_name = Column(String(50), nullable=False, unique=True)  # لفظي / كمي
    type_name_en = Column(String(50), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    internal_types = relationship(
        "InternalType",
        back_populates="question_type",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
