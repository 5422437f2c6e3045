from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..base import Base


class InternalType(Base):
    __tablename__ = "internal_types"

    internal_type_id = Column(Integer, primary_key=True, index=True)
    type_id = Column(
        Integer,
        ForeignKey("question_types.type_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    internal_name = Column(String(100), nullable=False)
    internal_name_en = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    question_type = relationship("QuestionType", back_populates="internal_types")
