from sqlalchemy import Column, Integer, String, DateTime, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..base import Base


class Passage(Base):
    __tablename__ = "passages"

    passage_id = Column(Integer, primary_key=True, index=True)
    passage_title = Column(String(200), nullable=True)
    passage_image = Column(String(500), nullable=False)
    avg_difficulty = Column(Numeric(5, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())
    status = Column(String(20), nullable=False, default="draft")

    # Relationships
    questions = relationship(
        "Question", back_populates="passage", cascade="all", passive_deletes=True
    )
