from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    ForeignKey,
    Numeric,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..base import Base


class Question(Base):
    __tablename__ = "questions"

    q_no = Column(Integer, primary_key=True, index=True)
    question_title = Column(String(200), nullable=True)
    question_text = Column(Text, nullable=False)
    question_image = Column(String(500), nullable=True)
    mc_a = Column(Text, nullable=False)
    mc_b = Column(Text, nullable=False)
    mc_c = Column(Text, nullable=False)
    mc_d = Column(Text, nullable=False)
    mc_correct = Column(String(1), nullable=False)
    type_id = Column(
        Integer,
        ForeignKey("question_types.type_id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    internal_type_id = Column(
        Integer,
        ForeignKey("internal_types.internal_type_id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    passage_id = Column(
        Integer,
        ForeignKey("passages.passage_id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    question_order = Column(Integer, default=1)
    avg_difficulty = Column(Numeric(5, 2), nullable=False, default=0)
    total_attempts = Column(Integer, nullable=False, default=0)
    correct_attempts = Column(Integer, nullable=False, default=0)
    explanation_image = Column(String(500), nullable=True)
    hint_image = Column(String(500), nullable=True)
    tags = Column(Text, nullable=True)  # comma-separated
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())
    status = Column(String(20), nullable=False, default="draft")

    # Relationships
    question_type = relationship("QuestionType")
    internal_type = relationship("InternalType")
    passage = relationship("Passage", back_populates="questions")
    attempts = relationship(
        "QuestionAttempt", back_populates="question", cascade="all", passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint("mc_correct IN ('A', 'B', 'C', 'D')", name="ck_questions_mc_correct"),
        CheckConstraint(
            "total_attempts >= correct_attempts AND correct_attempts >= 0",
            name="ck_questions_attempt_counters",
        ),
    )
