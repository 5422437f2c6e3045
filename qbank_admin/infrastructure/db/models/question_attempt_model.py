from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..base import Base


class QuestionAttempt(Base):
    __tablename__ = "question_attempts"

    attempt_id = Column(Integer, primary_key=True, index=True)
    q_no = Column(
        Integer,
        ForeignKey("questions.q_no", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_id = Column(String(100), nullable=True)
    selected_answer = Column(String(1), nullable=False)
    is_correct = Column(Boolean, nullable=False)
    time_taken_seconds = Column(Integer, nullable=True)
    attempt_date = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    question = relationship("Question", back_populates="attempts")

    __table_args__ = (
        CheckConstraint(
            "selected_answer IN ('A', 'B', 'C', 'D')",
            name="ck_question_attempts_selected_answer",
        ),
    )
