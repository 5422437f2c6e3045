from decimal import Decimal, ROUND_HALF_UP
import logging

from sqlalchemy.orm import Session

from qbank_admin.infrastructure.db.models import Question, QuestionAttempt
from qbank_admin.infrastructure.exceptions import ValidationFailedError, translate_db_errors
from qbank_admin.infrastructure.repositories.passage_repo_impl import refresh_passage_difficulty
from qbank_admin.presentation.schemas.attempt_schema import QuestionAttemptCreate

logger = logging.getLogger(__name__)


def compute_difficulty(total_attempts: int, correct_attempts: int) -> Decimal:
    """Share of incorrect attempts as a percentage in [0, 100], two decimals."""
    if total_attempts <= 0:
        return Decimal("0.00")
    wrong = Decimal(total_attempts - correct_attempts)
    return (wrong * 100 / Decimal(total_attempts)).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_UP
    )


@translate_db_errors("record question attempt", logger)
def create_question_attempt(db: Session, attempt_data: QuestionAttemptCreate) -> QuestionAttempt:
    """
    Record an attempt and update the question's counters in one transaction.

    The question row is locked for the duration so concurrent attempts on the
    same question cannot lose an increment (no-op on SQLite).
    """
    question = (
        db.query(Question)
        .filter(Question.q_no == attempt_data.q_no)
        .with_for_update()
        .first()
    )
    if question is None:
        logger.warning(f"Attempt rejected: question {attempt_data.q_no} not found")
        raise ValidationFailedError(
            "Invalid attempt data",
            [{"field": "qNo", "message": f"Question {attempt_data.q_no} does not exist"}],
        )

    attempt = QuestionAttempt(**attempt_data.model_dump())
    db.add(attempt)

    question.total_attempts = (question.total_attempts or 0) + 1
    if attempt_data.is_correct:
        question.correct_attempts = (question.correct_attempts or 0) + 1
    question.avg_difficulty = compute_difficulty(
        question.total_attempts, question.correct_attempts or 0
    )
    db.flush()

    if question.passage_id is not None:
        refresh_passage_difficulty(db, question.passage_id)

    db.commit()
    db.refresh(attempt)
    logger.info(
        f"Recorded attempt {attempt.attempt_id} for question {question.q_no} "
        f"(correct={attempt.is_correct}, total={question.total_attempts})"
    )
    return attempt
