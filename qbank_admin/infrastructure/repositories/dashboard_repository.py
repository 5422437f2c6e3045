from typing import Dict
import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from qbank_admin.infrastructure import config
from qbank_admin.infrastructure.db.models import (
    InternalType,
    Passage,
    Question,
    QuestionAttempt,
    QuestionType,
)
from qbank_admin.infrastructure.exceptions import InfrastructureError

logger = logging.getLogger(__name__)


class DashboardRepository:
    """
    Counts shown on the admin dashboard.

    Every statistic is its own COUNT query. That is fine at admin-panel
    volume; fold them into one grouped query if the tables grow large.
    """

    def __init__(self, db: Session):
        self.db = db

    def _count(self, query) -> int:
        return int(query.scalar() or 0)

    def _count_questions(self, *criteria) -> int:
        return self._count(self.db.query(func.count(Question.q_no)).filter(*criteria))

    def _count_by_type_name(self, type_name: str) -> int:
        return self._count(
            self.db.query(func.count(Question.q_no))
            .join(QuestionType, Question.type_id == QuestionType.type_id)
            .filter(QuestionType.type_name == type_name)
        )

    def _count_by_internal_name(self, internal_name: str) -> int:
        return self._count(
            self.db.query(func.count(Question.q_no))
            .join(InternalType, Question.internal_type_id == InternalType.internal_type_id)
            .filter(InternalType.internal_name == internal_name)
        )

    def _count_passages(self, *criteria) -> int:
        return self._count(self.db.query(func.count(Passage.passage_id)).filter(*criteria))

    def get_dashboard_stats(self) -> Dict[str, int]:
        try:
            stats = {
                "total_questions": self._count_questions(),
                "active_questions": self._count_questions(Question.status == "active"),
                "total_passages": self._count_passages(),
                "total_attempts": self._count(
                    self.db.query(func.count(QuestionAttempt.attempt_id))
                ),
                "verbal_questions": self._count_by_type_name(config.VERBAL_TYPE_NAME),
                "quant_questions": self._count_by_type_name(config.QUANT_TYPE_NAME),
                "reading_comprehension": self._count_by_internal_name(
                    config.READING_COMPREHENSION_NAME
                ),
                "verbal_analogies": self._count_by_internal_name(config.VERBAL_ANALOGIES_NAME),
                "sentence_completion": self._count_by_internal_name(
                    config.SENTENCE_COMPLETION_NAME
                ),
                "contextual_error": self._count_by_internal_name(config.CONTEXTUAL_ERROR_NAME),
                "draft_questions": self._count_questions(Question.status == "draft"),
                "active_passages": self._count_passages(Passage.status == "active"),
                "draft_passages": self._count_passages(Passage.status == "draft"),
            }
            logger.info(f"Dashboard stats computed: total_questions={stats['total_questions']}")
            return stats

        except SQLAlchemyError as e:
            logger.error(f"Error computing dashboard stats: {e}", exc_info=True)
            raise InfrastructureError("Failed to fetch dashboard stats", detail=str(e)) from e
