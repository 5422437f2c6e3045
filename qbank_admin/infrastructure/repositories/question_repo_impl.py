from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from qbank_admin.infrastructure.db.models import Question, QuestionType, InternalType, Passage
from qbank_admin.infrastructure.exceptions import (
    NotFoundError,
    ValidationFailedError,
    translate_db_errors,
)
from qbank_admin.infrastructure.repositories.passage_repo_impl import refresh_passage_difficulty
from qbank_admin.presentation.schemas.question_schema import QuestionCreate, QuestionUpdate

logger = logging.getLogger(__name__)

QUESTION_COLUMNS = [c.name for c in Question.__table__.columns]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _detail_query(db: Session):
    """Question joined with its type, internal type and (optional) passage."""
    return (
        db.query(
            Question,
            QuestionType.type_name,
            InternalType.internal_name,
            Passage.passage_title,
            Passage.passage_image,
        )
        .join(QuestionType, Question.type_id == QuestionType.type_id)
        .join(InternalType, Question.internal_type_id == InternalType.internal_type_id)
        .outerjoin(Passage, Question.passage_id == Passage.passage_id)
    )


def _to_detail(row) -> Dict[str, Any]:
    question, type_name, internal_name, passage_title, passage_image = row
    detail = {name: getattr(question, name) for name in QUESTION_COLUMNS}
    detail["type_name"] = type_name
    detail["internal_name"] = internal_name
    detail["passage_title"] = passage_title or None
    detail["passage_image"] = passage_image or None
    return detail


def check_question_references(
    db: Session,
    type_id: int,
    internal_type_id: int,
    passage_id: Optional[int] = None,
) -> None:
    """Reject unknown types/passages and internal types that belong to another type."""
    errors = []
    question_type = db.get(QuestionType, type_id)
    internal_type = db.get(InternalType, internal_type_id)

    if question_type is None:
        errors.append({"field": "typeId", "message": f"Question type {type_id} does not exist"})
    if internal_type is None:
        errors.append(
            {"field": "internalTypeId", "message": f"Internal type {internal_type_id} does not exist"}
        )
    if question_type is not None and internal_type is not None and internal_type.type_id != type_id:
        errors.append({
            "field": "internalTypeId",
            "message": f"Internal type {internal_type_id} does not belong to question type {type_id}",
        })
    if passage_id is not None and db.get(Passage, passage_id) is None:
        errors.append({"field": "passageId", "message": f"Passage {passage_id} does not exist"})

    if errors:
        logger.warning(f"Rejected question references: {errors}")
        raise ValidationFailedError("Invalid question data", errors)


@translate_db_errors("fetch questions", logger)
def list_questions(
    db: Session,
    limit: int = 50,
    offset: int = 0,
    search_term: Optional[str] = None,
    type_filter: Optional[str] = None,
    status: Optional[str] = None,
    passage_id: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    List question details, newest first.

    ``search_term`` is a case-sensitive substring match on the question text
    or title; ``type_filter`` matches the type name exactly ("all" disables it).
    Both filters combine with AND.
    """
    query = _detail_query(db)

    if search_term:
        query = query.filter(
            or_(
                Question.question_text.contains(search_term, autoescape=True),
                Question.question_title.contains(search_term, autoescape=True),
            )
        )
    if type_filter and type_filter != "all":
        query = query.filter(QuestionType.type_name == type_filter)
    if status:
        query = query.filter(Question.status == status)

    if passage_id is not None:
        query = query.filter(Question.passage_id == passage_id).order_by(
            Question.question_order, Question.q_no
        )
    else:
        query = query.order_by(Question.q_no.desc())

    rows = query.limit(limit).offset(offset).all()
    logger.info(
        f"Retrieved {len(rows)} questions (limit={limit}, offset={offset}, "
        f"search={search_term!r}, type={type_filter!r})"
    )
    return [_to_detail(row) for row in rows]


@translate_db_errors("fetch question", logger)
def get_question(db: Session, q_no: int) -> Optional[Dict[str, Any]]:
    row = _detail_query(db).filter(Question.q_no == q_no).first()
    if row is None:
        logger.warning(f"Question with q_no {q_no} not found")
        return None
    return _to_detail(row)


@translate_db_errors("create question", logger)
def create_question(db: Session, question_data: QuestionCreate) -> Question:
    check_question_references(
        db,
        question_data.type_id,
        question_data.internal_type_id,
        question_data.passage_id,
    )

    question = Question(**question_data.model_dump())
    db.add(question)
    db.commit()
    db.refresh(question)
    logger.info(f"Created question q_no={question.q_no} (type_id={question.type_id})")
    return question


@translate_db_errors("update question", logger)
def update_question(db: Session, q_no: int, question_data: QuestionUpdate) -> Question:
    """Apply only the fields present in the request; always touches updated_at."""
    question = db.query(Question).filter(Question.q_no == q_no).first()
    if not question:
        logger.warning(f"Cannot update question {q_no}: not found")
        raise NotFoundError("Question", q_no)

    changes = question_data.model_dump(exclude_unset=True)

    if changes.keys() & {"type_id", "internal_type_id", "passage_id"}:
        check_question_references(
            db,
            changes.get("type_id", question.type_id),
            changes.get("internal_type_id", question.internal_type_id),
            changes.get("passage_id"),
        )

    previous_passage_id = question.passage_id
    for field, value in changes.items():
        setattr(question, field, value)
    question.updated_at = _utcnow()
    db.flush()

    # Moving a question between passages changes both passages' difficulty
    if previous_passage_id != question.passage_id:
        if previous_passage_id is not None:
            refresh_passage_difficulty(db, previous_passage_id)
        if question.passage_id is not None:
            refresh_passage_difficulty(db, question.passage_id)

    db.commit()
    db.refresh(question)
    logger.info(f"Updated question q_no={q_no}: fields={sorted(changes)}")
    return question


@translate_db_errors("delete question", logger)
def delete_question(db: Session, q_no: int) -> None:
    question = db.query(Question).filter(Question.q_no == q_no).first()
    if not question:
        logger.warning(f"Cannot delete question {q_no}: not found")
        raise NotFoundError("Question", q_no)

    passage_id = question.passage_id
    # Attempts go with the ON DELETE CASCADE on question_attempts.q_no
    db.delete(question)
    db.flush()
    if passage_id is not None:
        refresh_passage_difficulty(db, passage_id)
    db.commit()
    logger.info(f"Deleted question q_no={q_no}")
