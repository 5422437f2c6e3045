from typing import List, Optional
import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from qbank_admin.infrastructure.db.models import QuestionType, InternalType, Question
from qbank_admin.infrastructure.exceptions import (
    ConstraintViolationError,
    NotFoundError,
    ValidationFailedError,
    translate_db_errors,
)
from qbank_admin.presentation.schemas.type_schema import QuestionTypeCreate, InternalTypeCreate

logger = logging.getLogger(__name__)


def _referencing_questions(db: Session, *criteria) -> List[int]:
    rows = db.query(Question.q_no).filter(*criteria).order_by(Question.q_no).all()
    return [row.q_no for row in rows]


# ------------------ Question Types ------------------

@translate_db_errors("fetch question types", logger)
def list_question_types(db: Session) -> List[QuestionType]:
    question_types = db.query(QuestionType).order_by(QuestionType.type_name).all()
    logger.info(f"Retrieved {len(question_types)} question types")
    return question_types


@translate_db_errors("create question type", logger)
def create_question_type(db: Session, type_data: QuestionTypeCreate) -> QuestionType:
    existing = (
        db.query(QuestionType)
        .filter(
            or_(
                QuestionType.type_name == type_data.type_name,
                QuestionType.type_name_en == type_data.type_name_en,
            )
        )
        .first()
    )
    if existing:
        logger.warning(f"Attempt to create duplicate question type: {type_data.type_name}")
        raise ValidationFailedError(
            "Invalid question type data",
            [{"field": "typeName", "message": f"Question type '{type_data.type_name}' already exists"}],
        )

    question_type = QuestionType(**type_data.model_dump())
    db.add(question_type)
    db.commit()
    db.refresh(question_type)
    logger.info(f"Created question type: {question_type.type_name} (ID: {question_type.type_id})")
    return question_type


@translate_db_errors("delete question type", logger)
def delete_question_type(db: Session, type_id: int) -> None:
    """Delete a question type and its internal types, unless any question uses it."""
    question_type = db.get(QuestionType, type_id)
    if question_type is None:
        logger.warning(f"Cannot delete question type {type_id}: not found")
        raise NotFoundError("Question type", type_id)

    internal_ids = [it.internal_type_id for it in question_type.internal_types]
    criteria = Question.type_id == type_id
    if internal_ids:
        criteria = or_(criteria, Question.internal_type_id.in_(internal_ids))
    references = _referencing_questions(db, criteria)
    if references:
        logger.warning(f"Cannot delete question type {type_id}: used by questions {references}")
        raise ConstraintViolationError(
            f"Question type '{question_type.type_name}' is used by {len(references)} question(s)",
            references=references,
        )

    db.delete(question_type)
    db.commit()
    logger.info(f"Deleted question type {type_id}")


# ------------------ Internal Types ------------------

@translate_db_errors("fetch internal types", logger)
def list_internal_types(db: Session, type_id: Optional[int] = None) -> List[InternalType]:
    query = db.query(InternalType)
    if type_id is not None:
        query = query.filter(InternalType.type_id == type_id)
    internal_types = query.order_by(InternalType.internal_name).all()
    logger.info(f"Retrieved {len(internal_types)} internal types (type_id={type_id})")
    return internal_types


@translate_db_errors("create internal type", logger)
def create_internal_type(db: Session, internal_data: InternalTypeCreate) -> InternalType:
    if db.get(QuestionType, internal_data.type_id) is None:
        raise ValidationFailedError(
            "Invalid internal type data",
            [{"field": "typeId", "message": f"Question type {internal_data.type_id} does not exist"}],
        )

    existing = (
        db.query(InternalType)
        .filter(
            InternalType.type_id == internal_data.type_id,
            InternalType.internal_name == internal_data.internal_name,
        )
        .first()
    )
    if existing:
        logger.warning(
            f"Attempt to create duplicate internal type: {internal_data.internal_name} "
            f"for type_id: {internal_data.type_id}"
        )
        raise ValidationFailedError(
            "Invalid internal type data",
            [{
                "field": "internalName",
                "message": f"Internal type '{internal_data.internal_name}' already exists for this type",
            }],
        )

    internal_type = InternalType(**internal_data.model_dump())
    db.add(internal_type)
    db.commit()
    db.refresh(internal_type)
    logger.info(
        f"Created internal type: {internal_type.internal_name} "
        f"(ID: {internal_type.internal_type_id}) for type_id: {internal_type.type_id}"
    )
    return internal_type


@translate_db_errors("delete internal type", logger)
def delete_internal_type(db: Session, internal_type_id: int) -> None:
    internal_type = db.get(InternalType, internal_type_id)
    if internal_type is None:
        logger.warning(f"Cannot delete internal type {internal_type_id}: not found")
        raise NotFoundError("Internal type", internal_type_id)

    references = _referencing_questions(db, Question.internal_type_id == internal_type_id)
    if references:
        logger.warning(
            f"Cannot delete internal type {internal_type_id}: used by questions {references}"
        )
        raise ConstraintViolationError(
            f"Internal type '{internal_type.internal_name}' is used by {len(references)} question(s)",
            references=references,
        )

    db.delete(internal_type)
    db.commit()
    logger.info(f"Deleted internal type {internal_type_id}")
