from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from qbank_admin.infrastructure.db.models import Passage, Question
from qbank_admin.infrastructure.exceptions import NotFoundError, translate_db_errors
from qbank_admin.presentation.schemas.passage_schema import PassageCreate, PassageUpdate

logger = logging.getLogger(__name__)

PASSAGE_COLUMNS = [c.name for c in Passage.__table__.columns]
TWO_PLACES = Decimal("0.01")


def _passage_query(db: Session):
    """Passages with the number of questions attached to each."""
    counts = (
        db.query(
            Question.passage_id.label("passage_id"),
            func.count(Question.q_no).label("question_count"),
        )
        .filter(Question.passage_id.isnot(None))
        .group_by(Question.passage_id)
        .subquery()
    )
    return db.query(Passage, func.coalesce(counts.c.question_count, 0)).outerjoin(
        counts, counts.c.passage_id == Passage.passage_id
    )


def _to_out(row) -> Dict[str, Any]:
    passage, question_count = row
    data = {name: getattr(passage, name) for name in PASSAGE_COLUMNS}
    data["question_count"] = int(question_count or 0)
    return data


def refresh_passage_difficulty(db: Session, passage_id: int) -> None:
    """
    Recompute a passage's difficulty as the mean of its questions' difficulty.

    Runs inside the caller's transaction; the caller commits.
    """
    passage = db.get(Passage, passage_id)
    if passage is None:
        return
    average = (
        db.query(func.avg(Question.avg_difficulty))
        .filter(Question.passage_id == passage_id)
        .scalar()
    )
    passage.avg_difficulty = (
        Decimal(str(average)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
        if average is not None
        else Decimal("0.00")
    )
    logger.debug(f"Passage {passage_id} difficulty recomputed: {passage.avg_difficulty}")


@translate_db_errors("fetch passages", logger)
def list_passages(
    db: Session,
    limit: int = 50,
    offset: int = 0,
    search_term: Optional[str] = None,
    status: Optional[str] = None,
) -> List[Dict[str, Any]]:
    query = _passage_query(db)
    if search_term:
        query = query.filter(Passage.passage_title.contains(search_term, autoescape=True))
    if status:
        query = query.filter(Passage.status == status)

    rows = (
        query.order_by(Passage.created_at.desc(), Passage.passage_id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )
    logger.info(f"Retrieved {len(rows)} passages (limit={limit}, offset={offset})")
    return [_to_out(row) for row in rows]


@translate_db_errors("fetch passage", logger)
def get_passage(db: Session, passage_id: int) -> Optional[Dict[str, Any]]:
    row = _passage_query(db).filter(Passage.passage_id == passage_id).first()
    if row is None:
        logger.warning(f"Passage with id {passage_id} not found")
        return None
    return _to_out(row)


@translate_db_errors("create passage", logger)
def create_passage(db: Session, passage_data: PassageCreate) -> Dict[str, Any]:
    passage = Passage(**passage_data.model_dump())
    db.add(passage)
    db.commit()
    db.refresh(passage)
    logger.info(f"Created passage: {passage.passage_title!r} (ID: {passage.passage_id})")
    return _to_out((passage, 0))


@translate_db_errors("update passage", logger)
def update_passage(db: Session, passage_id: int, passage_data: PassageUpdate) -> Dict[str, Any]:
    passage = db.query(Passage).filter(Passage.passage_id == passage_id).first()
    if not passage:
        logger.warning(f"Cannot update passage {passage_id}: not found")
        raise NotFoundError("Passage", passage_id)

    changes = passage_data.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(passage, field, value)
    passage.updated_at = datetime.now(timezone.utc)
    db.commit()
    logger.info(f"Updated passage {passage_id}: fields={sorted(changes)}")
    return get_passage(db, passage_id)


@translate_db_errors("delete passage", logger)
def delete_passage(db: Session, passage_id: int) -> None:
    """Delete a passage; its questions and their attempts cascade."""
    passage = db.query(Passage).filter(Passage.passage_id == passage_id).first()
    if not passage:
        logger.warning(f"Cannot delete passage {passage_id}: not found")
        raise NotFoundError("Passage", passage_id)

    db.delete(passage)
    db.commit()
    logger.info(f"Deleted passage {passage_id}")
