"""
Setup-time reference data: the two question types and their internal types.

Run once against a fresh database:

    python -m qbank_admin.application.admin.seed_reference_data
"""
import logging
from typing import Dict

from sqlalchemy.orm import Session

from qbank_admin.infrastructure import config
from qbank_admin.infrastructure.db.models import QuestionType, InternalType

logger = logging.getLogger(__name__)

REFERENCE_TYPES = [
    {
        "type_name": config.VERBAL_TYPE_NAME,
        "type_name_en": "Verbal",
        "description": "Verbal reasoning questions",
        "internal_types": [
            (config.READING_COMPREHENSION_NAME, "Reading Comprehension"),
            (config.VERBAL_ANALOGIES_NAME, "Verbal Analogies"),
            (config.SENTENCE_COMPLETION_NAME, "Sentence Completion"),
            (config.CONTEXTUAL_ERROR_NAME, "Contextual Error"),
        ],
    },
    {
        "type_name": config.QUANT_TYPE_NAME,
        "type_name_en": "Quantitative",
        "description": "Quantitative reasoning questions",
        "internal_types": [
            ("حساب", "Arithmetic"),
            ("جبر", "Algebra"),
            ("هندسة", "Geometry"),
            ("إحصاء", "Statistics"),
            ("مقارنات كمية", "Quantitative Comparison"),
        ],
    },
]


def seed_reference_data(db: Session) -> Dict[str, int]:
    """Insert missing reference rows; existing rows are left alone."""
    created_types = 0
    created_internal = 0
    try:
        for entry in REFERENCE_TYPES:
            question_type = (
                db.query(QuestionType).filter(QuestionType.type_name == entry["type_name"]).first()
            )
            if question_type is None:
                question_type = QuestionType(
                    type_name=entry["type_name"],
                    type_name_en=entry["type_name_en"],
                    description=entry["description"],
                )
                db.add(question_type)
                db.flush()
                created_types += 1

            for internal_name, internal_name_en in entry["internal_types"]:
                exists = (
                    db.query(InternalType)
                    .filter(
                        InternalType.type_id == question_type.type_id,
                        InternalType.internal_name == internal_name,
                    )
                    .first()
                )
                if exists:
                    continue
                db.add(
                    InternalType(
                        type_id=question_type.type_id,
                        internal_name=internal_name,
                        internal_name_en=internal_name_en,
                    )
                )
                created_internal += 1

        db.commit()
        logger.info(
            f"Reference data seeded: {created_types} question types, "
            f"{created_internal} internal types created"
        )
        return {"question_types": created_types, "internal_types": created_internal}
    except Exception as e:
        db.rollback()
        logger.error(f"Seeding reference data failed: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    from qbank_admin.infrastructure.config import LOG_LEVEL
    from qbank_admin.infrastructure.db.base import Base
    from qbank_admin.infrastructure.db.session import SessionLocal, engine

    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        print(seed_reference_data(db))
    finally:
        db.close()
