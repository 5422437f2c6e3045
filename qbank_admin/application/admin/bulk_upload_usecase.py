import io
import logging
import zipfile
from typing import Any, Dict, Optional

import pandas as pd
from pydantic import ValidationError
from sqlalchemy.orm import Session

from qbank_admin.infrastructure.exceptions import ConstraintViolationError, ValidationFailedError
from qbank_admin.infrastructure.repositories.question_repo_impl import (
    check_question_references,
    create_question,
)
from qbank_admin.presentation.schemas.bulk_question_schema import QuestionBulkUploadMeta
from qbank_admin.presentation.schemas.question_schema import QuestionCreate

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["question_text", "mc_a", "mc_b", "mc_c", "mc_d", "mc_correct"]
OPTIONAL_COLUMNS = [
    "question_title",
    "question_image",
    "question_order",
    "explanation_image",
    "hint_image",
    "tags",
]
LETTERS = ["A", "B", "C", "D"]


def _cell(row: pd.Series, column: str) -> Optional[str]:
    if column not in row.index or pd.isna(row[column]):
        return None
    value = str(row[column]).strip()
    return value or None


def _correct_letter(row: pd.Series) -> Optional[str]:
    """Accept a letter, a 1-4 position, or the exact text of one of the options."""
    raw = _cell(row, "mc_correct")
    if raw is None:
        return None
    if raw.upper() in LETTERS:
        return raw.upper()
    if raw in ["1", "2", "3", "4", "1.0", "2.0", "3.0", "4.0"]:
        return LETTERS[int(float(raw)) - 1]
    for letter in LETTERS:
        if _cell(row, f"mc_{letter.lower()}") == raw:
            return letter
    return raw


def _read_frame(file_content: bytes, filename: str) -> pd.DataFrame:
    lowered = filename.lower()
    if not lowered.endswith((".csv", ".xlsx")):
        raise ValidationFailedError(
            "Invalid upload",
            [{"field": "file", "message": "Unsupported file format. Please upload CSV or XLSX."}],
        )

    try:
        if lowered.endswith(".csv"):
            df = pd.read_csv(io.BytesIO(file_content), dtype=str)
        else:
            df = pd.read_excel(io.BytesIO(file_content), dtype=str, engine="openpyxl")
    except (
        pd.errors.EmptyDataError,
        pd.errors.ParserError,
        UnicodeDecodeError,
        ValueError,
        zipfile.BadZipFile,
    ) as e:
        logger.warning(f"Unreadable upload {filename}: {e}")
        raise ValidationFailedError(
            "Invalid upload",
            [{"field": "file", "message": f"Could not read file: {e}"}],
        ) from e

    # Clean column names
    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValidationFailedError(
            "Invalid upload",
            [{"field": "file", "message": f"Missing required column: {c}"} for c in missing],
        )
    return df


def process_bulk_upload(
    db: Session, file_content: bytes, filename: str, meta: QuestionBulkUploadMeta
) -> Dict[str, Any]:
    """
    Create one question per spreadsheet row under the type/internal type in ``meta``.

    Rows that fail validation are reported and skipped; the rest are saved.
    """
    logger.info(
        f"Processing bulk upload: {filename} for type_id={meta.type_id}, "
        f"internal_type_id={meta.internal_type_id}"
    )
    check_question_references(db, meta.type_id, meta.internal_type_id, meta.passage_id)
    df = _read_frame(file_content, filename)

    inserted = 0
    failed = 0
    errors = []

    for index, row in df.iterrows():
        try:
            order = _cell(row, "question_order")
            question_data = QuestionCreate(
                question_title=_cell(row, "question_title"),
                question_text=_cell(row, "question_text"),
                question_image=_cell(row, "question_image"),
                mc_a=_cell(row, "mc_a"),
                mc_b=_cell(row, "mc_b"),
                mc_c=_cell(row, "mc_c"),
                mc_d=_cell(row, "mc_d"),
                mc_correct=_correct_letter(row),
                type_id=meta.type_id,
                internal_type_id=meta.internal_type_id,
                passage_id=meta.passage_id,
                question_order=int(float(order)) if order else 1,
                explanation_image=_cell(row, "explanation_image"),
                hint_image=_cell(row, "hint_image"),
                tags=_cell(row, "tags"),
                status=meta.status,
            )
            create_question(db, question_data)
            inserted += 1
        except ValidationError as e:
            failed += 1
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            errors.append(f"Row {index + 2}: invalid value for {fields}")
        except (ValueError, ValidationFailedError, ConstraintViolationError) as e:
            failed += 1
            errors.append(f"Row {index + 2}: {e}")

    logger.info(f"Bulk upload finished. Inserted: {inserted}, Failed: {failed}")
    return {
        "total_rows": len(df),
        "inserted": inserted,
        "failed": failed,
        "errors": errors,
    }
