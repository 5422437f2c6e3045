from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status
from sqlalchemy.orm import Session
from typing import List, Optional

from qbank_admin.application.admin.bulk_upload_usecase import process_bulk_upload
from qbank_admin.infrastructure.config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from qbank_admin.infrastructure.exceptions import NotFoundError
from qbank_admin.infrastructure.repositories.question_repo_impl import (
    list_questions,
    get_question,
    create_question,
    update_question,
    delete_question,
)
from qbank_admin.presentation.dependencies import get_db
from qbank_admin.presentation.schemas.bulk_question_schema import (
    BulkUploadResponse,
    QuestionBulkUploadMeta,
)
from qbank_admin.presentation.schemas.common_schema import ErrorResponse, RecordStatus
from qbank_admin.presentation.schemas.question_schema import (
    QuestionCreate,
    QuestionUpdate,
    QuestionOut,
    QuestionDetailOut,
)
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/questions", tags=["Questions"])


@router.get("", response_model=List[QuestionDetailOut])
def get_questions(
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    search: Optional[str] = None,
    type: Optional[str] = None,
    status_filter: Optional[RecordStatus] = Query(None, alias="status"),
    passage_id: Optional[int] = Query(None, alias="passageId"),
    db: Session = Depends(get_db),
):
    return list_questions(
        db,
        limit=limit,
        offset=offset,
        search_term=search,
        type_filter=type,
        status=status_filter,
        passage_id=passage_id,
    )


@router.post(
    "/bulk-upload",
    response_model=BulkUploadResponse,
    responses={400: {"model": ErrorResponse}},
)
def bulk_upload_questions(
    file: UploadFile = File(...),
    type_id: int = Form(..., alias="typeId"),
    internal_type_id: int = Form(..., alias="internalTypeId"),
    passage_id: Optional[int] = Form(None, alias="passageId"),
    status_value: RecordStatus = Form("draft", alias="status"),
    db: Session = Depends(get_db),
):
    meta = QuestionBulkUploadMeta(
        type_id=type_id,
        internal_type_id=internal_type_id,
        passage_id=passage_id,
        status=status_value,
    )
    content = file.file.read()
    logger.info(f"Bulk upload received: {file.filename} ({len(content)} bytes)")
    return process_bulk_upload(db, content, file.filename or "", meta)


@router.get(
    "/{q_no}",
    response_model=QuestionDetailOut,
    responses={404: {"model": ErrorResponse}},
)
def get_question_detail(q_no: int, db: Session = Depends(get_db)):
    question = get_question(db, q_no)
    if question is None:
        raise NotFoundError("Question", q_no)
    return question


@router.post(
    "",
    response_model=QuestionOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def add_question(question: QuestionCreate, db: Session = Depends(get_db)):
    logger.info(f"Creating question for type_id={question.type_id}")
    return create_question(db, question)


@router.put(
    "/{q_no}",
    response_model=QuestionOut,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def modify_question(q_no: int, question: QuestionUpdate, db: Session = Depends(get_db)):
    return update_question(db, q_no, question)


@router.delete(
    "/{q_no}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
def remove_question(q_no: int, db: Session = Depends(get_db)):
    delete_question(db, q_no)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
