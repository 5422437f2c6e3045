from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional

from qbank_admin.infrastructure.config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from qbank_admin.infrastructure.exceptions import NotFoundError
from qbank_admin.infrastructure.repositories.passage_repo_impl import (
    list_passages,
    get_passage,
    create_passage,
    update_passage,
    delete_passage,
)
from qbank_admin.presentation.dependencies import get_db
from qbank_admin.presentation.schemas.common_schema import ErrorResponse, RecordStatus
from qbank_admin.presentation.schemas.passage_schema import PassageCreate, PassageUpdate, PassageOut

router = APIRouter(prefix="/passages", tags=["Passages"])


@router.get("", response_model=List[PassageOut])
def get_passages(
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    search: Optional[str] = None,
    status_filter: Optional[RecordStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
):
    return list_passages(db, limit=limit, offset=offset, search_term=search, status=status_filter)


@router.get(
    "/{passage_id}",
    response_model=PassageOut,
    responses={404: {"model": ErrorResponse}},
)
def get_passage_detail(passage_id: int, db: Session = Depends(get_db)):
    passage = get_passage(db, passage_id)
    if passage is None:
        raise NotFoundError("Passage", passage_id)
    return passage


@router.post(
    "",
    response_model=PassageOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def add_passage(passage: PassageCreate, db: Session = Depends(get_db)):
    return create_passage(db, passage)


@router.put(
    "/{passage_id}",
    response_model=PassageOut,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def modify_passage(passage_id: int, passage: PassageUpdate, db: Session = Depends(get_db)):
    return update_passage(db, passage_id, passage)


@router.delete(
    "/{passage_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
def remove_passage(passage_id: int, db: Session = Depends(get_db)):
    delete_passage(db, passage_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
