from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional

from qbank_admin.infrastructure.repositories.type_repo_impl import (
    list_question_types,
    create_question_type,
    delete_question_type,
    list_internal_types,
    create_internal_type,
    delete_internal_type,
)
from qbank_admin.presentation.dependencies import get_db
from qbank_admin.presentation.schemas.common_schema import ErrorResponse
from qbank_admin.presentation.schemas.type_schema import (
    QuestionTypeCreate,
    QuestionTypeOut,
    InternalTypeCreate,
    InternalTypeOut,
)

router = APIRouter(tags=["Question Types"])


# ------------------ Question Types ------------------

@router.get("/question-types", response_model=List[QuestionTypeOut])
def get_question_types(db: Session = Depends(get_db)):
    return list_question_types(db)


@router.post(
    "/question-types",
    response_model=QuestionTypeOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def add_question_type(question_type: QuestionTypeCreate, db: Session = Depends(get_db)):
    return create_question_type(db, question_type)


@router.delete(
    "/question-types/{type_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def remove_question_type(type_id: int, db: Session = Depends(get_db)):
    delete_question_type(db, type_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ------------------ Internal Types ------------------

@router.get("/internal-types", response_model=List[InternalTypeOut])
def get_internal_types(
    type_id: Optional[int] = Query(None, alias="typeId"),
    db: Session = Depends(get_db),
):
    return list_internal_types(db, type_id)


@router.post(
    "/internal-types",
    response_model=InternalTypeOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def add_internal_type(internal_type: InternalTypeCreate, db: Session = Depends(get_db)):
    return create_internal_type(db, internal_type)


@router.delete(
    "/internal-types/{internal_type_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def remove_internal_type(internal_type_id: int, db: Session = Depends(get_db)):
    delete_internal_type(db, internal_type_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
