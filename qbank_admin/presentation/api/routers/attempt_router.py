from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from qbank_admin.infrastructure.repositories.attempt_repo_impl import create_question_attempt
from qbank_admin.presentation.dependencies import get_db
from qbank_admin.presentation.schemas.attempt_schema import QuestionAttemptCreate, QuestionAttemptOut
from qbank_admin.presentation.schemas.common_schema import ErrorResponse

router = APIRouter(prefix="/question-attempts", tags=["Question Attempts"])


@router.post(
    "",
    response_model=QuestionAttemptOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def record_attempt(attempt: QuestionAttemptCreate, db: Session = Depends(get_db)):
    return create_question_attempt(db, attempt)
