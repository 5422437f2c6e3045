"""
Domain exceptions raised by the data-access layer.

Each kind maps to one HTTP status in ``presentation.error_handlers`` so the
API never has to guess what went wrong from an empty result.
"""

from functools import wraps
from logging import Logger
from typing import Any, Callable, Dict, List, Optional, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session


class QuestionBankError(Exception):
    """Base class for all errors raised by this application."""

    pass


class ValidationFailedError(QuestionBankError):
    """Input was rejected; carries field-level errors for the client form."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class NotFoundError(QuestionBankError):
    """The requested row does not exist."""

    def __init__(self, entity: str, key: Any):
        super().__init__(f"{entity} with id {key} not found")
        self.entity = entity
        self.key = key


class ConstraintViolationError(QuestionBankError):
    """A store constraint (restrict delete, uniqueness, ...) blocked the write."""

    def __init__(self, message: str, references: Optional[List[int]] = None, detail: str = ""):
        super().__init__(message)
        self.message = message
        self.references = references or []
        self.detail = detail


class InfrastructureError(QuestionBankError):
    """The store failed for reasons unrelated to the request content."""

    def __init__(self, message: str, detail: str = ""):
        super().__init__(f"{message}: {detail}" if detail else message)
        self.message = message
        self.detail = detail


# === DB Error Translation Decorator ===
T = TypeVar("T", bound=Callable)


def translate_db_errors(action: str, logger: Logger) -> Callable[[T], T]:
    """
    Wrap a repository function whose first argument is the SQLAlchemy session.

    Domain errors pass through after a rollback. ``IntegrityError`` becomes
    ``ConstraintViolationError`` and any other ``SQLAlchemyError`` becomes
    ``InfrastructureError``, chained to the original exception.
    """

    def decorator(func: T) -> T:
        @wraps(func)
        def wrapper(db: Session, *args, **kwargs):
            try:
                return func(db, *args, **kwargs)
            except QuestionBankError:
                db.rollback()
                raise
            except IntegrityError as e:
                db.rollback()
                logger.error(f"Integrity error while trying to {action}: {e.orig}")
                raise ConstraintViolationError(
                    f"Cannot {action}: a database constraint was violated",
                    detail=str(e.orig),
                ) from e
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Database error while trying to {action}: {e}", exc_info=True)
                raise InfrastructureError(f"Failed to {action}", detail=str(e)) from e

        return wrapper  # type: ignore

    return decorator
