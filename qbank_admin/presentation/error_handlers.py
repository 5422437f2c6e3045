import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel

from qbank_admin.infrastructure.exceptions import (
    ConstraintViolationError,
    InfrastructureError,
    NotFoundError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)

# First path segment after /api -> entity label in "Invalid <entity> data"
_ENTITY_BY_PATH = {
    "questions": "question",
    "passages": "passage",
    "question-attempts": "attempt",
    "question-types": "question type",
    "internal-types": "internal type",
}


def _entity_for(request: Request) -> str:
    parts = [p for p in request.url.path.split("/") if p]
    if len(parts) >= 2 and parts[0] == "api":
        return _ENTITY_BY_PATH.get(parts[1], "request")
    return "request"


def _field_errors(exc: RequestValidationError) -> List[Dict[str, str]]:
    """Flatten pydantic errors to dotted field paths, without the body/query prefix."""
    errors = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ())]
        if loc and loc[0] in ("path", "query"):
            # Route parameters are snake_case in Python; report them like body fields
            loc = [to_camel(p) if "_" in p else p for p in loc[1:]]
        elif loc and loc[0] in ("body", "form"):
            loc = loc[1:]
        errors.append({"field": ".".join(loc) or "body", "message": err.get("msg", "Invalid value")})
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = _field_errors(exc)
        logger.warning(f"Validation failed for {request.method} {request.url.path}: {errors}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": f"Invalid {_entity_for(request)} data", "errors": errors},
        )

    @app.exception_handler(ValidationFailedError)
    async def validation_failed_handler(request: Request, exc: ValidationFailedError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": exc.message, "errors": exc.errors},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"message": f"{exc.entity} not found"},
        )

    @app.exception_handler(ConstraintViolationError)
    async def constraint_violation_handler(request: Request, exc: ConstraintViolationError):
        content: Dict[str, Any] = {"message": exc.message, "references": exc.references}
        if exc.detail:
            content["error"] = exc.detail
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=content)

    @app.exception_handler(InfrastructureError)
    async def infrastructure_handler(request: Request, exc: InfrastructureError):
        logger.error(f"Infrastructure failure on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": exc.message, "error": exc.detail},
        )

    # Global Exception Handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Global unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "An internal server error occurred.", "error": str(exc)},
        )
