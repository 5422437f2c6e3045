from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Annotated, List, Literal, Optional


class CamelModel(BaseModel):
    """Snake_case attributes in Python, camelCase keys on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _upper_letter(value):
    if isinstance(value, str):
        return value.strip().upper()
    return value


OptionLetter = Annotated[Literal["A", "B", "C", "D"], BeforeValidator(_upper_letter)]
RecordStatus = Literal["draft", "active", "inactive"]


def ensure_not_blank(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError("must not be blank")
    return value


NonBlankStr = Annotated[str, AfterValidator(ensure_not_blank)]


def reject_null(value):
    """Partial updates may omit required fields but may not clear them."""
    if value is None:
        raise ValueError("must not be null")
    return value


# ------------------ Error Schemas ------------------

class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    message: str
    errors: Optional[List[FieldError]] = None
    error: Optional[str] = None
    references: Optional[List[int]] = None
