"""Common schemas shared across all modules."""

from datetime import date, datetime
from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, BeforeValidator, EmailStr, Field

from ...core.utils import MAX_ROW_ID, MIN_ROW_ID, utc_now

T = TypeVar("T")


def blank_to_none(value: Any) -> Any:
    """Form-style payloads send empty strings for untouched fields."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


# Optional scalars that accept "" as "not given"
OptionalStr = Annotated[str | None, BeforeValidator(blank_to_none)]
# Integers are bounded to what an INTEGER column stores
OptionalInt = Annotated[
    Annotated[int, Field(ge=MIN_ROW_ID, le=MAX_ROW_ID)] | None,
    BeforeValidator(blank_to_none),
]
OptionalFloat = Annotated[float | None, BeforeValidator(blank_to_none)]
OptionalDate = Annotated[date | None, BeforeValidator(blank_to_none)]
OptionalEmail = Annotated[EmailStr | None, BeforeValidator(blank_to_none)]


class BaseResponse(BaseModel, Generic[T]):
    """Base response schema for API responses."""

    success: bool = Field(
        default=True, description="Whether the request was successful"
    )
    message: str | None = Field(default=None, description="Response message")
    data: T | None = Field(default=None, description="Response data")
    error: Any | None = Field(default=None, description="Error details if any")
    timestamp: datetime = Field(
        default_factory=utc_now, description="Response timestamp"
    )


class CreatedResponse(BaseModel):
    """Identifier of a newly created row."""

    id: int


class AffectedRows(BaseModel):
    """Number of rows touched by a bulk operation."""

    count: int


class ConfirmationRequest(BaseModel):
    """Body of destructive operations guarded by a confirmation phrase."""

    confirm: str | None = None
