"""Common schemas and utilities shared across modules."""

from .schemas import (
    AffectedRows,
    BaseResponse,
    ConfirmationRequest,
    CreatedResponse,
    OptionalDate,
    OptionalEmail,
    OptionalFloat,
    OptionalInt,
    OptionalStr,
)

__all__ = [
    "BaseResponse",
    "CreatedResponse",
    "AffectedRows",
    "ConfirmationRequest",
    "OptionalStr",
    "OptionalInt",
    "OptionalFloat",
    "OptionalDate",
    "OptionalEmail",
]
