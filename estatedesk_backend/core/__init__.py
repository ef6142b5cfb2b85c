"""Core infrastructure for the EstateDesk backend."""

from .base_crud import BaseCRUD
from .exceptions import (
    AccountLockedError,
    AuthenticationError,
    BusinessLogicError,
    EstateDeskException,
    NotFoundError,
    PermissionError,
    ResourceAlreadyExistsError,
    TokenExpiredError,
    ValidationError,
)
from .validators import ValidationPipeline

__all__ = [
    "BaseCRUD",
    "ValidationPipeline",
    "EstateDeskException",
    "ValidationError",
    "BusinessLogicError",
    "ResourceAlreadyExistsError",
    "AuthenticationError",
    "TokenExpiredError",
    "PermissionError",
    "NotFoundError",
    "AccountLockedError",
]
