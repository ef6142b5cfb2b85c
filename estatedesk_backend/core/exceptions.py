"""
Custom exception classes for consistent error handling across all modules.

Each class carries the HTTP status the API renders it with, and an optional
machine-readable ``code`` for clients that branch on specific failures.
"""

from typing import Any


class EstateDeskException(Exception):
    """Base exception for all EstateDesk related errors."""

    status_code: int = 400
    code: str | None = None

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(EstateDeskException):
    """Raised when data validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class BusinessLogicError(EstateDeskException):
    """Raised when business logic constraints are violated."""

    pass


class ResourceAlreadyExistsError(EstateDeskException):
    """Raised when trying to create a resource that already exists."""

    pass


class AuthenticationError(EstateDeskException):
    """Raised when authentication fails."""

    status_code = 401

    def __init__(
        self,
        message: str = "Authentication failed",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)


class TokenExpiredError(AuthenticationError):
    """Raised when a session token is past its expiry."""

    code = "TOKEN_EXPIRED"

    def __init__(self, message: str = "Token expired"):
        super().__init__(message)


class PermissionError(EstateDeskException):
    """Raised when the caller lacks the role for an action."""

    status_code = 403


class NotFoundError(EstateDeskException):
    """Raised when a resource is not found or is owned by another account."""

    status_code = 404

    def __init__(
        self, message: str = "Resource not found", details: dict[str, Any] | None = None
    ):
        super().__init__(message, details)


class AccountLockedError(EstateDeskException):
    """Raised while an account is inside its lockout window."""

    status_code = 423
    code = "ACCOUNT_LOCKED"
