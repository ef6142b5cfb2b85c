"""Authentication and profile schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from ..commons import OptionalStr


class RegisterRequest(BaseModel):
    """Self-service registration."""

    username: OptionalStr = None
    email: OptionalStr = None
    password: OptionalStr = None


class LoginRequest(BaseModel):
    username: OptionalStr = None
    password: OptionalStr = None


class AccountSummary(BaseModel):
    id: int
    username: str
    email: str

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    """Session token returned by register, login and refresh."""

    token: str
    token_type: str = "bearer"
    expires_in: int
    user: AccountSummary


class AuthenticatedUser(BaseModel):
    """Caller identity decoded from a session token (no database read)."""

    id: int
    username: str
    role: str | None = None


class ProfileResponse(BaseModel):
    id: int
    username: str
    email: str
    phone: str | None = None
    address: str | None = None
    preferences: dict[str, Any] | None = None
    created_at: datetime | None = None
    last_login: datetime | None = None

    class Config:
        from_attributes = True


class ProfileUpdateRequest(BaseModel):
    """Profile changes; every change requires the current password."""

    current_password: OptionalStr = None
    new_password: OptionalStr = None
    email: OptionalStr = None
    phone: str | None = None
    address: str | None = None
    preferences: dict[str, Any] | None = None
