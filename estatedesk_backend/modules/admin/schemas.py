"""Admin control plane schemas."""

from datetime import datetime

from pydantic import BaseModel

from ..commons import OptionalStr


class AdminLoginRequest(BaseModel):
    username: OptionalStr = None
    password: OptionalStr = None


class AdminStats(BaseModel):
    """Row counts across every account; admins are not counted as users."""

    total_users: int
    total_properties: int
    total_tenants: int
    total_maintenance: int
    total_financial: int
    total_rent_tracking: int


class AdminUserResponse(BaseModel):
    id: int
    username: str
    email: str
    role: str
    created_at: datetime | None = None
    last_login: datetime | None = None
    expiry_date: datetime | None = None
    is_expired: bool = False
    is_locked: bool = False

    class Config:
        from_attributes = True


class AdminUserCreate(BaseModel):
    username: OptionalStr = None
    email: OptionalStr = None
    password: OptionalStr = None
    role: OptionalStr = None
    expiry_date: OptionalStr = None


class AdminUserUpdate(BaseModel):
    """Full replacement of an account's identity; a missing expiry clears it."""

    username: OptionalStr = None
    email: OptionalStr = None
    role: OptionalStr = None
    password: OptionalStr = None
    expiry_date: OptionalStr = None


class UsernameUpdate(BaseModel):
    username: OptionalStr = None


class ResetSummary(BaseModel):
    deleted_tables: list[str]
    rows_deleted: int
    account_id: int | None = None


class SystemInfo(BaseModel):
    server_time: datetime
    database_backend: str
    total_tables: int
    admin_user: str | None = None
    version: str
