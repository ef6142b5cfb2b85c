"""Maintenance request schemas."""

from datetime import datetime

from pydantic import BaseModel

from ..commons import OptionalInt, OptionalStr


class MaintenanceCreate(BaseModel):
    property_id: OptionalInt = None
    tenant_id: OptionalInt = None
    title: OptionalStr = None
    description: OptionalStr = None
    priority: OptionalStr = None


class MaintenanceUpdate(BaseModel):
    """Status change; the status value itself is not restricted."""

    status: OptionalStr = None
    completed_at: datetime | None = None


class MaintenanceResponse(BaseModel):
    id: int
    property_id: int | None = None
    tenant_id: int | None = None
    property_name: str | None = None
    tenant_first_name: str | None = None
    tenant_last_name: str | None = None
    title: str
    description: str | None = None
    priority: str
    status: str
    completed_at: datetime | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True
