"""Maintenance request model."""

import enum
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ...database import AccountOwned, Base, TimestampMixin


class MaintenancePriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MaintenanceStatus(str, enum.Enum):
    """Usual statuses; updates may store any other string as well."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class MaintenanceRequest(AccountOwned, TimestampMixin, Base):
    __tablename__ = "maintenance_requests"

    property_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("properties.id", ondelete="SET NULL"), index=True
    )
    tenant_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("tenants.id", ondelete="SET NULL"), index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    priority: Mapped[str] = mapped_column(
        String(20), nullable=False, default=MaintenancePriority.MEDIUM.value
    )
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=MaintenanceStatus.PENDING.value, index=True
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    assigned_property = relationship("Property")
    tenant = relationship("Tenant")

    @property
    def property_name(self) -> str | None:
        return self.assigned_property.name if self.assigned_property else None

    @property
    def tenant_first_name(self) -> str | None:
        return self.tenant.first_name if self.tenant else None

    @property
    def tenant_last_name(self) -> str | None:
        return self.tenant.last_name if self.tenant else None

    @property
    def is_completed(self) -> bool:
        return self.status == MaintenanceStatus.COMPLETED.value
