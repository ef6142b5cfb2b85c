"""Tenant and cheque models."""

import enum
from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ...database import AccountOwned, Base, TimestampMixin


class TenantStatus(str, enum.Enum):
    """Tenant status values."""

    ACTIVE = "active"
    EXPIRED = "expired"


class FreeMonthType(str, enum.Enum):
    """Which month of the lease is rent-free."""

    FIRST = "first"
    LAST = "last"
    CUSTOM = "custom"


class Tenant(AccountOwned, TimestampMixin, Base):
    """A renter, optionally assigned to one of the account's properties."""

    __tablename__ = "tenants"

    first_name: Mapped[str] = mapped_column(String(120), nullable=False)
    last_name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50))
    nationality: Mapped[str | None] = mapped_column(String(100))

    property_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("properties.id", ondelete="SET NULL"), index=True
    )

    # Lease
    lease_start: Mapped[date | None] = mapped_column(Date)
    lease_end: Mapped[date | None] = mapped_column(Date)
    rent_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    currency: Mapped[str] = mapped_column(String(10), nullable=False, default="USD")
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TenantStatus.ACTIVE.value, index=True
    )

    # Free month concession; free_month_date is the resolved YYYY-MM
    free_month_type: Mapped[str | None] = mapped_column(String(10))
    free_month_date: Mapped[str | None] = mapped_column(String(7))

    # Relationships
    assigned_property = relationship("Property")
    cheques: Mapped[list["Cheque"]] = relationship(
        "Cheque",
        back_populates="tenant",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Cheque.id",
    )

    @property
    def property_name(self) -> str | None:
        return self.assigned_property.name if self.assigned_property else None

    @property
    def property_address(self) -> str | None:
        return self.assigned_property.address if self.assigned_property else None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, name={self.full_name}, status={self.status})>"


class Cheque(TimestampMixin, Base):
    """A payment cheque held for a tenant; security cheques carry no date."""

    __tablename__ = "cheques"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tenant_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    cheque_number: Mapped[str | None] = mapped_column(String(100))
    bank_name: Mapped[str | None] = mapped_column(String(255))
    cheque_date: Mapped[date | None] = mapped_column(Date)
    amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    is_security: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="cheques")
