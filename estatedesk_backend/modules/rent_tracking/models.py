"""Rent tracking model."""

import enum
from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy import Date, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ...database import AccountOwned, Base, TimestampMixin


class PaymentMethod(str, enum.Enum):
    """How a rent payment was made."""

    CASH = "cash"
    CHEQUE = "cheque"
    ONLINE = "online"
    PARTIAL = "partial"


# Method-specific columns, keyed by payment method
PAYMENT_DETAIL_FIELDS: dict[str, tuple[str, ...]] = {
    PaymentMethod.CASH.value: ("cash_received_by", "cash_receipt_number"),
    PaymentMethod.CHEQUE.value: (
        "cheque_number",
        "cheque_bank",
        "cheque_date",
        "cheque_status",
    ),
    PaymentMethod.ONLINE.value: ("online_reference", "online_bank"),
    PaymentMethod.PARTIAL.value: (
        "partial_reason",
        "partial_balance",
        "partial_notes",
    ),
}


class RentTrackingEntry(AccountOwned, TimestampMixin, Base):
    """One rent payment by a tenant for a property and month."""

    __tablename__ = "rent_tracking"

    property_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False
    )
    tenant_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False
    )
    rent_month: Mapped[str] = mapped_column(String(7), nullable=False)
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(10), nullable=False, default="USD")
    payment_method: Mapped[str] = mapped_column(String(20), nullable=False)
    payment_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    payment_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Cash
    cash_received_by: Mapped[str | None] = mapped_column(String(255))
    cash_receipt_number: Mapped[str | None] = mapped_column(String(100))

    # Cheque
    cheque_number: Mapped[str | None] = mapped_column(String(100))
    cheque_bank: Mapped[str | None] = mapped_column(String(255))
    cheque_date: Mapped[date | None] = mapped_column(Date)
    cheque_status: Mapped[str | None] = mapped_column(String(20), default="pending")

    # Online transfer
    online_reference: Mapped[str | None] = mapped_column(String(255))
    online_bank: Mapped[str | None] = mapped_column(String(255))

    # Partial payment
    partial_reason: Mapped[str | None] = mapped_column(Text)
    partial_balance: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    partial_notes: Mapped[str | None] = mapped_column(Text)

    notes: Mapped[str | None] = mapped_column(Text)

    assigned_property = relationship("Property")
    tenant = relationship("Tenant")

    __table_args__ = (
        Index("ix_rent_tracking_account_month", "account_id", "rent_month"),
    )

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
    def payment_details(self) -> dict[str, Any]:
        """The method-specific fields for this entry's payment method."""
        fields = PAYMENT_DETAIL_FIELDS.get(self.payment_method, ())
        return {field: getattr(self, field) for field in fields}

    def __repr__(self) -> str:
        return (
            f"<RentTrackingEntry(id={self.id}, month={self.rent_month}, "
            f"method={self.payment_method})>"
        )
