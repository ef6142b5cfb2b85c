"""Financial ledger model."""

import enum
from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ...database import AccountOwned, Base, TimestampMixin


class RecordType(str, enum.Enum):
    """Common ledger entry types; the column is free text."""

    RENT = "rent"
    PARTIAL_RENT = "partial_rent"
    EXPENSE = "expense"
    DEPOSIT = "deposit"


class FinancialRecord(AccountOwned, TimestampMixin, Base):
    __tablename__ = "financial_records"

    property_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("properties.id", ondelete="SET NULL"), index=True
    )
    tenant_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("tenants.id", ondelete="SET NULL"), index=True
    )
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(10), nullable=False, default="USD")
    description: Mapped[str | None] = mapped_column(Text)
    record_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    assigned_property = relationship("Property")
    tenant = relationship("Tenant")

    @property
    def property_name(self) -> str | None:
        return self.assigned_property.name if self.assigned_property else None

    @property
    def tenant_name(self) -> str | None:
        return self.tenant.full_name if self.tenant else None
