"""Property models."""

import enum
from decimal import Decimal

from sqlalchemy import Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...database import AccountOwned, Base, TimestampMixin


class PropertyStatus(str, enum.Enum):
    """Property occupancy status."""

    VACANT = "vacant"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"


class Property(AccountOwned, TimestampMixin, Base):
    """A rentable property owned by one account."""

    __tablename__ = "properties"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    bedrooms: Mapped[int | None] = mapped_column(Integer)
    bathrooms: Mapped[Decimal | None] = mapped_column(Numeric(4, 1))
    square_feet: Mapped[int | None] = mapped_column(Integer)
    rent_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    currency: Mapped[str] = mapped_column(String(10), nullable=False, default="USD")
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=PropertyStatus.VACANT.value
    )

    # Utility account numbers, used with the name to detect duplicates
    electricity_number: Mapped[str | None] = mapped_column(String(100))
    water_number: Mapped[str | None] = mapped_column(String(100))

    __table_args__ = (Index("ix_properties_account_name", "account_id", "name"),)

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, name={self.name}, status={self.status})>"
