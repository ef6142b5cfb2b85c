"""Data share model."""

import enum
from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from ...core.utils import as_utc, utc_now
from ...database import AccountOwned, Base, TimestampMixin


class ShareScope(str, enum.Enum):
    """Which part of an account a share exposes."""

    ALL = "all"
    PROPERTIES = "properties"
    TENANTS = "tenants"
    MAINTENANCE = "maintenance"
    FINANCIAL = "financial"


class DataShare(AccountOwned, TimestampMixin, Base):
    """A read-only link to one account's data, valid until ``expires_at``."""

    __tablename__ = "data_shares"

    share_token: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    recipient_email: Mapped[str | None] = mapped_column(String(255))
    data_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ShareScope.ALL.value
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    @property
    def is_expired(self) -> bool:
        return as_utc(self.expires_at) <= utc_now()

    def includes(self, scope: ShareScope) -> bool:
        return self.data_type in (ShareScope.ALL.value, scope.value)
