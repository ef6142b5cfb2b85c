"""Account model: credentials, role, lockout and expiry state."""

import enum
from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...core.utils import as_utc, utc_now
from ...database import Base, TimestampMixin


class AccountRole(str, enum.Enum):
    """Account roles."""

    MANAGER = "manager"
    ADMIN = "admin"


class Account(TimestampMixin, Base):
    """A login that owns properties, tenants and every other domain row."""

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50))
    address: Mapped[str | None] = mapped_column(Text)
    preferences: Mapped[dict | None] = mapped_column(JSON)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=AccountRole.MANAGER.value
    )

    # Security
    failed_attempts: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    locked_until: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    last_password_change: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True)
    )
    last_login: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    expiry_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    @property
    def is_admin(self) -> bool:
        return self.role == AccountRole.ADMIN.value

    @property
    def is_locked(self) -> bool:
        locked_until = as_utc(self.locked_until)
        return locked_until is not None and locked_until > utc_now()

    @property
    def is_expired(self) -> bool:
        expiry = as_utc(self.expiry_date)
        return expiry is not None and expiry <= utc_now()

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, username={self.username}, role={self.role})>"
