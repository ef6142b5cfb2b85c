"""
Database configuration for the EstateDesk backend.

The engine and session factory live on a ``Database`` handle that the
application factory creates and stores on ``app.state``; request handlers
receive sessions through the ``get_db`` dependency.
"""

import logging
from collections.abc import AsyncIterator
from datetime import datetime

from fastapi import Request
from sqlalchemy import DateTime, ForeignKey, Integer, event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Mapped, declarative_base, declared_attr, mapped_column
from sqlalchemy.sql import func

from .config import Settings
from .core.utils import utc_now

logger = logging.getLogger(__name__)

# Base class
Base = declarative_base()


class TimestampMixin:
    """Mixin to add created and updated timestamps to models.

    Values are stamped client-side so they are readable right after a flush
    without another round trip (async sessions cannot lazy-load them).
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
        onupdate=utc_now,
    )


class AccountOwned:
    """Mixin for rows owned by exactly one account.

    Every owned table gets a surrogate integer key and an indexed
    ``account_id`` that cascades when the account is removed.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    @declared_attr
    def account_id(cls) -> Mapped[int]:
        return mapped_column(
            Integer,
            ForeignKey("accounts.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


def _engine_options(settings: Settings) -> dict:
    """Driver specific engine options."""
    url = settings.database_url
    if url.startswith("mysql+asyncmy"):
        return {
            "connect_args": {
                "ssl": {
                    "ssl_check_hostname": settings.database_ssl_check_hostname,
                    "ssl_verify_cert": settings.database_ssl_verify_cert,
                    "ssl_verify_identity": settings.database_ssl_verify_identity,
                },
            },
            "pool_pre_ping": True,
            "pool_recycle": 3600,
        }
    return {}


def _configure_sqlite_connection(dbapi_connection, connection_record):
    # Transactions are begun by _begin_sqlite_transaction, not the driver
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _begin_sqlite_transaction(conn):
    conn.exec_driver_sql("BEGIN")


class Database:
    """Owns the async engine and session factory for one application."""

    def __init__(self, settings: Settings):
        self.url = settings.database_url
        self.engine: AsyncEngine = create_async_engine(
            settings.database_url,
            echo=settings.database_echo,
            future=True,
            **_engine_options(settings),
        )
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _configure_sqlite_connection)
            event.listen(self.engine.sync_engine, "begin", _begin_sqlite_transaction)

        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    @property
    def backend(self) -> str:
        return self.engine.dialect.name

    async def create_all(self) -> None:
        """Create all tables from the model metadata (development and tests)."""
        import_models()
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created", extra={"backend": self.backend})

    async def dispose(self) -> None:
        await self.engine.dispose()


def import_models() -> None:
    """Register every model module with ``Base.metadata``."""
    from .modules.auth import models as auth_models  # noqa: F401
    from .modules.data_sharing import models as sharing_models  # noqa: F401
    from .modules.financial import models as financial_models  # noqa: F401
    from .modules.maintenance import models as maintenance_models  # noqa: F401
    from .modules.property_management import models as property_models  # noqa: F401
    from .modules.rent_tracking import models as rent_models  # noqa: F401
    from .modules.tenant_management import models as tenant_models  # noqa: F401


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Dependency to get a database session from the application's handle."""
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
