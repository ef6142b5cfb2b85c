"""
Base CRUD operations for consistent data access patterns across all modules.

Every query is scoped to the owning account. Writes only flush; the calling
service decides when the unit of work commits.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select

from .utils import is_row_id

ModelType = TypeVar("ModelType")


class BaseCRUD(Generic[ModelType]):
    """
    Base CRUD class providing common account-scoped database operations.

    Attributes:
        model: SQLAlchemy model class (must carry ``account_id``)
        default_relationships: Relationships eager-loaded on every read
        default_order_by: Default ordering field
        default_order_desc: Whether default ordering is descending
    """

    default_relationships: list[str] = []
    default_order_by: str = "created_at"
    default_order_desc: bool = True

    def __init__(self, model: type[ModelType]):
        """Initialize CRUD operations for a specific model."""
        self.model = model

    def _apply_account_filter(self, query: Select, account_id: int) -> Select:
        return query.where(self.model.account_id == account_id)

    def _apply_custom_filters(
        self, query: Select, filters: dict[str, Any] | None = None
    ) -> Select:
        """Apply equality filters, skipping None values."""
        if not filters:
            return query

        for field_name, value in filters.items():
            if value is not None and hasattr(self.model, field_name):
                field = getattr(self.model, field_name)
                query = query.where(field == value)
        return query

    def _apply_relationships(
        self, query: Select, load_relationships: list[str] | None = None
    ) -> Select:
        relationships = (
            self.default_relationships
            if load_relationships is None
            else load_relationships
        )
        for relationship_name in relationships:
            relationship = getattr(self.model, relationship_name)
            query = query.options(selectinload(relationship))
        return query

    def _apply_ordering(self, query: Select, order_by: str | None = None) -> Select:
        field = getattr(self.model, order_by or self.default_order_by)
        if self.default_order_desc:
            return query.order_by(field.desc(), self.model.id.desc())
        return query.order_by(field, self.model.id)

    async def create(
        self,
        db: AsyncSession,
        obj_in: dict[str, Any],
        account_id: int,
    ) -> ModelType:
        """Add a new record owned by ``account_id`` and flush it."""
        db_obj = self.model(**obj_in, account_id=account_id)
        db.add(db_obj)
        await db.flush()
        return db_obj

    async def get(
        self,
        db: AsyncSession,
        account_id: int,
        id: int,
        load_relationships: list[str] | None = None,
        populate_existing: bool = False,
    ) -> ModelType | None:
        """Get one record, or None when it is missing or owned by someone else.

        ``populate_existing`` reloads an instance already in the session,
        relationships included.
        """
        if not is_row_id(id):
            return None

        query = select(self.model).where(self.model.id == id)
        query = self._apply_account_filter(query, account_id)
        query = self._apply_relationships(query, load_relationships)
        if populate_existing:
            query = query.execution_options(populate_existing=True)

        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_multi(
        self,
        db: AsyncSession,
        account_id: int,
        filters: dict[str, Any] | None = None,
        load_relationships: list[str] | None = None,
        order_by: str | None = None,
    ) -> list[ModelType]:
        """Get every record for the account."""
        query = select(self.model)
        query = self._apply_account_filter(query, account_id)
        query = self._apply_custom_filters(query, filters)
        query = self._apply_relationships(query, load_relationships)
        query = self._apply_ordering(query, order_by)

        result = await db.execute(query)
        return list(result.scalars().all())

    async def update(
        self,
        db: AsyncSession,
        db_obj: ModelType,
        obj_in: dict[str, Any],
    ) -> ModelType:
        for field, value in obj_in.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        await db.flush()
        return db_obj

    async def delete(self, db: AsyncSession, db_obj: ModelType) -> None:
        await db.delete(db_obj)
        await db.flush()

    async def delete_for_account(self, db: AsyncSession, account_id: int) -> int:
        """Bulk-delete every row the account owns; returns the row count."""
        result = await db.execute(
            delete(self.model).where(self.model.account_id == account_id)
        )
        return result.rowcount or 0

    async def exists(self, db: AsyncSession, account_id: int, **filters) -> bool:
        if filters.get("id") is not None and not is_row_id(filters["id"]):
            # Out-of-range ids cannot match any row
            return False

        query = select(func.count(self.model.id))
        query = self._apply_account_filter(query, account_id)
        query = self._apply_custom_filters(query, filters)

        result = await db.execute(query)
        return (result.scalar() or 0) > 0

    async def count(
        self, db: AsyncSession, account_id: int | None = None, **filters
    ) -> int:
        """Count records; without ``account_id`` the count spans all accounts."""
        query = select(func.count(self.model.id))
        if account_id is not None:
            query = self._apply_account_filter(query, account_id)
        query = self._apply_custom_filters(query, filters)

        result = await db.execute(query)
        return result.scalar() or 0
