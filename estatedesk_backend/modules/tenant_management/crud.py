"""CRUD operations for tenants and cheques."""

from typing import Any

from sqlalchemy import and_, update
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.base_crud import BaseCRUD
from .models import Cheque, Tenant, TenantStatus


class TenantCRUD(BaseCRUD[Tenant]):
    default_relationships = ["assigned_property", "cheques"]

    async def expire_for_property(
        self, db: AsyncSession, account_id: int, property_id: int
    ) -> int:
        """Set every tenant referencing the property to expired."""
        result = await db.execute(
            update(Tenant)
            .where(
                and_(
                    Tenant.account_id == account_id,
                    Tenant.property_id == property_id,
                )
            )
            .values(status=TenantStatus.EXPIRED.value)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0

    async def count_active(self, db: AsyncSession, account_id: int | None = None) -> int:
        return await self.count(db, account_id, status=TenantStatus.ACTIVE.value)

    def replace_cheques(self, tenant: Tenant, cheques: list[dict[str, Any]]) -> None:
        """Swap the tenant's cheque collection for a new one.

        The orphaned rows are deleted and the new ones inserted on the next
        flush, inside the caller's transaction.
        """
        tenant.cheques = [Cheque(**cheque) for cheque in cheques]


tenant_crud = TenantCRUD(Tenant)
