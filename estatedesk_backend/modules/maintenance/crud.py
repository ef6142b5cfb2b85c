"""CRUD operations for maintenance requests."""

from ...core.base_crud import BaseCRUD
from .models import MaintenanceRequest, MaintenanceStatus


class MaintenanceCRUD(BaseCRUD[MaintenanceRequest]):
    default_relationships = ["assigned_property", "tenant"]

    async def count_pending(self, db, account_id: int | None = None) -> int:
        return await self.count(db, account_id, status=MaintenanceStatus.PENDING.value)


maintenance_crud = MaintenanceCRUD(MaintenanceRequest)
