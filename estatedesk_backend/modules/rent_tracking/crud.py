"""CRUD operations for rent tracking."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.base_crud import BaseCRUD
from .models import RentTrackingEntry


class RentTrackingCRUD(BaseCRUD[RentTrackingEntry]):
    default_relationships = ["assigned_property", "tenant"]
    default_order_by = "rent_month"

    async def get_for_month(
        self, db: AsyncSession, account_id: int, rent_month: str
    ) -> list[RentTrackingEntry]:
        """Entries for one month, latest payment first."""
        result = await db.execute(
            select(RentTrackingEntry)
            .where(
                RentTrackingEntry.account_id == account_id,
                RentTrackingEntry.rent_month == rent_month,
            )
            .order_by(
                RentTrackingEntry.payment_date.desc(), RentTrackingEntry.id.desc()
            )
        )
        return list(result.scalars().all())


rent_tracking_crud = RentTrackingCRUD(RentTrackingEntry)
