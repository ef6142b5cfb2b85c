"""CRUD operations for properties."""

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.base_crud import BaseCRUD
from .models import Property


class PropertyCRUD(BaseCRUD[Property]):
    async def get_by_name(
        self, db: AsyncSession, account_id: int, name: str
    ) -> Property | None:
        """First property with this exact name (used by spreadsheet imports)."""
        result = await db.execute(
            select(Property)
            .where(and_(Property.account_id == account_id, Property.name == name))
            .order_by(Property.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def find_duplicate(
        self,
        db: AsyncSession,
        account_id: int,
        name: str,
        electricity_number: str | None,
        water_number: str | None,
        exclude_id: int | None = None,
    ) -> Property | None:
        """A property with the same name sharing a non-null utility number."""
        utility_matches = []
        if electricity_number:
            utility_matches.append(Property.electricity_number == electricity_number)
        if water_number:
            utility_matches.append(Property.water_number == water_number)
        if not utility_matches:
            return None

        query = select(Property).where(
            and_(
                Property.account_id == account_id,
                Property.name == name,
                or_(*utility_matches),
            )
        )
        if exclude_id is not None:
            query = query.where(Property.id != exclude_id)

        result = await db.execute(query.limit(1))
        return result.scalar_one_or_none()


property_crud = PropertyCRUD(Property)
