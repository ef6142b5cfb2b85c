"""CRUD operations for data shares."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.base_crud import BaseCRUD
from .models import DataShare


class DataShareCRUD(BaseCRUD[DataShare]):
    async def get_by_token(self, db: AsyncSession, token: str) -> DataShare | None:
        """Look a share up by token alone; shares are read across accounts."""
        result = await db.execute(
            select(DataShare).where(DataShare.share_token == token)
        )
        return result.scalar_one_or_none()


data_share_crud = DataShareCRUD(DataShare)
