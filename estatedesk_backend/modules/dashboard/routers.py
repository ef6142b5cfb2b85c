"""Dashboard and account fixture routes.

These routes accept the development ``test`` bearer when it is enabled in
the settings.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ..auth.dependencies import FixtureUser
from ..commons import AffectedRows, BaseResponse
from . import services
from .schemas import AccountDataCleared, DashboardStats

router = APIRouter(tags=["Dashboard"])


@router.get("/dashboard", response_model=BaseResponse[DashboardStats])
async def get_dashboard(
    current_user: FixtureUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    stats = await services.get_dashboard(db, current_user.id)
    return BaseResponse(success=True, data=stats)


@router.post("/sample-data", response_model=BaseResponse[AffectedRows])
async def create_sample_data(
    current_user: FixtureUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    created = await services.create_sample_data(db, current_user.id)
    return BaseResponse(
        success=True,
        message=f"Successfully created {created} sample properties",
        data=AffectedRows(count=created),
    )


@router.post("/reset-database", response_model=BaseResponse[AccountDataCleared])
async def reset_database(
    current_user: FixtureUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    cleared = await services.reset_account(db, current_user.id)
    return BaseResponse(
        success=True, message="Database reset successfully for this user", data=cleared
    )
