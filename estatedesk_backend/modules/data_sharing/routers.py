"""Data sharing routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse
from . import services
from .schemas import (
    ShareCreate,
    ShareCreated,
    SharedSnapshot,
    ShareImportRequest,
    ShareImportResult,
)

router = APIRouter(tags=["Data Sharing"])


@router.post("/share-data", response_model=BaseResponse[ShareCreated])
async def create_share(
    data: ShareCreate,
    request: Request,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    share = await services.create_share(
        db, current_user.id, data, request.app.state.settings
    )
    return BaseResponse(success=True, message="Share link created", data=share)


@router.get("/shared-data/{token}", response_model=BaseResponse[SharedSnapshot])
async def get_shared_data(
    token: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Public: the token is the credential."""
    snapshot = await services.get_shared_data(db, token)
    return BaseResponse(success=True, data=snapshot)


@router.post("/import-shared-data", response_model=BaseResponse[ShareImportResult])
async def import_shared_data(
    data: ShareImportRequest,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    result = await services.import_shared_data(db, current_user.id, data.share_token)
    return BaseResponse(
        success=True,
        message=f"Successfully imported {result.imported_count} items",
        data=result,
    )
