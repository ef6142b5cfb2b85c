"""Maintenance request API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse
from . import services
from .schemas import MaintenanceCreate, MaintenanceResponse, MaintenanceUpdate

router = APIRouter(prefix="/maintenance", tags=["Maintenance"])


@router.get("", response_model=BaseResponse[list[MaintenanceResponse]])
async def list_requests(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    requests = await services.list_requests(db, current_user.id)
    return BaseResponse(
        success=True,
        data=[MaintenanceResponse.model_validate(r) for r in requests],
    )


@router.post("", response_model=BaseResponse[MaintenanceResponse])
async def create_request(
    data: MaintenanceCreate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    request = await services.create_request(db, current_user.id, data)
    return BaseResponse(
        success=True,
        message="Maintenance request created successfully",
        data=MaintenanceResponse.model_validate(request),
    )


@router.put("/{request_id}", response_model=BaseResponse[MaintenanceResponse])
async def update_request(
    request_id: int,
    data: MaintenanceUpdate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    request = await services.update_request(db, current_user.id, request_id, data)
    return BaseResponse(
        success=True,
        message="Maintenance request updated successfully",
        data=MaintenanceResponse.model_validate(request),
    )


@router.delete("/{request_id}", response_model=BaseResponse[None])
async def delete_request(
    request_id: int,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Delete a completed maintenance request."""
    await services.delete_request(db, current_user.id, request_id)
    return BaseResponse(
        success=True, message="Maintenance request deleted successfully"
    )
