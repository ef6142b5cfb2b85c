"""Property API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse, CreatedResponse
from . import services
from .schemas import (
    PropertyCreate,
    PropertyResponse,
    PropertyUpdate,
    TenantsExpiredResponse,
)

router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get("", response_model=BaseResponse[list[PropertyResponse]])
async def list_properties(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    properties = await services.list_properties(db, current_user.id)
    return BaseResponse(
        success=True,
        data=[PropertyResponse.model_validate(p) for p in properties],
    )


@router.post("", response_model=BaseResponse[CreatedResponse])
async def create_property(
    data: PropertyCreate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    prop = await services.create_property(db, current_user.id, data)
    return BaseResponse(
        success=True,
        message="Property added successfully",
        data=CreatedResponse(id=prop.id),
    )


@router.get("/{property_id}", response_model=BaseResponse[PropertyResponse])
async def get_property(
    property_id: int,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    prop = await services.get_property(db, current_user.id, property_id)
    return BaseResponse(success=True, data=PropertyResponse.model_validate(prop))


@router.put("/{property_id}", response_model=BaseResponse[PropertyResponse])
async def update_property(
    property_id: int,
    data: PropertyUpdate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Update a property; setting status to vacant expires its tenants."""
    prop, expired = await services.update_property(db, current_user.id, property_id, data)
    message = "Property updated successfully"
    if expired:
        message += f". Updated {expired} tenants to expired status"
    return BaseResponse(
        success=True,
        message=message,
        data=PropertyResponse.model_validate(prop),
    )


@router.delete("/{property_id}", response_model=BaseResponse[None])
async def delete_property(
    property_id: int,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    await services.delete_property(db, current_user.id, property_id)
    return BaseResponse(success=True, message="Property deleted successfully")


@router.post(
    "/{property_id}/update-tenants-vacant",
    response_model=BaseResponse[TenantsExpiredResponse],
)
async def update_tenants_vacant(
    property_id: int,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Mark every tenant of the property as expired."""
    count = await services.expire_property_tenants(db, current_user.id, property_id)
    return BaseResponse(
        success=True,
        message=f"Updated {count} tenants to expired status",
        data=TenantsExpiredResponse(property_id=property_id, updated_count=count),
    )
