"""Tenant management API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse
from . import services
from .schemas import TenantCreate, TenantResponse, TenantUpdate

router = APIRouter(prefix="/tenants", tags=["Tenants"])


@router.get("", response_model=BaseResponse[list[TenantResponse]])
async def list_tenants(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get tenants with their property and cheques."""
    tenants = await services.list_tenants(db, current_user.id)
    return BaseResponse(
        success=True,
        data=[TenantResponse.model_validate(t) for t in tenants],
    )


@router.post("", response_model=BaseResponse[TenantResponse])
async def create_tenant(
    data: TenantCreate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    tenant = await services.create_tenant(db, current_user.id, data)
    return BaseResponse(
        success=True,
        message="Tenant added successfully",
        data=TenantResponse.model_validate(tenant),
    )


@router.get("/{tenant_id}", response_model=BaseResponse[TenantResponse])
async def get_tenant(
    tenant_id: int,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    tenant = await services.get_tenant(db, current_user.id, tenant_id)
    return BaseResponse(success=True, data=TenantResponse.model_validate(tenant))


@router.put("/{tenant_id}", response_model=BaseResponse[TenantResponse])
async def update_tenant(
    tenant_id: int,
    data: TenantUpdate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    tenant = await services.update_tenant(db, current_user.id, tenant_id, data)
    return BaseResponse(
        success=True,
        message="Tenant updated successfully",
        data=TenantResponse.model_validate(tenant),
    )


@router.delete("/{tenant_id}", response_model=BaseResponse[None])
async def delete_tenant(
    tenant_id: int,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    await services.delete_tenant(db, current_user.id, tenant_id)
    return BaseResponse(success=True, message="Tenant deleted successfully")
