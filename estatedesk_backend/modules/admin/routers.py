"""Admin control plane routes.

Every route except login re-reads the caller's account and requires the
admin role on the stored row.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import ValidationError
from ...database import get_db
from ..auth import services as auth_services
from ..auth.dependencies import AdminAccount
from ..auth.schemas import TokenResponse
from ..commons import BaseResponse, ConfirmationRequest, CreatedResponse
from . import services
from .schemas import (
    AdminLoginRequest,
    AdminStats,
    AdminUserCreate,
    AdminUserResponse,
    AdminUserUpdate,
    ResetSummary,
    SystemInfo,
    UsernameUpdate,
)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/login", response_model=BaseResponse[TokenResponse])
async def admin_login(
    data: AdminLoginRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    if not data.username or not data.password:
        raise ValidationError("Username and password are required")

    account = await auth_services.authenticate_account(
        db, data.username, data.password, admin=True
    )
    return BaseResponse(
        success=True,
        message="Admin login successful",
        data=auth_services.issue_token(
            account, request.app.state.settings, admin=True
        ),
    )


@router.get("/dashboard", response_model=BaseResponse[AdminStats])
async def admin_dashboard(
    admin: AdminAccount,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return BaseResponse(success=True, data=await services.get_stats(db))


@router.get("/users", response_model=BaseResponse[list[AdminUserResponse]])
async def list_users(
    admin: AdminAccount,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    accounts = await services.list_users(db)
    return BaseResponse(
        success=True,
        data=[AdminUserResponse.model_validate(a) for a in accounts],
    )


@router.post("/users", response_model=BaseResponse[CreatedResponse])
async def create_user(
    data: AdminUserCreate,
    request: Request,
    admin: AdminAccount,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    account = await services.create_user(db, data, request.app.state.settings)
    return BaseResponse(
        success=True,
        message="User created successfully",
        data=CreatedResponse(id=account.id),
    )


@router.put("/users/{account_id}", response_model=BaseResponse[AdminUserResponse])
async def update_user(
    account_id: int,
    data: AdminUserUpdate,
    request: Request,
    admin: AdminAccount,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    account = await services.update_user(
        db, account_id, data, request.app.state.settings
    )
    return BaseResponse(
        success=True,
        message="User updated successfully",
        data=AdminUserResponse.model_validate(account),
    )


@router.put(
    "/users/{account_id}/username", response_model=BaseResponse[AdminUserResponse]
)
async def rename_user(
    account_id: int,
    data: UsernameUpdate,
    request: Request,
    admin: AdminAccount,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    account = await services.rename_user(
        db, account_id, data.username, request.app.state.settings
    )
    return BaseResponse(
        success=True,
        message="Username updated successfully",
        data=AdminUserResponse.model_validate(account),
    )


@router.delete("/users/{account_id}", response_model=BaseResponse[ResetSummary])
async def delete_user(
    account_id: int,
    request: Request,
    admin: AdminAccount,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    summary = await services.delete_user(db, account_id, request.app.state.settings)
    return BaseResponse(
        success=True,
        message="User account and all data deleted successfully.",
        data=summary,
    )


@router.post(
    "/users/{account_id}/reset-data", response_model=BaseResponse[ResetSummary]
)
async def reset_user_data(
    account_id: int,
    data: ConfirmationRequest,
    admin: AdminAccount,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    summary = await services.reset_user_data(db, account_id, data.confirm)
    return BaseResponse(
        success=True, message="User data reset successfully.", data=summary
    )


@router.post("/reset-database", response_model=BaseResponse[ResetSummary])
async def reset_database(
    data: ConfirmationRequest,
    admin: AdminAccount,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Delete all domain data for every account."""
    summary = await services.reset_all_data(db, data.confirm)
    return BaseResponse(
        success=True,
        message="Database reset successfully. All user data has been deleted.",
        data=summary,
    )


@router.get("/system-info", response_model=BaseResponse[SystemInfo])
async def system_info(request: Request, admin: AdminAccount):
    info = services.system_info(request.app.state.database, request.app.state.settings)
    return BaseResponse(success=True, data=info)
