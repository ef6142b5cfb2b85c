"""Authentication and profile API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ..commons import BaseResponse
from . import services
from .dependencies import AppSettings, CurrentUser
from .schemas import (
    LoginRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    RegisterRequest,
    TokenResponse,
)

router = APIRouter(tags=["Authentication"])
profile_router = APIRouter(prefix="/profile", tags=["Profile"])


@router.post("/register", response_model=BaseResponse[TokenResponse])
async def register(
    data: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    config: AppSettings,
):
    """Create an account and return a session token."""
    tokens = await services.register_account(db, data, config)
    return BaseResponse(
        success=True,
        message="User registered successfully",
        data=tokens,
    )


@router.post("/login", response_model=BaseResponse[TokenResponse])
async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    config: AppSettings,
):
    account = await services.authenticate_account(db, data.username, data.password)
    return BaseResponse(
        success=True,
        message="Login successful",
        data=services.issue_token(account, config),
    )


@router.post("/refresh-token", response_model=BaseResponse[TokenResponse])
async def refresh_token(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    config: AppSettings,
):
    """Re-issue a session token for the caller."""
    tokens = await services.refresh_session(db, current_user.id, config)
    return BaseResponse(
        success=True,
        message="Token refreshed successfully",
        data=tokens,
    )


@profile_router.get("", response_model=BaseResponse[ProfileResponse])
async def get_profile(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    account = await services.get_profile(db, current_user.id)
    return BaseResponse(success=True, data=ProfileResponse.model_validate(account))


@profile_router.put("/update", response_model=BaseResponse[ProfileResponse])
async def update_profile(
    data: ProfileUpdateRequest,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    config: AppSettings,
):
    """Update contact details, email or password (current password required)."""
    account = await services.update_profile(db, current_user.id, data, config)
    return BaseResponse(
        success=True,
        message="Profile updated successfully",
        data=ProfileResponse.model_validate(account),
    )
