"""Rent tracking API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse
from . import services
from .schemas import RentPaymentIn, RentPaymentResponse

router = APIRouter(prefix="/rent-tracking", tags=["Rent Tracking"])


@router.get("", response_model=BaseResponse[list[RentPaymentResponse]])
async def list_payments(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    entries = await services.list_payments(db, current_user.id)
    return BaseResponse(
        success=True,
        data=[RentPaymentResponse.model_validate(e) for e in entries],
    )


@router.post("", response_model=BaseResponse[RentPaymentResponse])
async def track_payment(
    data: RentPaymentIn,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Record a payment and its matching financial record."""
    entry = await services.track_payment(db, current_user.id, data)
    return BaseResponse(
        success=True,
        message="Rent payment tracked successfully",
        data=RentPaymentResponse.model_validate(entry),
    )


@router.get("/{entry_id}", response_model=BaseResponse[RentPaymentResponse])
async def get_payment(
    entry_id: int,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    entry = await services.get_payment(db, current_user.id, entry_id)
    return BaseResponse(success=True, data=RentPaymentResponse.model_validate(entry))


@router.put("/{entry_id}", response_model=BaseResponse[RentPaymentResponse])
async def update_payment(
    entry_id: int,
    data: RentPaymentIn,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    entry = await services.update_payment(db, current_user.id, entry_id, data)
    return BaseResponse(
        success=True,
        message="Rent tracking record updated successfully",
        data=RentPaymentResponse.model_validate(entry),
    )
