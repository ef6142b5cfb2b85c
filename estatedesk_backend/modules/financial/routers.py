"""Financial ledger API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse
from . import services
from .schemas import FinancialRecordIn, FinancialRecordResponse

router = APIRouter(prefix="/financial", tags=["Financial"])


@router.get("", response_model=BaseResponse[list[FinancialRecordResponse]])
async def list_records(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    records = await services.list_records(db, current_user.id)
    return BaseResponse(
        success=True,
        data=[FinancialRecordResponse.model_validate(r) for r in records],
    )


@router.post("", response_model=BaseResponse[FinancialRecordResponse])
async def create_record(
    data: FinancialRecordIn,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    record = await services.create_record(db, current_user.id, data)
    return BaseResponse(
        success=True,
        message="Financial record added successfully",
        data=FinancialRecordResponse.model_validate(record),
    )


@router.put("/{record_id}", response_model=BaseResponse[FinancialRecordResponse])
async def update_record(
    record_id: int,
    data: FinancialRecordIn,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    record = await services.update_record(db, current_user.id, record_id, data)
    return BaseResponse(
        success=True,
        message="Financial record updated successfully",
        data=FinancialRecordResponse.model_validate(record),
    )


@router.delete("/{record_id}", response_model=BaseResponse[None])
async def delete_record(
    record_id: int,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    await services.delete_record(db, current_user.id, record_id)
    return BaseResponse(success=True, message="Financial record deleted successfully")
