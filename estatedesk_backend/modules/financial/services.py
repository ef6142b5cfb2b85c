"""Financial ledger business logic."""

from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError, ValidationError
from ...core.logging import get_logger
from ...core.utils import parse_date, parse_decimal
from ...core.validators import ValidationPipeline
from ..property_management.crud import property_crud
from ..tenant_management.crud import tenant_crud
from .crud import financial_crud
from .models import FinancialRecord
from .schemas import FinancialRecordIn

logger = get_logger(__name__)

NOT_FOUND = "Financial record not found or access denied"


def _positive_amount(value: Any) -> Decimal | None:
    try:
        amount = parse_decimal(value)
    except ValueError:
        return None
    return amount if amount is not None and amount > 0 else None


def _valid_date(value: Any) -> date | None:
    try:
        return parse_date(value)
    except ValueError:
        return None


async def _validate(
    db: AsyncSession, account_id: int, data: FinancialRecordIn
) -> dict[str, Any]:
    """Run the ledger checks in order and return column values."""
    await (
        ValidationPipeline()
        .require(
            lambda: bool(data.type)
            and data.amount not in (None, "")
            and data.record_date not in (None, ""),
            ValidationError("Type, amount, and date are required"),
        )
        .require(
            lambda: _positive_amount(data.amount) is not None,
            ValidationError("Amount must be a positive number", field="amount"),
        )
        .require(
            lambda: _valid_date(data.record_date) is not None,
            ValidationError("Invalid date format", field="date"),
        )
        .require_owned(
            db, property_crud, account_id, data.property_id,
            "Property not found or access denied",
        )
        .require_owned(
            db, tenant_crud, account_id, data.tenant_id,
            "Tenant not found or access denied",
        )
        .run()
    )
    return {
        "property_id": data.property_id,
        "tenant_id": data.tenant_id,
        "type": data.type.strip(),
        "amount": _positive_amount(data.amount),
        "currency": (data.currency or "USD").strip().upper(),
        "description": data.description,
        "record_date": _valid_date(data.record_date),
    }


async def list_records(db: AsyncSession, account_id: int) -> list[FinancialRecord]:
    """Ledger entries, most recent transaction date first."""
    return await financial_crud.get_multi(db, account_id)


async def create_record(
    db: AsyncSession, account_id: int, data: FinancialRecordIn
) -> FinancialRecord:
    values = await _validate(db, account_id, data)
    record = await financial_crud.create(db, values, account_id)
    await db.commit()
    logger.info(
        "Financial record created",
        extra={"record_id": record.id, "record_type": record.type},
    )
    return await financial_crud.get(db, account_id, record.id, populate_existing=True)


async def update_record(
    db: AsyncSession, account_id: int, record_id: int, data: FinancialRecordIn
) -> FinancialRecord:
    record = await financial_crud.get(db, account_id, record_id)
    if not record:
        raise NotFoundError(NOT_FOUND)

    values = await _validate(db, account_id, data)
    await financial_crud.update(db, record, values)
    await db.commit()
    return await financial_crud.get(db, account_id, record_id, populate_existing=True)


async def delete_record(db: AsyncSession, account_id: int, record_id: int) -> None:
    record = await financial_crud.get(db, account_id, record_id)
    if not record:
        raise NotFoundError(NOT_FOUND)

    await financial_crud.delete(db, record)
    await db.commit()
