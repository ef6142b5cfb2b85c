"""Rent tracking business logic.

Every payment is mirrored in the financial ledger. The entry and its ledger
record are flushed in the same transaction and committed together.
"""

from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError, ValidationError
from ...core.logging import get_logger
from ...core.utils import (
    is_blank,
    is_row_id,
    is_valid_month,
    parse_date,
    parse_decimal,
    parse_int,
)
from ...core.validators import ValidationPipeline
from ..financial.crud import financial_crud
from ..financial.models import RecordType
from ..property_management.crud import property_crud
from ..tenant_management.crud import tenant_crud
from .crud import rent_tracking_crud
from .models import PAYMENT_DETAIL_FIELDS, PaymentMethod, RentTrackingEntry
from .schemas import RentPaymentIn

logger = get_logger(__name__)

NOT_FOUND = "Rent tracking record not found or access denied"
PAYMENT_METHODS = [method.value for method in PaymentMethod]
REQUIRED_FIELDS = (
    "property_id",
    "tenant_id",
    "rent_month",
    "due_date",
    "total_amount",
    "payment_method",
    "payment_amount",
    "payment_date",
)
DETAIL_FIELDS = [field for fields in PAYMENT_DETAIL_FIELDS.values() for field in fields]


def _amount(value: Any) -> Decimal | None:
    """A strictly positive amount, or None."""
    try:
        amount = parse_decimal(value)
    except ValueError:
        return None
    return amount if amount is not None and amount > 0 else None


def _date(value: Any) -> date | None:
    try:
        return parse_date(value)
    except ValueError:
        return None


def _id(value: Any) -> int | None:
    try:
        record_id = parse_int(value)
    except ValueError:
        return None
    return record_id if is_row_id(record_id) else None


def _method(data: RentPaymentIn) -> str:
    return (data.payment_method or "").strip().lower()


def _payment_within_total(data: RentPaymentIn) -> bool:
    return _amount(data.payment_amount) <= _amount(data.total_amount)


def _dates_valid(data: RentPaymentIn) -> bool:
    if _date(data.due_date) is None or _date(data.payment_date) is None:
        return False
    return is_blank(data.cheque_date) or _date(data.cheque_date) is not None


def _owned(db: AsyncSession, crud, account_id: int, value: Any):
    async def check() -> bool:
        record_id = _id(value)
        return record_id is not None and await crud.exists(db, account_id, id=record_id)

    return check


async def _validate(
    db: AsyncSession, account_id: int, data: RentPaymentIn
) -> dict[str, Any]:
    """Validate a payment in reporting order and return column values."""
    await (
        ValidationPipeline()
        .require(
            lambda: not any(is_blank(getattr(data, f)) for f in REQUIRED_FIELDS),
            ValidationError("Missing required fields"),
        )
        .require(
            lambda: is_valid_month(data.rent_month.strip()),
            ValidationError("Rent month must be in YYYY-MM format", field="rent_month"),
        )
        .require(
            lambda: _method(data) in PAYMENT_METHODS,
            ValidationError(
                f"Payment method must be one of: {', '.join(PAYMENT_METHODS)}",
                field="payment_method",
            ),
        )
        .require(
            lambda: _amount(data.total_amount) is not None,
            ValidationError("Total amount must be a positive number", field="total_amount"),
        )
        .require(
            lambda: _amount(data.payment_amount) is not None,
            ValidationError(
                "Payment amount must be a positive number", field="payment_amount"
            ),
        )
        .require(
            lambda: _payment_within_total(data),
            ValidationError(
                "Payment amount cannot exceed total amount", field="payment_amount"
            ),
        )
        .require(
            lambda: _dates_valid(data),
            ValidationError("Invalid date format"),
        )
        .require(
            _owned(db, property_crud, account_id, data.property_id),
            ValidationError("Property not found or access denied"),
        )
        .require(
            _owned(db, tenant_crud, account_id, data.tenant_id),
            ValidationError("Tenant not found or access denied"),
        )
        .run()
    )

    method = _method(data)
    total = _amount(data.total_amount)
    payment = _amount(data.payment_amount)
    values = {
        "property_id": _id(data.property_id),
        "tenant_id": _id(data.tenant_id),
        "rent_month": data.rent_month.strip(),
        "due_date": _date(data.due_date),
        "total_amount": total,
        "currency": (data.currency or "USD").strip().upper(),
        "payment_method": method,
        "payment_amount": payment,
        "payment_date": _date(data.payment_date),
        "notes": data.notes,
    }

    # Only the chosen method's detail fields are kept
    details = PAYMENT_DETAIL_FIELDS[method]
    for field in DETAIL_FIELDS:
        values[field] = getattr(data, field) if field in details else None

    if method == PaymentMethod.CHEQUE.value:
        values["cheque_date"] = _date(data.cheque_date)
        values["cheque_status"] = data.cheque_status or "pending"
    elif method == PaymentMethod.PARTIAL.value:
        try:
            balance = parse_decimal(data.partial_balance)
        except ValueError:
            raise ValidationError(
                "Partial balance must be a number", field="partial_balance"
            )
        values["partial_balance"] = total - payment if balance is None else balance

    return values


def _ledger_values(values: dict[str, Any]) -> dict[str, Any]:
    """The financial record that mirrors a rent payment."""
    method = values["payment_method"]
    record_type = (
        RecordType.PARTIAL_RENT if method == PaymentMethod.PARTIAL.value else RecordType.RENT
    )
    return {
        "property_id": values["property_id"],
        "tenant_id": values["tenant_id"],
        "type": record_type.value,
        "amount": values["payment_amount"],
        "currency": values["currency"],
        "description": f"{method.capitalize()} payment for {values['rent_month']}",
        "record_date": values["payment_date"],
    }


async def list_payments(db: AsyncSession, account_id: int) -> list[RentTrackingEntry]:
    """Rent entries, most recent rent month first."""
    return await rent_tracking_crud.get_multi(db, account_id)


async def get_payment(
    db: AsyncSession, account_id: int, entry_id: int
) -> RentTrackingEntry:
    entry = await rent_tracking_crud.get(db, account_id, entry_id)
    if not entry:
        raise NotFoundError(NOT_FOUND)
    return entry


async def track_payment(
    db: AsyncSession, account_id: int, data: RentPaymentIn
) -> RentTrackingEntry:
    """Record a rent payment together with its ledger record."""
    values = await _validate(db, account_id, data)

    entry = await rent_tracking_crud.create(db, values, account_id)
    record = await financial_crud.create(db, _ledger_values(values), account_id)
    await db.commit()

    logger.info(
        "Rent payment tracked",
        extra={
            "entry_id": entry.id,
            "financial_record_id": record.id,
            "payment_method": entry.payment_method,
            "rent_month": entry.rent_month,
        },
    )
    return await rent_tracking_crud.get(db, account_id, entry.id, populate_existing=True)


async def update_payment(
    db: AsyncSession, account_id: int, entry_id: int, data: RentPaymentIn
) -> RentTrackingEntry:
    """Replace an entry's values; the ledger record is left as first written."""
    entry = await rent_tracking_crud.get(db, account_id, entry_id)
    if not entry:
        raise NotFoundError(NOT_FOUND)

    values = await _validate(db, account_id, data)
    await rent_tracking_crud.update(db, entry, values)
    await db.commit()
    return await rent_tracking_crud.get(db, account_id, entry_id, populate_existing=True)
