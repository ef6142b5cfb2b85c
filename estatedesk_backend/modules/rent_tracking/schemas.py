"""Rent tracking schemas."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel

from ..commons import OptionalStr


class RentPaymentIn(BaseModel):
    """Rent payment payload, used for both create and full update.

    Ids, amounts and dates stay loosely typed here; the service validates
    them in a fixed order with its own messages.
    """

    property_id: int | str | None = None
    tenant_id: int | str | None = None
    rent_month: OptionalStr = None
    due_date: date | str | None = None
    total_amount: float | str | None = None
    currency: OptionalStr = None
    payment_method: OptionalStr = None
    payment_amount: float | str | None = None
    payment_date: date | str | None = None

    cash_received_by: OptionalStr = None
    cash_receipt_number: OptionalStr = None

    cheque_number: OptionalStr = None
    cheque_bank: OptionalStr = None
    cheque_date: date | str | None = None
    cheque_status: OptionalStr = None

    online_reference: OptionalStr = None
    online_bank: OptionalStr = None

    partial_reason: OptionalStr = None
    partial_balance: float | str | None = None
    partial_notes: OptionalStr = None

    notes: OptionalStr = None


class RentPaymentResponse(BaseModel):
    id: int
    property_id: int
    tenant_id: int
    property_name: str | None = None
    tenant_first_name: str | None = None
    tenant_last_name: str | None = None
    rent_month: str
    due_date: date
    total_amount: float
    currency: str
    payment_method: str
    payment_amount: float
    payment_date: date
    payment_details: dict[str, Any]
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
