"""Tenant and cheque schemas."""

from datetime import date, datetime

from pydantic import BaseModel

from ..commons import OptionalDate, OptionalFloat, OptionalInt, OptionalStr


class ChequeIn(BaseModel):
    cheque_number: OptionalStr = None
    bank_name: OptionalStr = None
    cheque_date: OptionalDate = None
    amount: OptionalFloat = None
    is_security: bool = False


class ChequeResponse(BaseModel):
    id: int
    cheque_number: str | None = None
    bank_name: str | None = None
    cheque_date: date | None = None
    amount: float | None = None
    is_security: bool

    class Config:
        from_attributes = True


class TenantFields(BaseModel):
    """Writable tenant fields.

    ``cheques`` replaces the tenant's whole cheque set when present; on
    update, omitting the key leaves existing cheques untouched.
    """

    first_name: OptionalStr = None
    last_name: OptionalStr = None
    email: OptionalStr = None
    phone: OptionalStr = None
    nationality: OptionalStr = None
    property_id: OptionalInt = None
    lease_start: OptionalDate = None
    lease_end: OptionalDate = None
    rent_amount: OptionalFloat = None
    currency: OptionalStr = None
    status: OptionalStr = None
    free_month_type: OptionalStr = None
    free_month_date: OptionalStr = None
    cheques: list[ChequeIn] | None = None


class TenantCreate(TenantFields):
    pass


class TenantUpdate(TenantFields):
    pass


class TenantResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    nationality: str | None = None
    property_id: int | None = None
    property_name: str | None = None
    property_address: str | None = None
    lease_start: date | None = None
    lease_end: date | None = None
    rent_amount: float | None = None
    currency: str
    status: str
    free_month_type: str | None = None
    free_month_date: str | None = None
    cheques: list[ChequeResponse] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
