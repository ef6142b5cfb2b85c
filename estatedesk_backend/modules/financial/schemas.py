"""Financial ledger schemas.

The transaction date travels as ``date`` on the wire and is stored as
``record_date``.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from ..commons import OptionalInt, OptionalStr


class FinancialRecordIn(BaseModel):
    """Ledger entry payload.

    Amount and date are taken as given and checked by the service, so that
    malformed values get the ledger's own error messages.
    """

    property_id: OptionalInt = None
    tenant_id: OptionalInt = None
    type: OptionalStr = None
    amount: float | str | None = None
    currency: OptionalStr = None
    description: OptionalStr = None
    record_date: date | str | None = Field(default=None, alias="date")

    class Config:
        populate_by_name = True


class FinancialRecordResponse(BaseModel):
    id: int
    property_id: int | None = None
    tenant_id: int | None = None
    property_name: str | None = None
    tenant_name: str | None = None
    type: str
    amount: float
    currency: str
    description: str | None = None
    record_date: date = Field(alias="date")
    created_at: datetime | None = None

    class Config:
        from_attributes = True
        populate_by_name = True
