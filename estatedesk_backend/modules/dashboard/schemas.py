"""Dashboard schemas."""

from datetime import date

from pydantic import BaseModel


class PropertySummary(BaseModel):
    id: int
    name: str
    address: str
    rent_amount: float | None = None
    currency: str


class PendingRentProperty(PropertySummary):
    """An occupied property whose tenant has not paid this month."""

    first_name: str
    last_name: str
    email: str
    phone: str | None = None


class PaidRentProperty(PendingRentProperty):
    payment_date: date
    payment_amount: float
    payment_method: str


class VacantProperty(PropertySummary):
    type: str
    bedrooms: int | None = None
    bathrooms: float | None = None


class DashboardStats(BaseModel):
    rent_month: str
    total_properties: int
    occupied_properties: int
    vacant_properties: int
    active_tenants: int
    pending_maintenance: int
    pending_rent_properties: list[PendingRentProperty]
    rent_paid_properties: list[PaidRentProperty]
    vacant_properties_list: list[VacantProperty]


class AccountDataCleared(BaseModel):
    """Rows removed per table."""

    rent_tracking: int
    financial_records: int
    maintenance_requests: int
    cheques: int
    tenants: int
    properties: int
