"""Property schemas."""

from datetime import datetime

from pydantic import BaseModel

from ..commons import OptionalFloat, OptionalInt, OptionalStr


class PropertyFields(BaseModel):
    """Writable property fields. Blank numbers arrive as "" and become null."""

    name: OptionalStr = None
    address: OptionalStr = None
    type: OptionalStr = None
    status: OptionalStr = None
    bedrooms: OptionalInt = None
    bathrooms: OptionalFloat = None
    square_feet: OptionalInt = None
    rent_amount: OptionalFloat = None
    currency: OptionalStr = None
    electricity_number: OptionalStr = None
    water_number: OptionalStr = None


class PropertyCreate(PropertyFields):
    pass


class PropertyUpdate(PropertyFields):
    """Partial update: only the keys present in the payload are applied."""

    pass


class PropertyResponse(BaseModel):
    id: int
    name: str
    address: str
    type: str
    status: str
    bedrooms: int | None = None
    bathrooms: float | None = None
    square_feet: int | None = None
    rent_amount: float | None = None
    currency: str
    electricity_number: str | None = None
    water_number: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class TenantsExpiredResponse(BaseModel):
    property_id: int
    updated_count: int
