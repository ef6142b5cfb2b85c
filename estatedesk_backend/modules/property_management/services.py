"""Property business logic."""

from decimal import Decimal
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError, ResourceAlreadyExistsError, ValidationError
from ...core.logging import get_logger
from ..tenant_management.crud import tenant_crud
from .crud import property_crud
from .models import Property, PropertyStatus
from .schemas import PropertyCreate, PropertyUpdate

logger = get_logger(__name__)

DEFAULT_CURRENCY = "USD"
REQUIRED_FIELDS = ("name", "address", "type")
NON_NULLABLE_FIELDS = ("status", "currency")
VALID_STATUSES = [status.value for status in PropertyStatus]


def duplicate_message(name: str) -> str:
    return (
        f'Duplicate property found. Property with name "{name}" '
        f"and same electricity/water number already exists."
    )


def _normalize(values: dict[str, Any]) -> dict[str, Any]:
    """Convert validated schema values into column values."""
    if values.get("status") is not None:
        status = values["status"].strip().lower()
        if status not in VALID_STATUSES:
            raise ValidationError(
                f"Status must be one of: {', '.join(VALID_STATUSES)}", field="status"
            )
        values["status"] = status
    if values.get("currency") is not None:
        values["currency"] = values["currency"].strip().upper()
    for field in ("bathrooms", "rent_amount"):
        if values.get(field) is not None:
            values[field] = Decimal(str(values[field]))
    for field in NON_NULLABLE_FIELDS:
        if field in values and values[field] is None:
            del values[field]
    return values


async def _ensure_unique(
    db: AsyncSession,
    account_id: int,
    name: str,
    electricity_number: str | None,
    water_number: str | None,
    exclude_id: int | None = None,
) -> None:
    duplicate = await property_crud.find_duplicate(
        db, account_id, name, electricity_number, water_number, exclude_id=exclude_id
    )
    if duplicate:
        raise ResourceAlreadyExistsError(duplicate_message(name))


async def list_properties(db: AsyncSession, account_id: int) -> list[Property]:
    return await property_crud.get_multi(db, account_id)


async def get_property(db: AsyncSession, account_id: int, property_id: int) -> Property:
    prop = await property_crud.get(db, account_id, property_id)
    if not prop:
        raise NotFoundError("Property not found")
    return prop


async def create_property(
    db: AsyncSession,
    account_id: int,
    data: PropertyCreate,
    commit: bool = True,
) -> Property:
    """Create a property.

    With ``commit=False`` the row is only flushed, so bulk imports can run
    each row inside its own savepoint.
    """
    values = data.model_dump()
    if any(not values.get(field) for field in REQUIRED_FIELDS):
        raise ValidationError("Name, address, and type are required")

    values = _normalize(values)
    values.setdefault("currency", DEFAULT_CURRENCY)
    values.setdefault("status", PropertyStatus.VACANT.value)

    await _ensure_unique(
        db,
        account_id,
        values["name"],
        values.get("electricity_number"),
        values.get("water_number"),
    )

    prop = await property_crud.create(db, values, account_id)
    if commit:
        await db.commit()
        logger.info("Property created", extra={"property_id": prop.id})
    return prop


async def update_property(
    db: AsyncSession,
    account_id: int,
    property_id: int,
    data: PropertyUpdate,
) -> tuple[Property, int]:
    """Apply a partial update.

    Explicitly setting the status to vacant expires every tenant of the
    property in the same transaction. Returns the property and the number
    of tenants expired.
    """
    prop = await property_crud.get(db, account_id, property_id)
    if not prop:
        raise NotFoundError("Property not found or access denied")

    values = data.model_dump(exclude_unset=True)
    if any(field in values and not values[field] for field in REQUIRED_FIELDS):
        raise ValidationError("Name, address, and type are required")
    values = _normalize(values)

    name = values.get("name", prop.name)
    electricity_number = values.get("electricity_number", prop.electricity_number)
    water_number = values.get("water_number", prop.water_number)
    await _ensure_unique(
        db, account_id, name, electricity_number, water_number, exclude_id=prop.id
    )

    prop = await property_crud.update(db, prop, values)

    expired = 0
    if values.get("status") == PropertyStatus.VACANT.value:
        expired = await tenant_crud.expire_for_property(db, account_id, prop.id)

    await db.commit()
    if expired:
        logger.info(
            "Property vacated",
            extra={"property_id": prop.id, "tenants_expired": expired},
        )
    return prop, expired


async def delete_property(db: AsyncSession, account_id: int, property_id: int) -> None:
    prop = await property_crud.get(db, account_id, property_id)
    if not prop:
        raise NotFoundError("Property not found or access denied")

    await property_crud.delete(db, prop)
    await db.commit()
    logger.info("Property deleted", extra={"property_id": property_id})


async def expire_property_tenants(
    db: AsyncSession, account_id: int, property_id: int
) -> int:
    """Set every tenant of the property to expired."""
    if not await property_crud.exists(db, account_id, id=property_id):
        raise NotFoundError("Property not found or access denied")

    count = await tenant_crud.expire_for_property(db, account_id, property_id)
    await db.commit()
    return count
