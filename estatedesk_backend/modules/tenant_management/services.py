"""Tenant management business logic services."""

from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError, ValidationError
from ...core.logging import get_logger
from ...core.utils import is_valid_email, is_valid_month, shift_month
from ...core.validators import ValidationPipeline
from ..property_management.crud import property_crud
from .crud import tenant_crud
from .models import FreeMonthType, Tenant, TenantStatus
from .schemas import ChequeIn, TenantCreate, TenantUpdate

logger = get_logger(__name__)

VALID_STATUSES = [status.value for status in TenantStatus]
FREE_MONTH_TYPES = [kind.value for kind in FreeMonthType]


def resolve_free_month(
    free_month_type: str | None,
    lease_start: date | None,
    lease_end: date | None,
    custom_month: str | None = None,
) -> str | None:
    """Resolve a free-month concession to a YYYY-MM value.

    ``first`` is the lease-start month, ``last`` the month before the lease
    ends and ``custom`` the caller's own month.
    """
    if not free_month_type:
        return None

    if free_month_type == FreeMonthType.FIRST.value:
        return lease_start.strftime("%Y-%m") if lease_start else None
    if free_month_type == FreeMonthType.LAST.value:
        return shift_month(lease_end, -1).strftime("%Y-%m") if lease_end else None
    if free_month_type == FreeMonthType.CUSTOM.value:
        month = (custom_month or "")[:7]
        if not is_valid_month(month):
            raise ValidationError(
                "Free month must be in YYYY-MM format", field="free_month_date"
            )
        return month

    raise ValidationError(
        f"Free month type must be one of: {', '.join(FREE_MONTH_TYPES)}",
        field="free_month_type",
    )


def _cheque_values(cheques: list[ChequeIn]) -> list[dict[str, Any]]:
    values = []
    for cheque in cheques:
        item = cheque.model_dump()
        if item["amount"] is not None:
            item["amount"] = Decimal(str(item["amount"]))
        values.append(item)
    return values


def _normalize(values: dict[str, Any]) -> dict[str, Any]:
    if values.get("status") is not None:
        status = values["status"].strip().lower()
        if status not in VALID_STATUSES:
            raise ValidationError(
                f"Status must be one of: {', '.join(VALID_STATUSES)}", field="status"
            )
        values["status"] = status
    else:
        values.pop("status", None)
    if values.get("currency") is not None:
        values["currency"] = values["currency"].strip().upper()
    else:
        values.pop("currency", None)
    if values.get("free_month_type") is not None:
        values["free_month_type"] = values["free_month_type"].strip().lower()
    if values.get("rent_amount") is not None:
        values["rent_amount"] = Decimal(str(values["rent_amount"]))
    return values


def _validation_pipeline(
    db: AsyncSession, account_id: int, values: dict[str, Any]
) -> ValidationPipeline:
    """Checks shared by create and update, in reporting order."""
    return (
        ValidationPipeline()
        .require(
            lambda: all(values.get(f) for f in ("first_name", "last_name", "email")),
            ValidationError("First name, last name, and email are required"),
        )
        .require(
            lambda: is_valid_email(values.get("email")),
            ValidationError("Invalid email format", field="email"),
        )
        .require_owned(
            db,
            property_crud,
            account_id,
            values.get("property_id"),
            "Property not found or access denied",
        )
    )


async def _reload(db: AsyncSession, account_id: int, tenant_id: int) -> Tenant:
    return await tenant_crud.get(db, account_id, tenant_id, populate_existing=True)


async def list_tenants(db: AsyncSession, account_id: int) -> list[Tenant]:
    return await tenant_crud.get_multi(db, account_id)


async def get_tenant(db: AsyncSession, account_id: int, tenant_id: int) -> Tenant:
    tenant = await tenant_crud.get(db, account_id, tenant_id)
    if not tenant:
        raise NotFoundError("Tenant not found")
    return tenant


async def create_tenant(
    db: AsyncSession,
    account_id: int,
    data: TenantCreate,
    commit: bool = True,
) -> Tenant:
    """Create a tenant together with its cheques in one transaction."""
    values = data.model_dump(exclude={"cheques"})
    await _validation_pipeline(db, account_id, values).run()

    values = _normalize(values)
    values["free_month_date"] = resolve_free_month(
        values.get("free_month_type"),
        values.get("lease_start"),
        values.get("lease_end"),
        values.get("free_month_date"),
    )

    tenant = Tenant(**values, account_id=account_id)
    tenant_crud.replace_cheques(tenant, _cheque_values(data.cheques or []))
    db.add(tenant)
    await db.flush()

    if not commit:
        return tenant

    await db.commit()
    logger.info(
        "Tenant created",
        extra={"tenant_id": tenant.id, "cheques": len(tenant.cheques)},
    )
    return await _reload(db, account_id, tenant.id)


async def update_tenant(
    db: AsyncSession,
    account_id: int,
    tenant_id: int,
    data: TenantUpdate,
) -> Tenant:
    """Update a tenant; a supplied cheque list replaces the stored one atomically."""
    tenant = await tenant_crud.get(db, account_id, tenant_id)
    if not tenant:
        raise NotFoundError("Tenant not found or access denied")

    values = data.model_dump(exclude_unset=True, exclude={"cheques"})
    merged = {
        "first_name": tenant.first_name,
        "last_name": tenant.last_name,
        "email": tenant.email,
        **values,
    }
    # Only a newly supplied property needs its ownership re-checked
    merged["property_id"] = values.get("property_id")
    await _validation_pipeline(db, account_id, merged).run()

    values = _normalize(values)
    if {"free_month_type", "free_month_date", "lease_start", "lease_end"} & values.keys():
        free_month_type = values.get("free_month_type", tenant.free_month_type)
        values["free_month_date"] = resolve_free_month(
            free_month_type,
            values.get("lease_start", tenant.lease_start),
            values.get("lease_end", tenant.lease_end),
            values.get("free_month_date", tenant.free_month_date),
        )

    for field, value in values.items():
        setattr(tenant, field, value)

    if data.cheques is not None:
        tenant_crud.replace_cheques(tenant, _cheque_values(data.cheques))

    await db.commit()
    logger.info("Tenant updated", extra={"tenant_id": tenant.id})
    return await _reload(db, account_id, tenant.id)


async def delete_tenant(db: AsyncSession, account_id: int, tenant_id: int) -> None:
    tenant = await tenant_crud.get(db, account_id, tenant_id)
    if not tenant:
        raise NotFoundError("Tenant not found or access denied")

    await tenant_crud.delete(db, tenant)
    await db.commit()
    logger.info("Tenant deleted", extra={"tenant_id": tenant_id})
