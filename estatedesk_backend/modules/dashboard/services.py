"""Dashboard aggregation and account fixtures."""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import BusinessLogicError
from ...core.logging import get_logger
from ...core.utils import current_month
from ..financial.crud import financial_crud
from ..maintenance.crud import maintenance_crud
from ..property_management.crud import property_crud
from ..property_management.models import Property, PropertyStatus
from ..rent_tracking.crud import rent_tracking_crud
from ..rent_tracking.models import RentTrackingEntry
from ..tenant_management.crud import tenant_crud
from ..tenant_management.models import Cheque, Tenant, TenantStatus
from .schemas import (
    AccountDataCleared,
    DashboardStats,
    PaidRentProperty,
    PendingRentProperty,
    VacantProperty,
)
from .seed import SAMPLE_PROPERTIES

logger = get_logger(__name__)

PROPERTY_COLUMNS = (
    Property.id,
    Property.name,
    Property.address,
    Property.rent_amount,
    Property.currency,
)
TENANT_COLUMNS = (Tenant.first_name, Tenant.last_name, Tenant.email, Tenant.phone)


def _active_tenant_property_ids(account_id: int):
    return select(Tenant.property_id).where(
        Tenant.account_id == account_id,
        Tenant.status == TenantStatus.ACTIVE.value,
        Tenant.property_id.is_not(None),
    )


def _occupied_with_active_tenant(account_id: int):
    """Occupied properties joined to their active tenants."""
    return (
        select(*PROPERTY_COLUMNS, *TENANT_COLUMNS)
        .join(Tenant, Tenant.property_id == Property.id)
        .where(
            Property.account_id == account_id,
            Property.status == PropertyStatus.OCCUPIED.value,
            Tenant.status == TenantStatus.ACTIVE.value,
        )
    )


async def get_dashboard(db: AsyncSession, account_id: int) -> DashboardStats:
    """Occupancy, tenant and rent status for the current UTC month."""
    month = current_month()
    occupied_ids = _active_tenant_property_ids(account_id)

    occupied = await db.scalar(
        select(func.count(func.distinct(Property.id)))
        .join(Tenant, Tenant.property_id == Property.id)
        .where(
            Property.account_id == account_id,
            Tenant.status == TenantStatus.ACTIVE.value,
        )
    )
    vacant = await db.scalar(
        select(func.count(Property.id)).where(
            Property.account_id == account_id, Property.id.not_in(occupied_ids)
        )
    )

    paid_this_month = select(RentTrackingEntry.property_id).where(
        RentTrackingEntry.account_id == account_id,
        RentTrackingEntry.rent_month == month,
    )
    pending_rows = await db.execute(
        _occupied_with_active_tenant(account_id)
        .where(Property.id.not_in(paid_this_month))
        .distinct()
        .order_by(Property.name)
    )
    paid_rows = await db.execute(
        _occupied_with_active_tenant(account_id)
        .add_columns(
            RentTrackingEntry.payment_date,
            RentTrackingEntry.payment_amount,
            RentTrackingEntry.payment_method,
        )
        .join(RentTrackingEntry, RentTrackingEntry.property_id == Property.id)
        .where(RentTrackingEntry.rent_month == month)
        .distinct()
        .order_by(RentTrackingEntry.payment_date.desc())
    )
    vacant_rows = await db.execute(
        select(
            *PROPERTY_COLUMNS, Property.type, Property.bedrooms, Property.bathrooms
        )
        .where(Property.account_id == account_id, Property.id.not_in(occupied_ids))
        .order_by(Property.name)
    )

    return DashboardStats(
        rent_month=month,
        total_properties=await property_crud.count(db, account_id),
        occupied_properties=occupied or 0,
        vacant_properties=vacant or 0,
        active_tenants=await tenant_crud.count_active(db, account_id),
        pending_maintenance=await maintenance_crud.count_pending(db, account_id),
        pending_rent_properties=[
            PendingRentProperty.model_validate(dict(row))
            for row in pending_rows.mappings()
        ],
        rent_paid_properties=[
            PaidRentProperty.model_validate(dict(row)) for row in paid_rows.mappings()
        ],
        vacant_properties_list=[
            VacantProperty.model_validate(dict(row)) for row in vacant_rows.mappings()
        ],
    )


async def create_sample_data(db: AsyncSession, account_id: int) -> int:
    """Give an empty account a handful of properties to explore."""
    if await property_crud.exists(db, account_id):
        raise BusinessLogicError(
            "Properties already exist for this user. Please clear the database first."
        )

    for values in SAMPLE_PROPERTIES:
        await property_crud.create(db, dict(values), account_id)
    await db.commit()

    logger.info("Sample data created", extra={"properties": len(SAMPLE_PROPERTIES)})
    return len(SAMPLE_PROPERTIES)


async def clear_account_data(db: AsyncSession, account_id: int) -> AccountDataCleared:
    """Delete every domain row the account owns, children first.

    Flushes only; the caller commits. The account row itself is kept.
    """
    rent_tracking = await rent_tracking_crud.delete_for_account(db, account_id)
    financial = await financial_crud.delete_for_account(db, account_id)
    maintenance = await maintenance_crud.delete_for_account(db, account_id)
    cheques = await db.execute(
        delete(Cheque).where(
            Cheque.tenant_id.in_(
                select(Tenant.id).where(Tenant.account_id == account_id)
            )
        )
    )
    tenants = await tenant_crud.delete_for_account(db, account_id)
    properties = await property_crud.delete_for_account(db, account_id)

    return AccountDataCleared(
        rent_tracking=rent_tracking,
        financial_records=financial,
        maintenance_requests=maintenance,
        cheques=cheques.rowcount or 0,
        tenants=tenants,
        properties=properties,
    )


async def reset_account(db: AsyncSession, account_id: int) -> AccountDataCleared:
    cleared = await clear_account_data(db, account_id)
    await db.commit()
    logger.info("Account data reset", extra=cleared.model_dump())
    return cleared
