"""Spreadsheet import and export.

Imports validate the header row strictly before touching any data. Each
data row then runs inside its own savepoint, so a failing row is rolled
back and reported while the others are kept.
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import EstateDeskException, ValidationError
from ...core.logging import get_logger
from ...core.utils import parse_date
from ..financial.crud import financial_crud
from ..maintenance.crud import maintenance_crud
from ..property_management import services as property_services
from ..property_management.crud import property_crud
from ..property_management.models import Property
from ..property_management.schemas import PropertyCreate
from ..rent_tracking.crud import rent_tracking_crud
from ..tenant_management import services as tenant_services
from ..tenant_management.models import Tenant, TenantStatus
from ..tenant_management.schemas import TenantCreate
from . import spreadsheet
from .schemas import (
    CombinedImportResult,
    CombinedSummary,
    ImportedProperty,
    ImportedTenant,
    ImportResult,
)

logger = get_logger(__name__)

T = TypeVar("T")


def check_upload(
    filename: str | None,
    content_type: str | None,
    size: int,
    max_bytes: int,
) -> None:
    """Reject uploads that are missing, not Excel, or too large."""
    if not filename:
        raise ValidationError("No file uploaded")
    if content_type not in spreadsheet.EXCEL_MEDIA_TYPES:
        raise ValidationError("Only Excel files are allowed", value=content_type)
    if size > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        raise ValidationError(f"File exceeds the {limit_mb}MB upload limit")


def _describe(error: Exception) -> str:
    if isinstance(error, EstateDeskException):
        return error.message
    if isinstance(error, SchemaValidationError):
        first = error.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        return f"Invalid value for {field}: {first['msg']}"
    if isinstance(error, IntegrityError):
        return "Row violates a database constraint"
    return str(error)


async def _in_savepoint(
    db: AsyncSession,
    result: ImportResult,
    row_number: int,
    operation: Callable[[], Awaitable[T]],
) -> T | None:
    """Run one row's writes in a savepoint, recording the outcome."""
    try:
        async with db.begin_nested():
            created = await operation()
    except (EstateDeskException, SchemaValidationError, IntegrityError, ValueError) as e:
        result.add_error(row_number, _describe(e))
        return None
    result.success_count += 1
    return created


def _date_cell(value: Any, label: str):
    try:
        return parse_date(value)
    except ValueError:
        raise ValidationError(f"Invalid {label}", value=value)


def _property_payload(row: dict[str, Any], prefix: str = "") -> PropertyCreate:
    text, number = spreadsheet.cell_text, spreadsheet.cell_number
    return PropertyCreate(
        name=text(row[f"{prefix}Name"]),
        address=text(row[f"{prefix}Address"]),
        type=text(row[f"{prefix}Type"]),
        status=text(row[f"{prefix}Status"]),
        bedrooms=number(row["Bedrooms"]),
        bathrooms=number(row["Bathrooms"]),
        electricity_number=text(row["Electricity Number"]),
        water_number=text(row["Water Number"]),
        square_feet=number(row["Square Feet"]),
        rent_amount=number(row[f"{prefix}Rent Amount"]),
        currency=text(row[f"{prefix}Currency"]),
    )


def _imported_property(prop: Property) -> ImportedProperty:
    return ImportedProperty(
        id=prop.id,
        name=prop.name,
        address=prop.address,
        type=prop.type,
        status=prop.status,
        rent_amount=prop.rent_amount,
        currency=prop.currency,
    )


def _imported_tenant(tenant: Tenant, property_name: str | None) -> ImportedTenant:
    return ImportedTenant(
        id=tenant.id,
        name=tenant.full_name,
        email=tenant.email,
        property_name=property_name,
        rent_amount=tenant.rent_amount,
        currency=tenant.currency,
        lease_start=tenant.lease_start,
        lease_end=tenant.lease_end,
    )


async def import_properties(
    db: AsyncSession, account_id: int, content: bytes
) -> ImportResult:
    rows = spreadsheet.read_sheet(content)
    spreadsheet.validate_headers(rows[0], spreadsheet.PROPERTY_COLUMNS)

    result = ImportResult()
    for row_number, row in spreadsheet.data_rows(rows, spreadsheet.PROPERTY_COLUMNS):

        async def create_row(row=row):
            return await property_services.create_property(
                db, account_id, _property_payload(row), commit=False
            )

        await _in_savepoint(db, result, row_number, create_row)

    await db.commit()
    logger.info(
        "Properties imported",
        extra={"imported": result.success_count, "failed": result.error_count},
    )
    return result


async def import_tenants(
    db: AsyncSession, account_id: int, content: bytes
) -> ImportResult:
    rows = spreadsheet.read_sheet(content)
    spreadsheet.validate_headers(rows[0], spreadsheet.TENANT_COLUMNS)

    result = ImportResult()
    for row_number, row in spreadsheet.data_rows(rows, spreadsheet.TENANT_COLUMNS):

        async def create_row(row=row):
            text = spreadsheet.cell_text
            first_name, email = text(row["First Name"]), text(row["Email"])
            if not first_name or not email:
                raise ValidationError("First Name and Email are required")

            property_id = None
            property_name = text(row["Property Name"])
            if property_name:
                prop = await property_crud.get_by_name(db, account_id, property_name)
                if prop is None:
                    raise ValidationError(f'Property "{property_name}" not found')
                property_id = prop.id

            payload = TenantCreate(
                first_name=first_name,
                last_name=text(row["Last Name"]),
                email=email,
                phone=text(row["Phone"]),
                property_id=property_id,
                rent_amount=spreadsheet.cell_number(row["Rent Amount"]),
                currency=text(row["Currency"]),
                lease_start=_date_cell(row["Lease Start Date"], "Lease Start Date"),
                lease_end=_date_cell(row["Lease End Date"], "Lease End Date"),
                status=TenantStatus.ACTIVE.value,
            )
            return await tenant_services.create_tenant(
                db, account_id, payload, commit=False
            )

        await _in_savepoint(db, result, row_number, create_row)

    await db.commit()
    logger.info(
        "Tenants imported",
        extra={"imported": result.success_count, "failed": result.error_count},
    )
    return result


def _has_tenant_data(row: dict[str, Any]) -> bool:
    return bool(
        spreadsheet.cell_text(row["Tenant First Name"])
        or spreadsheet.cell_text(row["Tenant Email"])
    )


async def import_combined(
    db: AsyncSession, account_id: int, content: bytes
) -> CombinedImportResult:
    """Import properties with an optional tenant on the same row.

    The tenant is attached to the property created from its row and takes
    that property's currency. A failing tenant does not undo its property.
    """
    rows = spreadsheet.read_sheet(content)
    spreadsheet.validate_headers(rows[0], spreadsheet.COMBINED_COLUMNS)

    properties, tenants = ImportResult(), ImportResult()
    summary = CombinedSummary()
    text = spreadsheet.cell_text

    for row_number, row in spreadsheet.data_rows(rows, spreadsheet.COMBINED_COLUMNS):
        with_tenant = _has_tenant_data(row)
        if with_tenant and not (
            text(row["Tenant First Name"]) and text(row["Tenant Email"])
        ):
            tenants.add_error(
                row_number,
                "Tenant First Name and Email are required when tenant data is provided",
            )
            with_tenant = False

        async def create_property(row=row):
            return await property_services.create_property(
                db, account_id, _property_payload(row, prefix="Property "), commit=False
            )

        prop = await _in_savepoint(db, properties, row_number, create_property)
        if prop is None:
            continue
        summary.properties.append(_imported_property(prop))

        if not with_tenant:
            continue

        async def create_tenant(row=row, prop=prop):
            payload = TenantCreate(
                first_name=text(row["Tenant First Name"]),
                last_name=text(row["Tenant Last Name"]),
                email=text(row["Tenant Email"]),
                phone=text(row["Tenant Phone"]),
                property_id=prop.id,
                rent_amount=spreadsheet.cell_number(row["Tenant Rent Amount"]),
                currency=prop.currency,
                lease_start=_date_cell(row["Lease Start Date"], "Lease Start Date"),
                lease_end=_date_cell(row["Lease End Date"], "Lease End Date"),
                status=TenantStatus.ACTIVE.value,
            )
            return await tenant_services.create_tenant(
                db, account_id, payload, commit=False
            )

        tenant = await _in_savepoint(db, tenants, row_number, create_tenant)
        if tenant is not None:
            summary.tenants.append(_imported_tenant(tenant, prop.name))

    await db.commit()
    logger.info(
        "Combined sheet imported",
        extra={
            "properties": properties.success_count,
            "tenants": tenants.success_count,
            "failed": properties.error_count + tenants.error_count,
        },
    )
    return CombinedImportResult(
        properties=properties,
        tenants=tenants,
        summary=summary,
        total_success=properties.success_count + tenants.success_count,
        total_errors=properties.error_count + tenants.error_count,
    )


def combined_message(result: CombinedImportResult) -> str:
    parts = ["Combined upload completed."]
    if result.properties.success_count:
        parts.append(f"{result.properties.success_count} properties imported.")
    if result.tenants.success_count:
        parts.append(f"{result.tenants.success_count} tenants imported.")
    if result.total_errors:
        parts.append(f"{result.total_errors} errors occurred.")
    return " ".join(parts)


async def export_workbook(db: AsyncSession, account_id: int) -> bytes:
    """Every domain table of the account, one sheet each."""
    props = await property_crud.get_multi(db, account_id)
    tenants = await tenant_services.list_tenants(db, account_id)
    requests = await maintenance_crud.get_multi(db, account_id)
    records = await financial_crud.get_multi(db, account_id)
    payments = await rent_tracking_crud.get_multi(db, account_id)

    sheets = {
        "Properties": (
            spreadsheet.PROPERTY_COLUMNS,
            [
                (p.name, p.address, p.type, p.status, p.bedrooms, p.bathrooms,
                 p.electricity_number, p.water_number, p.square_feet,
                 p.rent_amount, p.currency)
                for p in props
            ],
        ),
        "Tenants": (
            spreadsheet.TENANT_COLUMNS + ["Status"],
            [
                (t.first_name, t.last_name, t.email, t.phone, t.property_name,
                 t.rent_amount, t.currency, t.lease_start, t.lease_end, t.status)
                for t in tenants
            ],
        ),
        "Maintenance": (
            ["Title", "Description", "Property", "Tenant", "Priority", "Status"],
            [
                (m.title, m.description, m.property_name,
                 m.tenant.full_name if m.tenant else None, m.priority, m.status)
                for m in requests
            ],
        ),
        "Financial": (
            ["Date", "Type", "Amount", "Currency", "Description", "Property", "Tenant"],
            [
                (r.record_date, r.type, r.amount, r.currency, r.description,
                 r.property_name, r.tenant_name)
                for r in records
            ],
        ),
        "Rent Tracking": (
            ["Rent Month", "Property", "Tenant", "Due Date", "Total Amount",
             "Payment Amount", "Currency", "Payment Method", "Payment Date", "Notes"],
            [
                (e.rent_month, e.property_name,
                 e.tenant.full_name if e.tenant else None, e.due_date,
                 e.total_amount, e.payment_amount, e.currency, e.payment_method,
                 e.payment_date, e.notes)
                for e in payments
            ],
        ),
    }
    return spreadsheet.build_workbook(sheets)
