"""Data sharing between accounts.

A share exposes a snapshot of its owner's data to anyone holding the token
until it expires. Importing copies that snapshot into the caller's account,
pointing copied references at the newly created rows.
"""

from datetime import timedelta
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import Settings
from ...core.exceptions import EstateDeskException, NotFoundError, ValidationError
from ...core.logging import get_logger
from ...core.utils import generate_token, utc_now
from ..financial.crud import financial_crud
from ..financial.models import FinancialRecord
from ..financial.schemas import FinancialRecordResponse
from ..maintenance.crud import maintenance_crud
from ..maintenance.models import MaintenanceRequest
from ..maintenance.schemas import MaintenanceResponse
from ..property_management.crud import property_crud
from ..property_management.models import Property
from ..property_management.schemas import PropertyResponse
from ..property_management.services import duplicate_message
from ..tenant_management.crud import tenant_crud
from ..tenant_management.models import Cheque, Tenant
from ..tenant_management.schemas import TenantResponse
from .crud import data_share_crud
from .models import DataShare, ShareScope
from .schemas import ShareCreate, ShareCreated, ShareImportResult, SharedSnapshot

logger = get_logger(__name__)

SHARE_SCOPES = [scope.value for scope in ShareScope]

PROPERTY_FIELDS = (
    "name", "address", "type", "status", "bedrooms", "bathrooms", "square_feet",
    "rent_amount", "currency", "electricity_number", "water_number",
)
TENANT_FIELDS = (
    "first_name", "last_name", "email", "phone", "nationality", "lease_start",
    "lease_end", "rent_amount", "currency", "status", "free_month_type",
    "free_month_date",
)
CHEQUE_FIELDS = ("cheque_number", "bank_name", "cheque_date", "amount", "is_security")
MAINTENANCE_FIELDS = ("title", "description", "priority", "status", "completed_at")
FINANCIAL_FIELDS = ("type", "amount", "currency", "description", "record_date")


def _copy(source: Any, fields: tuple[str, ...]) -> dict[str, Any]:
    return {field: getattr(source, field) for field in fields}


async def create_share(
    db: AsyncSession, account_id: int, data: ShareCreate, settings: Settings
) -> ShareCreated:
    data_type = (data.data_type or ShareScope.ALL.value).strip().lower()
    if data_type not in SHARE_SCOPES:
        raise ValidationError("Invalid data type", field="data_type", value=data_type)

    days = data.expires_in_days or settings.share_default_expiry_days
    if days < 1:
        raise ValidationError(
            "Share must stay valid for at least one day", field="expires_in_days"
        )
    try:
        expires_at = utc_now() + timedelta(days=days)
    except OverflowError:
        raise ValidationError(
            "Share expiry is too far in the future", field="expires_in_days"
        )

    share = await data_share_crud.create(
        db,
        {
            "share_token": generate_token(settings.share_token_length),
            "recipient_email": data.recipient_email,
            "data_type": data_type,
            "expires_at": expires_at,
        },
        account_id,
    )
    await db.commit()

    logger.info(
        "Data share created",
        extra={"share_id": share.id, "data_type": data_type, "expires_in_days": days},
    )
    return ShareCreated(
        share_token=share.share_token,
        share_link=f"{settings.frontend_url.rstrip('/')}?share={share.share_token}",
        expires_at=share.expires_at,
    )


async def get_active_share(db: AsyncSession, token: str | None) -> DataShare:
    share = await data_share_crud.get_by_token(db, token) if token else None
    if share is None or share.is_expired:
        raise NotFoundError("Share not found or expired")
    return share


async def _shared_rows(db: AsyncSession, share: DataShare) -> dict[str, list]:
    """The owner's rows for each scope the share covers."""
    owner = share.account_id
    rows: dict[str, list] = {}
    if share.includes(ShareScope.PROPERTIES):
        rows["properties"] = await property_crud.get_multi(
            db, owner, order_by="id"
        )
    if share.includes(ShareScope.TENANTS):
        rows["tenants"] = await tenant_crud.get_multi(db, owner, order_by="id")
    if share.includes(ShareScope.MAINTENANCE):
        rows["maintenance"] = await maintenance_crud.get_multi(
            db, owner, order_by="id"
        )
    if share.includes(ShareScope.FINANCIAL):
        rows["financial"] = await financial_crud.get_multi(db, owner, order_by="id")
    return rows


async def get_shared_data(db: AsyncSession, token: str) -> SharedSnapshot:
    """Snapshot of the shared data; an ``all`` share also names its owner."""
    share = await get_active_share(db, token)
    rows = await _shared_rows(db, share)

    serializers = {
        "properties": PropertyResponse,
        "tenants": TenantResponse,
        "maintenance": MaintenanceResponse,
        "financial": FinancialRecordResponse,
    }
    snapshot: SharedSnapshot = {
        key: [serializers[key].model_validate(row) for row in items]
        for key, items in rows.items()
    }
    if share.data_type == ShareScope.ALL.value:
        snapshot["shared_by"] = share.account_id
        snapshot["expires_at"] = share.expires_at
    return snapshot


class _Importer:
    """Copies shared rows into one account, one savepoint per row."""

    def __init__(self, db: AsyncSession, account_id: int):
        self.db = db
        self.account_id = account_id
        self.imported_count = 0
        self.errors: list[str] = []
        self.property_ids: dict[int, int] = {}
        self.tenant_ids: dict[int, int] = {}

    async def _insert(self, label: str, row: Any, check=None) -> Any | None:
        try:
            async with self.db.begin_nested():
                if check is not None:
                    await check()
                self.db.add(row)
                await self.db.flush()
        except (EstateDeskException, IntegrityError) as e:
            reason = e.message if isinstance(e, EstateDeskException) else str(e.orig)
            self.errors.append(f"{label}: {reason}")
            return None
        self.imported_count += 1
        return row

    async def properties(self, items: list[Property]) -> None:
        for source in items:
            values = _copy(source, PROPERTY_FIELDS)

            async def check(values=values):
                duplicate = await property_crud.find_duplicate(
                    self.db,
                    self.account_id,
                    values["name"],
                    values["electricity_number"],
                    values["water_number"],
                )
                if duplicate:
                    raise ValidationError(duplicate_message(values["name"]))

            copy = await self._insert(
                f"Property {source.name}",
                Property(**values, account_id=self.account_id),
                check,
            )
            if copy is not None:
                self.property_ids[source.id] = copy.id

    async def tenants(self, items: list[Tenant]) -> None:
        for source in items:
            copy = Tenant(
                **_copy(source, TENANT_FIELDS),
                property_id=self.property_ids.get(source.property_id),
                account_id=self.account_id,
            )
            copy.cheques = [Cheque(**_copy(c, CHEQUE_FIELDS)) for c in source.cheques]
            copy = await self._insert(f"Tenant {source.full_name}", copy)
            if copy is not None:
                self.tenant_ids[source.id] = copy.id

    async def maintenance(self, items: list[MaintenanceRequest]) -> None:
        for source in items:
            await self._insert(
                f"Maintenance {source.title}",
                MaintenanceRequest(
                    **_copy(source, MAINTENANCE_FIELDS),
                    property_id=self.property_ids.get(source.property_id),
                    tenant_id=self.tenant_ids.get(source.tenant_id),
                    account_id=self.account_id,
                ),
            )

    async def financial(self, items: list[FinancialRecord]) -> None:
        for source in items:
            await self._insert(
                "Financial record",
                FinancialRecord(
                    **_copy(source, FINANCIAL_FIELDS),
                    property_id=self.property_ids.get(source.property_id),
                    tenant_id=self.tenant_ids.get(source.tenant_id),
                    account_id=self.account_id,
                ),
            )


async def import_shared_data(
    db: AsyncSession, account_id: int, token: str | None
) -> ShareImportResult:
    """Copy a share's snapshot into the caller's account.

    Properties go first so later rows can be pointed at their copies;
    references to rows outside the share are cleared.
    """
    if not token:
        raise ValidationError("Share token is required", field="share_token")
    share = await get_active_share(db, token)
    rows = await _shared_rows(db, share)

    importer = _Importer(db, account_id)
    await importer.properties(rows.get("properties", []))
    await importer.tenants(rows.get("tenants", []))
    await importer.maintenance(rows.get("maintenance", []))
    await importer.financial(rows.get("financial", []))
    await db.commit()

    logger.info(
        "Shared data imported",
        extra={
            "share_id": share.id,
            "imported": importer.imported_count,
            "failed": len(importer.errors),
        },
    )
    return ShareImportResult(
        imported_count=importer.imported_count, errors=importer.errors
    )
