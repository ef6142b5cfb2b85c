"""Admin control plane: cross-account statistics, user provisioning and resets."""

from datetime import datetime

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import Settings
from ...core.exceptions import (
    NotFoundError,
    PermissionError,
    ResourceAlreadyExistsError,
    ValidationError,
)
from ...core.logging import get_logger
from ...core.utils import is_valid_email, parse_datetime, utc_now
from ...database import Base, Database
from ..auth import crud as account_crud
from ..auth.models import Account, AccountRole
from ..dashboard.services import clear_account_data
from ..data_sharing.models import DataShare
from ..financial.crud import financial_crud
from ..financial.models import FinancialRecord
from ..maintenance.crud import maintenance_crud
from ..maintenance.models import MaintenanceRequest
from ..property_management.crud import property_crud
from ..property_management.models import Property
from ..rent_tracking.crud import rent_tracking_crud
from ..rent_tracking.models import RentTrackingEntry
from ..tenant_management.crud import tenant_crud
from ..tenant_management.models import Cheque, Tenant
from .schemas import (
    AdminStats,
    AdminUserCreate,
    AdminUserUpdate,
    ResetSummary,
    SystemInfo,
)

logger = get_logger(__name__)

RESET_USER_DATA = "RESET_USER_DATA"
RESET_ALL_DATA = "RESET_ALL_DATA"

ROLES = [role.value for role in AccountRole]

# Children before parents
DOMAIN_TABLES = [
    RentTrackingEntry,
    FinancialRecord,
    MaintenanceRequest,
    Cheque,
    Tenant,
    Property,
    DataShare,
]


def require_confirmation(confirm: str | None, phrase: str) -> None:
    if confirm != phrase:
        raise ValidationError(
            f'Confirmation required. Send "{phrase}" to confirm.', field="confirm"
        )


def is_bootstrap_admin(account: Account, settings: Settings) -> bool:
    return account.username == settings.init_admin_username


def _role(value: str | None) -> str:
    role = (value or AccountRole.MANAGER.value).strip().lower()
    if role not in ROLES:
        raise ValidationError(f"Role must be one of: {', '.join(ROLES)}", field="role")
    return role


def _expiry(value: str | None) -> datetime | None:
    try:
        return parse_datetime(value)
    except ValueError:
        raise ValidationError("Invalid expiry date format", field="expiry_date")


async def _get_account(db: AsyncSession, account_id: int) -> Account:
    account = await account_crud.get_account_by_id(db, account_id)
    if account is None:
        raise NotFoundError("User not found")
    return account


async def _ensure_unique(
    db: AsyncSession, username: str, email: str, exclude_id: int | None = None
) -> None:
    existing = await account_crud.get_account_by_username(db, username)
    if existing and existing.id != exclude_id:
        raise ResourceAlreadyExistsError("Username already exists")
    existing = await account_crud.get_account_by_email(db, email)
    if existing and existing.id != exclude_id:
        raise ResourceAlreadyExistsError("Email already exists")


async def get_stats(db: AsyncSession) -> AdminStats:
    return AdminStats(
        total_users=await account_crud.count_accounts(
            db, exclude_role=AccountRole.ADMIN.value
        ),
        total_properties=await property_crud.count(db),
        total_tenants=await tenant_crud.count(db),
        total_maintenance=await maintenance_crud.count(db),
        total_financial=await financial_crud.count(db),
        total_rent_tracking=await rent_tracking_crud.count(db),
    )


async def list_users(db: AsyncSession) -> list[Account]:
    return await account_crud.get_accounts(db)


async def create_user(
    db: AsyncSession, data: AdminUserCreate, settings: Settings
) -> Account:
    if not data.username or not data.email or not data.password:
        raise ValidationError("Username, email, and password are required")
    if not is_valid_email(data.email):
        raise ValidationError("Invalid email format", field="email")
    role = _role(data.role)
    expiry_date = _expiry(data.expiry_date)
    await _ensure_unique(db, data.username, data.email)

    try:
        account = await account_crud.create_account(
            db,
            username=data.username,
            email=data.email,
            password=data.password,
            bcrypt_rounds=settings.bcrypt_rounds,
            role=role,
            expiry_date=expiry_date,
        )
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ResourceAlreadyExistsError("Username or email already exists")

    logger.info("Account provisioned", extra={"target_account_id": account.id, "role": role})
    return account


async def update_user(
    db: AsyncSession, account_id: int, data: AdminUserUpdate, settings: Settings
) -> Account:
    if not data.username or not data.email or not data.role:
        raise ValidationError("Username, email, and role are required")

    account = await _get_account(db, account_id)
    if is_bootstrap_admin(account, settings):
        raise PermissionError("Admin user cannot be modified")

    role = _role(data.role)
    if not is_valid_email(data.email):
        raise ValidationError("Invalid email format", field="email")
    await _ensure_unique(db, data.username, data.email, exclude_id=account.id)
    expiry_date = _expiry(data.expiry_date)

    account.username = data.username
    account.email = data.email
    account.role = role
    account.expiry_date = expiry_date
    if data.password:
        await account_crud.set_password(
            db, account, data.password, settings.bcrypt_rounds
        )
        await account_crud.reset_failed_attempts(db, account)

    await db.commit()
    logger.info("Account updated by admin", extra={"target_account_id": account.id})
    return account


async def rename_user(
    db: AsyncSession, account_id: int, username: str | None, settings: Settings
) -> Account:
    if not username:
        raise ValidationError("Username is required", field="username")

    account = await _get_account(db, account_id)
    if is_bootstrap_admin(account, settings):
        raise PermissionError("Admin username cannot be modified")

    existing = await account_crud.get_account_by_username(db, username)
    if existing and existing.id != account.id:
        raise ResourceAlreadyExistsError("Username already exists")

    account.username = username
    await db.commit()
    return account


async def reset_user_data(
    db: AsyncSession, account_id: int, confirm: str | None
) -> ResetSummary:
    require_confirmation(confirm, RESET_USER_DATA)
    await _get_account(db, account_id)

    cleared = await clear_account_data(db, account_id)
    await db.commit()

    counts = cleared.model_dump()
    logger.warning(
        "Account data reset by admin",
        extra={"target_account_id": account_id, **counts},
    )
    return ResetSummary(
        deleted_tables=list(counts),
        rows_deleted=sum(counts.values()),
        account_id=account_id,
    )


async def delete_user(
    db: AsyncSession, account_id: int, settings: Settings
) -> ResetSummary:
    """Delete an account's data, then the account itself."""
    account = await _get_account(db, account_id)
    if is_bootstrap_admin(account, settings):
        raise PermissionError("Admin user cannot be deleted")

    cleared = await clear_account_data(db, account_id)
    shares = await db.execute(delete(DataShare).where(DataShare.account_id == account_id))
    await account_crud.delete_account(db, account_id)
    await db.commit()

    counts = {**cleared.model_dump(), "data_shares": shares.rowcount or 0}
    logger.warning(
        "Account deleted by admin", extra={"target_account_id": account_id, **counts}
    )
    return ResetSummary(
        deleted_tables=list(counts),
        rows_deleted=sum(counts.values()),
        account_id=account_id,
    )


async def reset_all_data(db: AsyncSession, confirm: str | None) -> ResetSummary:
    """Clear every domain table for every account. Accounts are kept."""
    require_confirmation(confirm, RESET_ALL_DATA)

    rows_deleted = 0
    for model in DOMAIN_TABLES:
        result = await db.execute(delete(model))
        rows_deleted += result.rowcount or 0
    await db.commit()

    tables = [model.__tablename__ for model in DOMAIN_TABLES]
    logger.warning(
        "All domain data reset", extra={"tables": tables, "rows_deleted": rows_deleted}
    )
    return ResetSummary(deleted_tables=tables, rows_deleted=rows_deleted)


def system_info(database: Database, settings: Settings) -> SystemInfo:
    return SystemInfo(
        server_time=utc_now(),
        database_backend=database.backend,
        total_tables=len(Base.metadata.tables),
        admin_user=settings.init_admin_username,
        version=settings.app_version,
    )
