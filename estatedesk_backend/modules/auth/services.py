"""Authentication and profile business logic."""

from datetime import timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import Settings
from ...core.exceptions import (
    AccountLockedError,
    AuthenticationError,
    NotFoundError,
    ResourceAlreadyExistsError,
    ValidationError,
)
from ...core.logging import get_logger
from ...core.utils import is_valid_email, utc_now
from . import crud
from .jwt_service import create_access_token, token_lifetime_seconds
from .models import Account, AccountRole
from .password_service import verify_password
from .schemas import (
    AccountSummary,
    ProfileUpdateRequest,
    RegisterRequest,
    TokenResponse,
)

logger = get_logger(__name__)


def issue_token(account: Account, config: Settings, admin: bool = False) -> TokenResponse:
    """Build the token payload returned to clients."""
    expires_in = token_lifetime_seconds(config, admin=admin)
    token = create_access_token(
        config,
        account_id=account.id,
        username=account.username,
        role=account.role if admin else None,
        expires_delta=timedelta(seconds=expires_in),
    )
    return TokenResponse(
        token=token,
        expires_in=expires_in,
        user=AccountSummary.model_validate(account),
    )


async def register_account(
    db: AsyncSession, data: RegisterRequest, config: Settings
) -> TokenResponse:
    """Create a manager account and sign it in."""
    if not data.username or not data.email or not data.password:
        raise ValidationError("Username, email, and password are required")
    if not is_valid_email(data.email):
        raise ValidationError("Invalid email format", field="email")

    if await crud.username_or_email_taken(db, data.username, data.email):
        raise ResourceAlreadyExistsError("Username or email already exists")

    try:
        account = await crud.create_account(
            db,
            username=data.username,
            email=data.email,
            password=data.password,
            bcrypt_rounds=config.bcrypt_rounds,
        )
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ResourceAlreadyExistsError("Username or email already exists")

    logger.info("Account registered", extra={"account_id": account.id})
    return issue_token(account, config)


async def authenticate_account(
    db: AsyncSession,
    username: str | None,
    password: str | None,
    admin: bool = False,
) -> Account:
    """Verify credentials and record the login.

    Raises:
        AuthenticationError: Wrong credentials, or the account has expired.
    """
    failure = "Invalid admin credentials" if admin else "Invalid credentials"

    account = await crud.get_account_by_username(db, username) if username else None
    if not account or not verify_password(password or "", account.password_hash):
        logger.warning("Login failed", extra={"username": username, "admin": admin})
        raise AuthenticationError(failure)

    if admin and not account.is_admin:
        logger.warning("Admin login refused for non-admin", extra={"account_id": account.id})
        raise AuthenticationError(failure)

    if account.is_expired:
        raise AuthenticationError("Account has expired")

    await crud.update_last_login(db, account)
    await db.commit()

    logger.info("Login succeeded", extra={"account_id": account.id, "admin": admin})
    return account


async def refresh_session(
    db: AsyncSession, account_id: int, config: Settings
) -> TokenResponse:
    """Re-issue a normal session token after re-reading the account."""
    account = await crud.get_account_by_id(db, account_id)
    if not account:
        raise NotFoundError("User not found")
    if account.is_expired:
        raise AuthenticationError("Account has expired")
    return issue_token(account, config)


async def get_profile(db: AsyncSession, account_id: int) -> Account:
    account = await crud.get_account_by_id(db, account_id)
    if not account:
        raise NotFoundError("User not found")
    return account


async def update_profile(
    db: AsyncSession,
    account_id: int,
    data: ProfileUpdateRequest,
    config: Settings,
) -> Account:
    """Apply self-service profile changes behind a current-password check.

    Consecutive wrong passwords lock the account for a cool-down window;
    a correct password clears the counter.
    """
    account = await get_profile(db, account_id)

    if account.is_locked:
        raise AccountLockedError(
            "Account temporarily locked due to multiple failed attempts"
        )
    if account.locked_until is not None:
        # Lock window has passed, start counting again
        await crud.reset_failed_attempts(db, account)
        await db.commit()

    if not data.current_password:
        raise ValidationError("Current password is required")

    if not verify_password(data.current_password, account.password_hash):
        await crud.increment_failed_attempts(db, account)
        if account.failed_attempts >= config.max_password_attempts:
            await crud.lock_account(
                db,
                account,
                utc_now() + timedelta(minutes=config.lockout_duration_minutes),
            )
            logger.warning(
                "Account locked after repeated password failures",
                extra={"account_id": account.id, "failed_attempts": account.failed_attempts},
            )
        await db.commit()
        raise ValidationError("Current password is incorrect")

    if account.failed_attempts:
        await crud.reset_failed_attempts(db, account)
        await db.commit()

    changed = False
    if data.email and data.email != account.email:
        if not is_valid_email(data.email):
            raise ValidationError("Invalid email format", field="email")
        existing = await crud.get_account_by_email(db, data.email)
        if existing and existing.id != account.id:
            raise ResourceAlreadyExistsError("Email already exists")
        account.email = data.email
        changed = True

    for field in ("phone", "address", "preferences"):
        value = getattr(data, field)
        if value is not None and value != getattr(account, field):
            setattr(account, field, value)
            changed = True

    if data.new_password:
        await crud.set_password(db, account, data.new_password, config.bcrypt_rounds)
        changed = True

    if not changed:
        raise ValidationError("No changes to update")

    await db.commit()
    await db.refresh(account)
    logger.info("Profile updated", extra={"account_id": account.id})
    return account


async def ensure_admin_account(db: AsyncSession, config: Settings) -> Account | None:
    """Create the bootstrap admin from settings if it does not exist yet."""
    if not (
        config.init_admin_username
        and config.init_admin_email
        and config.init_admin_password
    ):
        return None

    existing = await crud.get_account_by_username(db, config.init_admin_username)
    if existing:
        return existing

    account = await crud.create_account(
        db,
        username=config.init_admin_username,
        email=config.init_admin_email,
        password=config.init_admin_password,
        bcrypt_rounds=config.bcrypt_rounds,
        role=AccountRole.ADMIN,
    )
    await db.commit()
    logger.info("Bootstrap admin account created", extra={"account_id": account.id})
    return account
