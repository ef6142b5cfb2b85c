"""CRUD operations for accounts."""

from datetime import datetime

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.utils import is_row_id, utc_now
from .models import Account, AccountRole
from .password_service import hash_password


async def get_account_by_id(db: AsyncSession, account_id: int) -> Account | None:
    if not is_row_id(account_id):
        return None
    result = await db.execute(select(Account).where(Account.id == account_id))
    return result.scalar_one_or_none()


async def get_account_by_username(db: AsyncSession, username: str) -> Account | None:
    result = await db.execute(select(Account).where(Account.username == username))
    return result.scalar_one_or_none()


async def get_account_by_email(db: AsyncSession, email: str) -> Account | None:
    result = await db.execute(select(Account).where(Account.email == email))
    return result.scalar_one_or_none()


async def username_or_email_taken(
    db: AsyncSession,
    username: str,
    email: str,
    exclude_id: int | None = None,
) -> bool:
    query = select(func.count(Account.id)).where(
        or_(Account.username == username, Account.email == email)
    )
    if exclude_id is not None:
        query = query.where(Account.id != exclude_id)
    result = await db.execute(query)
    return (result.scalar() or 0) > 0


async def get_accounts(db: AsyncSession) -> list[Account]:
    result = await db.execute(select(Account).order_by(Account.created_at.desc(), Account.id.desc()))
    return list(result.scalars().all())


async def count_accounts(db: AsyncSession, exclude_role: str | None = None) -> int:
    query = select(func.count(Account.id))
    if exclude_role:
        query = query.where(Account.role != exclude_role)
    result = await db.execute(query)
    return result.scalar() or 0


async def create_account(
    db: AsyncSession,
    username: str,
    email: str,
    password: str,
    bcrypt_rounds: int,
    role: AccountRole | str = AccountRole.MANAGER,
    expiry_date: datetime | None = None,
) -> Account:
    account = Account(
        username=username,
        email=email,
        password_hash=hash_password(password, bcrypt_rounds),
        role=AccountRole(role).value,
        failed_attempts=0,
        last_password_change=utc_now(),
        expiry_date=expiry_date,
    )
    db.add(account)
    await db.flush()
    return account


async def set_password(
    db: AsyncSession, account: Account, password: str, bcrypt_rounds: int
) -> Account:
    account.password_hash = hash_password(password, bcrypt_rounds)
    account.last_password_change = utc_now()
    await db.flush()
    return account


async def increment_failed_attempts(db: AsyncSession, account: Account) -> Account:
    account.failed_attempts = (account.failed_attempts or 0) + 1
    await db.flush()
    return account


async def lock_account(
    db: AsyncSession, account: Account, locked_until: datetime
) -> Account:
    account.locked_until = locked_until
    await db.flush()
    return account


async def reset_failed_attempts(db: AsyncSession, account: Account) -> Account:
    account.failed_attempts = 0
    account.locked_until = None
    await db.flush()
    return account


async def update_last_login(db: AsyncSession, account: Account) -> Account:
    account.last_login = utc_now()
    await db.flush()
    return account


async def delete_account(db: AsyncSession, account_id: int) -> int:
    result = await db.execute(delete(Account).where(Account.id == account_id))
    return result.rowcount or 0
