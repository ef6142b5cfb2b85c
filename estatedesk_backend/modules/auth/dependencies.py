"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import Settings
from ...core.exceptions import AuthenticationError, PermissionError
from ...core.logging import set_account_id
from ...database import get_db
from . import crud
from .jwt_service import decode_access_token
from .models import Account
from .schemas import AuthenticatedUser

# Missing credentials are reported by get_current_user, not by HTTPBearer
security = HTTPBearer(auto_error=False)

TEST_TOKEN = "test"
TEST_ACCOUNT_ID = 1


def _require_bearer(credentials: HTTPAuthorizationCredentials | None) -> str:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token required")
    return credentials.credentials


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> AuthenticatedUser:
    """Resolve the caller from the bearer token.

    This does NOT make a database call; ownership scoping only needs the
    account id carried in the token.
    """
    payload = decode_access_token(
        request.app.state.settings, _require_bearer(credentials)
    )

    try:
        user = AuthenticatedUser(
            id=int(payload["sub"]),
            username=payload.get("username", ""),
            role=payload.get("role"),
        )
    except (KeyError, ValueError):
        raise AuthenticationError("Invalid token")

    set_account_id(user.id)
    return user


async def get_fixture_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> AuthenticatedUser:
    """Like get_current_user, but honours the development-only ``test`` bearer."""
    if (
        request.app.state.settings.allow_test_token
        and credentials is not None
        and credentials.credentials == TEST_TOKEN
    ):
        set_account_id(TEST_ACCOUNT_ID)
        return AuthenticatedUser(id=TEST_ACCOUNT_ID, username=TEST_TOKEN)
    return await get_current_user(request, credentials)


async def get_current_account(
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Account:
    """Load the caller's account row."""
    account = await crud.get_account_by_id(db, current_user.id)
    if account is None:
        raise AuthenticationError("Invalid token")
    return account


async def require_admin(
    account: Annotated[Account, Depends(get_current_account)],
) -> Account:
    """Admin gate; the role always comes from the account row, never the token."""
    if not account.is_admin:
        raise PermissionError("Admin access required")
    return account


# Type aliases for dependency injection
AppSettings = Annotated[Settings, Depends(get_app_settings)]
CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
FixtureUser = Annotated[AuthenticatedUser, Depends(get_fixture_user)]
CurrentAccount = Annotated[Account, Depends(get_current_account)]
AdminAccount = Annotated[Account, Depends(require_admin)]
