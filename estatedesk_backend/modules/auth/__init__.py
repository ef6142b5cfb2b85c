"""Authentication module: accounts, sessions and self-service profile."""

from .dependencies import (
    AdminAccount,
    CurrentAccount,
    CurrentUser,
    FixtureUser,
    get_current_user,
    require_admin,
)
from .models import Account, AccountRole
from .routers import profile_router, router
from .schemas import AuthenticatedUser

__all__ = [
    # Models
    "Account",
    "AccountRole",
    # Routers
    "router",
    "profile_router",
    # Dependencies
    "get_current_user",
    "require_admin",
    "CurrentUser",
    "CurrentAccount",
    "FixtureUser",
    "AdminAccount",
    # Schemas
    "AuthenticatedUser",
]
