"""JWT session tokens.

Signing keys and lifetimes come from the application's own settings object,
which callers pass in.
"""

from datetime import datetime, timedelta, timezone

import jwt

from ...config import Settings
from ...core.exceptions import AuthenticationError, TokenExpiredError


def create_access_token(
    config: Settings,
    account_id: int,
    username: str,
    role: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed session token.

    ``role`` is only embedded in admin tokens and is informational; admin
    routes always re-read the role from the account row.
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(hours=config.access_token_expire_hours)

    payload = {
        "sub": str(account_id),
        "username": username,
        "exp": now + expires_delta,
        "iat": now,
        "type": "access",
    }
    if role:
        payload["role"] = role

    return jwt.encode(payload, config.jwt_secret_key, algorithm=config.jwt_algorithm)


def decode_access_token(config: Settings, token: str) -> dict:
    """Decode and validate a session token.

    Raises:
        TokenExpiredError: The signature is valid but the token is past ``exp``.
        AuthenticationError: Anything else wrong with the token.
    """
    try:
        payload = jwt.decode(
            token, config.jwt_secret_key, algorithms=[config.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError()
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token")

    if payload.get("type") != "access" or "sub" not in payload:
        raise AuthenticationError("Invalid token")
    return payload


def token_lifetime_seconds(config: Settings, admin: bool = False) -> int:
    hours = config.admin_token_expire_hours if admin else config.access_token_expire_hours
    return hours * 3600
