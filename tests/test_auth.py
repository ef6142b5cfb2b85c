from datetime import timedelta

import pytest
from sqlalchemy import update

from estatedesk_backend.core.exceptions import ValidationError
from estatedesk_backend.core.utils import utc_now
from estatedesk_backend.modules.auth.jwt_service import create_access_token
from estatedesk_backend.modules.auth.models import Account
from estatedesk_backend.modules.auth.password_service import hash_password, verify_password
from helpers import register


def test_hash_password_round_trip():
    """Test that a hashed password verifies and a wrong one does not."""
    hashed = hash_password("s3cret", rounds=4)
    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("other", hashed)


async def test_register_returns_token(client):
    """Test that registration signs the new account in."""
    response = await client.post(
        "/api/register",
        json={"username": "alice", "email": "alice@example.com", "password": "pw123"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "User registered successfully"
    assert body["data"]["token"]
    assert body["data"]["user"]["username"] == "alice"


async def test_register_requires_all_fields(client):
    """Test that registration without a password is rejected."""
    response = await client.post(
        "/api/register", json={"username": "alice", "email": "alice@example.com"}
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Username, email, and password are required"


async def test_register_duplicate_username(client):
    """Test that a taken username cannot register again."""
    await register(client, "alice")
    response = await client.post(
        "/api/register",
        json={"username": "alice", "email": "other@example.com", "password": "pw"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Username or email already exists"


async def test_login_success_and_failure(client):
    """Test that login accepts the right password only."""
    await register(client, "bob")

    ok = await client.post("/api/login", json={"username": "bob", "password": "secret-pass"})
    assert ok.status_code == 200
    assert ok.json()["message"] == "Login successful"

    bad = await client.post("/api/login", json={"username": "bob", "password": "nope"})
    assert bad.status_code == 401
    assert bad.json()["error"] == "Invalid credentials"


async def test_missing_token_rejected(client):
    """Test that protected routes require a bearer token."""
    response = await client.get("/api/properties")
    assert response.status_code == 401
    assert response.json()["error"] == "Access token required"


async def test_invalid_token_rejected(client):
    """Test that a malformed token is an authentication failure."""
    response = await client.get(
        "/api/properties", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401
    assert response.json()["success"] is False


async def test_expired_token_reports_code(client, test_settings):
    """Test that an expired token carries the TOKEN_EXPIRED code."""
    token = create_access_token(
        test_settings, 2, "ghost", expires_delta=timedelta(seconds=-5)
    )
    response = await client.get(
        "/api/properties", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 401
    assert response.json()["code"] == "TOKEN_EXPIRED"


async def test_test_token_disabled_by_default(client):
    """Test that the development bearer is refused unless enabled."""
    response = await client.get("/api/dashboard", headers={"Authorization": "Bearer test"})
    assert response.status_code == 401


async def test_expired_account_cannot_login(client, db):
    """Test that an account past its expiry date cannot sign in."""
    await register(client, "carol")
    await db.execute(
        update(Account)
        .where(Account.username == "carol")
        .values(expiry_date=utc_now() - timedelta(days=1))
    )
    await db.commit()

    response = await client.post(
        "/api/login", json={"username": "carol", "password": "secret-pass"}
    )
    assert response.status_code == 401
    assert response.json()["error"] == "Account has expired"


async def test_refresh_token(client, auth):
    """Test that a signed-in caller can refresh the session."""
    response = await client.post("/api/refresh-token", headers=auth)
    assert response.status_code == 200
    assert response.json()["data"]["user"]["username"] == "manager"


def test_hash_password_rejects_long_passwords():
    """Test that passwords beyond bcrypt's 72-byte limit are refused."""
    with pytest.raises(ValidationError, match="at most 72 bytes"):
        hash_password("x" * 73, rounds=4)
    # Multi-byte characters count by their encoded size
    with pytest.raises(ValidationError):
        hash_password("é" * 37, rounds=4)
    assert not verify_password("x" * 80, hash_password("x" * 72, rounds=4))


async def test_register_long_password(client):
    """Test that an over-long password is a validation error, not a crash."""
    response = await client.post(
        "/api/register",
        json={"username": "longpw", "email": "l@example.com", "password": "x" * 80},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Password must be at most 72 bytes"

    login = await client.post("/api/login", json={"username": "longpw", "password": "x" * 80})
    assert login.status_code == 401


async def test_profile_long_new_password(client, auth):
    """Test that changing to an over-long password leaves the old one working."""
    response = await client.put(
        "/api/profile/update",
        json={"current_password": "secret-pass", "new_password": "y" * 100},
        headers=auth,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Password must be at most 72 bytes"

    login = await client.post(
        "/api/login", json={"username": "manager", "password": "secret-pass"}
    )
    assert login.status_code == 200


async def test_tokens_follow_application_secret(app, client, auth, test_settings):
    """Test that tokens are checked against the settings the app was built with."""
    app.state.settings = test_settings.model_copy(
        update={"jwt_secret_key": "rotated-secret-key"}
    )

    stale = await client.get("/api/properties", headers=auth)
    assert stale.status_code == 401
    assert stale.json()["error"] == "Invalid token"

    fresh = await register(client, "after-rotation")
    response = await client.get("/api/properties", headers=fresh)
    assert response.status_code == 200
