from sqlalchemy import update

from estatedesk_backend.modules.auth.models import Account
from helpers import add_property, register


async def _admin(client) -> dict:
    response = await client.post(
        "/api/admin/login", json={"username": "Admin", "password": "Admin@1993"}
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['data']['token']}"}


async def _account_id(client, headers, username):
    users = (await client.get("/api/admin/users", headers=headers)).json()["data"]
    return next(u["id"] for u in users if u["username"] == username)


async def test_admin_login_rejects_managers(client, auth):
    """Test that a manager cannot sign in to the admin console."""
    response = await client.post(
        "/api/admin/login", json={"username": "manager", "password": "secret-pass"}
    )
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid admin credentials"


async def test_admin_routes_require_admin_role(client, auth):
    """Test that a manager token is refused on admin routes."""
    response = await client.get("/api/admin/dashboard", headers=auth)
    assert response.status_code == 403
    assert response.json()["error"] == "Admin access required"


async def test_demoted_admin_loses_access(client, db):
    """Test that admin rights follow the stored role, not the token."""
    admin = await _admin(client)
    await db.execute(update(Account).where(Account.username == "Admin").values(role="manager"))
    await db.commit()

    response = await client.get("/api/admin/dashboard", headers=admin)
    assert response.status_code == 403


async def test_admin_dashboard_counts(client, auth):
    """Test that stats span all accounts and exclude admins from users."""
    await add_property(client, auth)
    other = await register(client, "second")
    await add_property(client, other)

    admin = await _admin(client)
    stats = (await client.get("/api/admin/dashboard", headers=admin)).json()["data"]
    assert stats["total_users"] == 2
    assert stats["total_properties"] == 2


async def test_create_and_update_user(client):
    """Test provisioning and then editing an account."""
    admin = await _admin(client)
    created = await client.post(
        "/api/admin/users",
        json={
            "username": "temp",
            "email": "temp@example.com",
            "password": "pw",
            "expiry_date": "2099-01-01",
        },
        headers=admin,
    )
    assert created.status_code == 200
    account_id = created.json()["data"]["id"]

    updated = await client.put(
        f"/api/admin/users/{account_id}",
        json={"username": "temp2", "email": "temp2@example.com", "role": "manager"},
        headers=admin,
    )
    assert updated.status_code == 200
    data = updated.json()["data"]
    assert data["username"] == "temp2"
    assert data["expiry_date"] is None

    login = await client.post("/api/login", json={"username": "temp2", "password": "pw"})
    assert login.status_code == 200


async def test_create_user_duplicate(client, auth):
    """Test that a taken username cannot be provisioned."""
    admin = await _admin(client)
    response = await client.post(
        "/api/admin/users",
        json={"username": "manager", "email": "new@example.com", "password": "pw"},
        headers=admin,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Username already exists"


async def test_bootstrap_admin_is_protected(client):
    """Test that the bootstrap admin cannot be edited, renamed or deleted."""
    admin = await _admin(client)
    admin_id = await _account_id(client, admin, "Admin")

    edit = await client.put(
        f"/api/admin/users/{admin_id}",
        json={"username": "Root", "email": "root@example.com", "role": "admin"},
        headers=admin,
    )
    rename = await client.put(
        f"/api/admin/users/{admin_id}/username", json={"username": "Root"}, headers=admin
    )
    delete = await client.delete(f"/api/admin/users/{admin_id}", headers=admin)

    assert edit.json()["error"] == "Admin user cannot be modified"
    assert rename.json()["error"] == "Admin username cannot be modified"
    assert delete.json()["error"] == "Admin user cannot be deleted"
    assert {edit.status_code, rename.status_code, delete.status_code} == {403}


async def test_rename_user(client, auth):
    """Test that an admin can rename a manager."""
    admin = await _admin(client)
    account_id = await _account_id(client, admin, "manager")
    response = await client.put(
        f"/api/admin/users/{account_id}/username", json={"username": "landlord"}, headers=admin
    )
    assert response.status_code == 200
    assert response.json()["data"]["username"] == "landlord"


async def test_reset_user_data_requires_phrase(client, auth):
    """Test that a per-account reset needs the exact confirmation phrase."""
    await add_property(client, auth)
    admin = await _admin(client)
    account_id = await _account_id(client, admin, "manager")
    url = f"/api/admin/users/{account_id}/reset-data"

    refused = await client.post(url, json={"confirm": "yes"}, headers=admin)
    assert refused.status_code == 400
    assert refused.json()["error"] == 'Confirmation required. Send "RESET_USER_DATA" to confirm.'

    done = await client.post(url, json={"confirm": "RESET_USER_DATA"}, headers=admin)
    assert done.status_code == 200
    assert done.json()["data"]["rows_deleted"] == 1
    assert (await client.get("/api/properties", headers=auth)).json()["data"] == []


async def test_delete_user_removes_account(client, auth):
    """Test that deleting a user removes the account and its data."""
    await add_property(client, auth)
    admin = await _admin(client)
    account_id = await _account_id(client, admin, "manager")

    response = await client.delete(f"/api/admin/users/{account_id}", headers=admin)
    assert response.status_code == 200

    login = await client.post(
        "/api/login", json={"username": "manager", "password": "secret-pass"}
    )
    assert login.status_code == 401


async def test_reset_all_data(client, auth):
    """Test that a global reset clears data but keeps accounts."""
    await add_property(client, auth)
    admin = await _admin(client)

    refused = await client.post(
        "/api/admin/reset-database", json={"confirm": "RESET_USER_DATA"}, headers=admin
    )
    assert refused.status_code == 400

    done = await client.post(
        "/api/admin/reset-database", json={"confirm": "RESET_ALL_DATA"}, headers=admin
    )
    assert done.status_code == 200
    assert "properties" in done.json()["data"]["deleted_tables"]
    assert (await client.get("/api/properties", headers=auth)).json()["data"] == []


async def test_system_info(client):
    """Test that system info reports the backend and version."""
    admin = await _admin(client)
    info = (await client.get("/api/admin/system-info", headers=admin)).json()["data"]
    assert info["database_backend"] == "sqlite"
    assert info["admin_user"] == "Admin"
    assert info["total_tables"] == 8


async def test_create_user_long_password(client):
    """Test that provisioning with an over-long password is refused cleanly."""
    admin = await _admin(client)
    response = await client.post(
        "/api/admin/users",
        json={"username": "wordy", "email": "wordy@example.com", "password": "z" * 90},
        headers=admin,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Password must be at most 72 bytes"
    users = (await client.get("/api/admin/users", headers=admin)).json()["data"]
    assert "wordy" not in {u["username"] for u in users}
