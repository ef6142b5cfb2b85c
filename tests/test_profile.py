async def test_get_profile(client, auth):
    """Test that the profile reflects the registered account."""
    response = await client.get("/api/profile", headers=auth)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["username"] == "manager"
    assert data["email"] == "manager@example.com"


async def test_update_requires_current_password(client, auth):
    """Test that profile changes need the current password."""
    response = await client.put("/api/profile/update", json={"phone": "555"}, headers=auth)
    assert response.status_code == 400
    assert response.json()["error"] == "Current password is required"


async def test_update_contact_details(client, auth):
    """Test that contact details are saved with the right password."""
    response = await client.put(
        "/api/profile/update",
        json={"current_password": "secret-pass", "phone": "555-0100", "address": "2 Bay Rd"},
        headers=auth,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["phone"] == "555-0100"
    assert data["address"] == "2 Bay Rd"


async def test_update_without_changes(client, auth):
    """Test that an update with nothing new is rejected."""
    response = await client.put(
        "/api/profile/update", json={"current_password": "secret-pass"}, headers=auth
    )
    assert response.status_code == 400
    assert response.json()["error"] == "No changes to update"


async def test_change_password(client, auth):
    """Test that a new password replaces the old one for login."""
    response = await client.put(
        "/api/profile/update",
        json={"current_password": "secret-pass", "new_password": "fresh-pass"},
        headers=auth,
    )
    assert response.status_code == 200

    old = await client.post("/api/login", json={"username": "manager", "password": "secret-pass"})
    new = await client.post("/api/login", json={"username": "manager", "password": "fresh-pass"})
    assert old.status_code == 401
    assert new.status_code == 200


async def test_lockout_after_repeated_wrong_passwords(client, auth):
    """Test that five wrong passwords lock the profile for a while."""
    for _ in range(5):
        response = await client.put(
            "/api/profile/update",
            json={"current_password": "wrong", "phone": "1"},
            headers=auth,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Current password is incorrect"

    locked = await client.put(
        "/api/profile/update",
        json={"current_password": "secret-pass", "phone": "1"},
        headers=auth,
    )
    assert locked.status_code == 423
    assert locked.json()["code"] == "ACCOUNT_LOCKED"
