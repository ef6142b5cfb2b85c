from estatedesk_backend.core.utils import current_month, utc_now
from helpers import add_property, add_tenant


async def test_empty_dashboard(client, auth):
    """Test that a new account has an all-zero dashboard."""
    response = await client.get("/api/dashboard", headers=auth)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["rent_month"] == current_month()
    assert data["total_properties"] == 0
    assert data["pending_rent_properties"] == []


async def test_dashboard_rent_status(client, auth):
    """Test pending and paid rent for the current month."""
    paid_id = await add_property(client, auth, name="Paid Place", status="occupied", rent_amount=900)
    pending_id = await add_property(client, auth, name="Pending Place", status="occupied")
    await add_property(client, auth, name="Empty Place")
    paid_tenant = await add_tenant(client, auth, property_id=paid_id)
    await add_tenant(client, auth, property_id=pending_id, email="p@example.com")
    await client.post("/api/maintenance", json={"title": "Broken window"}, headers=auth)

    today = utc_now().date().isoformat()
    paid = await client.post(
        "/api/rent-tracking",
        json={
            "property_id": paid_id,
            "tenant_id": paid_tenant["id"],
            "rent_month": current_month(),
            "due_date": today,
            "total_amount": 900,
            "payment_method": "online",
            "payment_amount": 900,
            "payment_date": today,
        },
        headers=auth,
    )
    assert paid.status_code == 200

    data = (await client.get("/api/dashboard", headers=auth)).json()["data"]
    assert data["total_properties"] == 3
    assert data["occupied_properties"] == 2
    assert data["vacant_properties"] == 1
    assert data["active_tenants"] == 2
    assert data["pending_maintenance"] == 1
    assert [p["name"] for p in data["pending_rent_properties"]] == ["Pending Place"]
    [paid_row] = data["rent_paid_properties"]
    assert paid_row["name"] == "Paid Place"
    assert paid_row["payment_method"] == "online"
    assert [p["name"] for p in data["vacant_properties_list"]] == ["Empty Place"]


async def test_sample_data_only_once(client, auth):
    """Test that sample data is refused once properties exist."""
    first = await client.post("/api/sample-data", headers=auth)
    assert first.status_code == 200
    assert first.json()["message"] == "Successfully created 4 sample properties"

    second = await client.post("/api/sample-data", headers=auth)
    assert second.status_code == 400
    assert second.json()["error"].startswith("Properties already exist")


async def test_reset_database_clears_account(client, auth):
    """Test that a reset removes the caller's rows and keeps the account."""
    property_id = await add_property(client, auth)
    await add_tenant(client, auth, property_id=property_id, cheques=[{"cheque_number": "1"}])

    response = await client.post("/api/reset-database", headers=auth)
    assert response.status_code == 200
    cleared = response.json()["data"]
    assert cleared["properties"] == 1
    assert cleared["tenants"] == 1
    assert cleared["cheques"] == 1

    assert (await client.get("/api/properties", headers=auth)).json()["data"] == []
    assert (await client.get("/api/profile", headers=auth)).status_code == 200


async def test_test_token_when_enabled(app, client):
    """Test that the development bearer acts as account 1 when enabled."""
    app.state.settings = app.state.settings.model_copy(update={"allow_test_token": True})
    response = await client.get("/api/dashboard", headers={"Authorization": "Bearer test"})
    assert response.status_code == 200
