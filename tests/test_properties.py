from helpers import add_property, add_tenant, register


async def test_create_and_list_properties(client, auth):
    """Test that a created property appears with its defaults."""
    property_id = await add_property(client, auth, rent_amount="1200")

    response = await client.get("/api/properties", headers=auth)
    assert response.status_code == 200
    [prop] = response.json()["data"]
    assert prop["id"] == property_id
    assert prop["status"] == "vacant"
    assert prop["currency"] == "USD"
    assert prop["rent_amount"] == 1200


async def test_create_requires_name_address_type(client, auth):
    """Test that a property without an address is rejected."""
    response = await client.post(
        "/api/properties", json={"name": "Loft", "type": "house"}, headers=auth
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Name, address, and type are required"


async def test_blank_numbers_become_null(client, auth):
    """Test that empty numeric fields are stored as null."""
    property_id = await add_property(client, auth, bedrooms="", square_feet="")
    response = await client.get(f"/api/properties/{property_id}", headers=auth)
    data = response.json()["data"]
    assert data["bedrooms"] is None
    assert data["square_feet"] is None


async def test_duplicate_property_rejected(client, auth):
    """Test that the same name with a shared utility number is a duplicate."""
    await add_property(client, auth, electricity_number="E-1")
    response = await client.post(
        "/api/properties",
        json={
            "name": "Harbour View",
            "address": "Elsewhere",
            "type": "apartment",
            "electricity_number": "E-1",
        },
        headers=auth,
    )
    assert response.status_code == 400
    assert "Duplicate property found" in response.json()["error"]


async def test_same_name_without_utilities_allowed(client, auth):
    """Test that a repeated name with no utility numbers is not a duplicate."""
    await add_property(client, auth)
    await add_property(client, auth)
    response = await client.get("/api/properties", headers=auth)
    assert len(response.json()["data"]) == 2


async def test_properties_scoped_to_account(client, auth):
    """Test that another account cannot read or delete a property."""
    property_id = await add_property(client, auth)
    other = await register(client, "intruder")

    listed = await client.get("/api/properties", headers=other)
    assert listed.json()["data"] == []

    fetched = await client.get(f"/api/properties/{property_id}", headers=other)
    assert fetched.status_code == 404

    deleted = await client.delete(f"/api/properties/{property_id}", headers=other)
    assert deleted.status_code == 404


async def test_invalid_status_rejected(client, auth):
    """Test that an unknown property status is refused."""
    property_id = await add_property(client, auth)
    response = await client.put(
        f"/api/properties/{property_id}", json={"status": "haunted"}, headers=auth
    )
    assert response.status_code == 400
    assert response.json()["error"].startswith("Status must be one of")


async def test_vacant_status_expires_tenants(client, auth):
    """Test that marking a property vacant expires its tenants."""
    property_id = await add_property(client, auth, status="occupied")
    tenant = await add_tenant(client, auth, property_id=property_id)
    assert tenant["status"] == "active"

    response = await client.put(
        f"/api/properties/{property_id}", json={"status": "vacant"}, headers=auth
    )
    assert response.status_code == 200
    assert response.json()["message"].endswith("Updated 1 tenants to expired status")

    refreshed = await client.get(f"/api/tenants/{tenant['id']}", headers=auth)
    assert refreshed.json()["data"]["status"] == "expired"


async def test_update_tenants_vacant_route(client, auth):
    """Test the explicit expire-all-tenants operation."""
    property_id = await add_property(client, auth)
    await add_tenant(client, auth, property_id=property_id)
    await add_tenant(client, auth, property_id=property_id, email="sam@example.com")

    response = await client.post(
        f"/api/properties/{property_id}/update-tenants-vacant", headers=auth
    )
    assert response.status_code == 200
    assert response.json()["data"] == {"property_id": property_id, "updated_count": 2}


async def test_delete_property(client, auth):
    """Test that a deleted property is gone."""
    property_id = await add_property(client, auth)
    response = await client.delete(f"/api/properties/{property_id}", headers=auth)
    assert response.status_code == 200
    assert (await client.get(f"/api/properties/{property_id}", headers=auth)).status_code == 404


async def test_register_create_and_list(client):
    """Test registering, creating one property and listing exactly it."""
    response = await client.post(
        "/api/register",
        json={"username": "alice", "email": "alice@x.com", "password": "Secret123!"},
    )
    assert response.status_code == 200
    headers = {"Authorization": f"Bearer {response.json()['data']['token']}"}

    created = await client.post(
        "/api/properties",
        json={"name": "Villa A", "address": "1 Rd", "type": "villa"},
        headers=headers,
    )
    assert created.status_code == 200
    property_id = created.json()["data"]["id"]
    assert isinstance(property_id, int)

    listed = (await client.get("/api/properties", headers=headers)).json()["data"]
    assert [p["id"] for p in listed] == [property_id]
    assert listed[0]["name"] == "Villa A"


async def test_out_of_range_id_is_not_found(client, auth):
    """Test that an id beyond the integer range is simply not found."""
    response = await client.get("/api/properties/99999999999999999999", headers=auth)
    assert response.status_code == 404
