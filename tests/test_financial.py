from helpers import add_property, register


async def test_create_update_delete_record(client, auth):
    """Test the ledger record lifecycle."""
    property_id = await add_property(client, auth)
    created = await client.post(
        "/api/financial",
        json={
            "property_id": property_id,
            "type": "expense",
            "amount": "250.50",
            "date": "2024-04-10",
            "description": "Boiler service",
        },
        headers=auth,
    )
    assert created.status_code == 200
    record = created.json()["data"]
    assert record["amount"] == 250.5
    assert record["currency"] == "USD"
    assert record["property_name"] == "Harbour View"

    updated = await client.put(
        f"/api/financial/{record['id']}",
        json={"type": "expense", "amount": 300, "date": "2024-04-11"},
        headers=auth,
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["amount"] == 300

    deleted = await client.delete(f"/api/financial/{record['id']}", headers=auth)
    assert deleted.status_code == 200
    assert (await client.get("/api/financial", headers=auth)).json()["data"] == []


async def test_records_listed_newest_first(client, auth):
    """Test that the ledger is ordered by transaction date, newest first."""
    for day in ("2024-01-05", "2024-03-05", "2024-02-05"):
        await client.post(
            "/api/financial",
            json={"type": "deposit", "amount": 10, "date": day},
            headers=auth,
        )
    records = (await client.get("/api/financial", headers=auth)).json()["data"]
    assert [r["date"] for r in records] == ["2024-03-05", "2024-02-05", "2024-01-05"]


async def test_record_validation(client, auth):
    """Test the ledger validation messages."""
    missing = await client.post("/api/financial", json={"type": "rent"}, headers=auth)
    assert missing.json()["error"] == "Type, amount, and date are required"

    negative = await client.post(
        "/api/financial",
        json={"type": "rent", "amount": -1, "date": "2024-01-01"},
        headers=auth,
    )
    assert negative.json()["error"] == "Amount must be a positive number"

    bad_date = await client.post(
        "/api/financial",
        json={"type": "rent", "amount": 5, "date": "someday"},
        headers=auth,
    )
    assert bad_date.status_code == 400
    assert bad_date.json()["error"] == "Invalid date format"


async def test_update_missing_record(client, auth):
    """Test that updating an unknown record is not found."""
    response = await client.put(
        "/api/financial/77",
        json={"type": "rent", "amount": 5, "date": "2024-01-01"},
        headers=auth,
    )
    assert response.status_code == 404


async def test_records_hidden_from_other_accounts(client, auth):
    """Test that another account can neither edit nor delete a ledger record."""
    created = await client.post(
        "/api/financial",
        json={"type": "expense", "amount": 80, "date": "2024-06-01"},
        headers=auth,
    )
    url = f"/api/financial/{created.json()['data']['id']}"

    other = await register(client, "other")
    updated = await client.put(
        url, json={"type": "expense", "amount": 1, "date": "2024-06-02"}, headers=other
    )
    deleted = await client.delete(url, headers=other)
    assert updated.status_code == 404
    assert deleted.status_code == 404
    assert updated.json()["error"] == "Financial record not found or access denied"

    [kept] = (await client.get("/api/financial", headers=auth)).json()["data"]
    assert kept["amount"] == 80
    assert kept["date"] == "2024-06-01"


async def test_record_accepts_stored_field_name(client, auth):
    """Test that the transaction date may also be sent as record_date."""
    response = await client.post(
        "/api/financial",
        json={"type": "deposit", "amount": 5, "record_date": "2024-02-02"},
        headers=auth,
    )
    assert response.status_code == 200
    assert response.json()["data"]["date"] == "2024-02-02"
