from decimal import Decimal

from helpers import add_property, add_tenant, register


async def _lease(client, headers):
    property_id = await add_property(client, headers, status="occupied", rent_amount=1000)
    tenant = await add_tenant(client, headers, property_id=property_id)
    return property_id, tenant["id"]


def _payment(property_id, tenant_id, **fields):
    payload = {
        "property_id": property_id,
        "tenant_id": tenant_id,
        "rent_month": "2024-05",
        "due_date": "2024-05-01",
        "total_amount": 1000,
        "payment_method": "cash",
        "payment_amount": 1000,
        "payment_date": "2024-05-02",
    }
    payload.update(fields)
    return payload


async def test_cash_payment_creates_ledger_record(client, auth):
    """Test that a full payment is mirrored as a rent ledger record."""
    property_id, tenant_id = await _lease(client, auth)

    response = await client.post(
        "/api/rent-tracking",
        json=_payment(property_id, tenant_id, cash_received_by="Lee", online_bank="Ignored"),
        headers=auth,
    )
    assert response.status_code == 200
    entry = response.json()["data"]
    assert entry["payment_details"] == {"cash_received_by": "Lee", "cash_receipt_number": None}
    assert entry["tenant_first_name"] == "Dana"

    [record] = (await client.get("/api/financial", headers=auth)).json()["data"]
    assert record["type"] == "rent"
    assert record["amount"] == 1000
    assert record["description"] == "Cash payment for 2024-05"
    assert record["date"] == "2024-05-02"


async def test_partial_payment(client, auth):
    """Test that a partial payment records the balance and a partial_rent entry."""
    property_id, tenant_id = await _lease(client, auth)

    response = await client.post(
        "/api/rent-tracking",
        json=_payment(property_id, tenant_id, payment_method="partial", payment_amount=400),
        headers=auth,
    )
    assert response.status_code == 200
    details = response.json()["data"]["payment_details"]
    assert Decimal(str(details["partial_balance"])) == Decimal("600")

    [record] = (await client.get("/api/financial", headers=auth)).json()["data"]
    assert record["type"] == "partial_rent"
    assert record["amount"] == 400


async def test_overpayment_writes_nothing(client, auth):
    """Test that a payment above the total is rejected without any rows."""
    property_id, tenant_id = await _lease(client, auth)

    response = await client.post(
        "/api/rent-tracking",
        json=_payment(property_id, tenant_id, payment_amount=1200),
        headers=auth,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Payment amount cannot exceed total amount"

    assert (await client.get("/api/rent-tracking", headers=auth)).json()["data"] == []
    assert (await client.get("/api/financial", headers=auth)).json()["data"] == []


async def test_validation_order(client, auth):
    """Test that the first failing rule is the one reported."""
    property_id, tenant_id = await _lease(client, auth)
    cases = [
        ({"rent_month": ""}, "Missing required fields"),
        ({"rent_month": "May 2024"}, "Rent month must be in YYYY-MM format"),
        ({"payment_method": "barter"}, "Payment method must be one of: cash, cheque, online, partial"),
        ({"total_amount": -5}, "Total amount must be a positive number"),
        ({"payment_amount": "abc"}, "Payment amount must be a positive number"),
        ({"due_date": "tomorrow"}, "Invalid date format"),
        ({"property_id": 9999}, "Property not found or access denied"),
        ({"tenant_id": 9999}, "Tenant not found or access denied"),
        ({"property_id": 9998, "tenant_id": 9999}, "Property not found or access denied"),
        ({"property_id": "99999999999999999999"}, "Property not found or access denied"),
        ({"tenant_id": str(2**63)}, "Tenant not found or access denied"),
    ]
    for fields, message in cases:
        payload = {**_payment(property_id, tenant_id), **fields}
        response = await client.post("/api/rent-tracking", json=payload, headers=auth)
        assert response.status_code == 400, fields
        assert response.json()["error"] == message


async def test_other_account_ids_rejected(client, auth):
    """Test that a payment cannot reference another account's tenant."""
    property_id, _ = await _lease(client, auth)
    other = await register(client, "other")
    foreign_tenant = await add_tenant(client, other)

    response = await client.post(
        "/api/rent-tracking",
        json=_payment(property_id, foreign_tenant["id"]),
        headers=auth,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Tenant not found or access denied"


async def test_update_leaves_ledger_untouched(client, auth):
    """Test that editing a payment does not rewrite its ledger record."""
    property_id, tenant_id = await _lease(client, auth)
    created = await client.post(
        "/api/rent-tracking", json=_payment(property_id, tenant_id), headers=auth
    )
    entry_id = created.json()["data"]["id"]

    response = await client.put(
        f"/api/rent-tracking/{entry_id}",
        json=_payment(
            property_id, tenant_id, payment_method="online", online_reference="TX-1"
        ),
        headers=auth,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["payment_method"] == "online"
    assert data["payment_details"]["online_reference"] == "TX-1"

    [record] = (await client.get("/api/financial", headers=auth)).json()["data"]
    assert record["description"] == "Cash payment for 2024-05"


async def test_get_missing_entry(client, auth):
    """Test that an unknown entry id is not found."""
    response = await client.get("/api/rent-tracking/42", headers=auth)
    assert response.status_code == 404
    assert response.json()["error"] == "Rent tracking record not found or access denied"


async def test_entries_hidden_from_other_accounts(client, auth):
    """Test that another account sees a payment as not found."""
    property_id, tenant_id = await _lease(client, auth)
    created = await client.post(
        "/api/rent-tracking", json=_payment(property_id, tenant_id), headers=auth
    )
    entry_id = created.json()["data"]["id"]

    other = await register(client, "other")
    fetched = await client.get(f"/api/rent-tracking/{entry_id}", headers=other)
    updated = await client.put(
        f"/api/rent-tracking/{entry_id}", json=_payment(property_id, tenant_id), headers=other
    )
    assert fetched.status_code == 404
    assert updated.status_code == 404
