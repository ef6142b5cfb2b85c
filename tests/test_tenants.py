from datetime import date

import pytest

from estatedesk_backend.core.exceptions import ValidationError
from estatedesk_backend.modules.tenant_management.services import resolve_free_month
from helpers import add_property, add_tenant, register


def test_free_month_first_is_lease_start():
    """Test that a first-month concession uses the lease start month."""
    assert resolve_free_month("first", date(2024, 3, 15), date(2025, 3, 14)) == "2024-03"


def test_free_month_last_is_month_before_lease_end():
    """Test that a last-month concession is the month before the lease ends."""
    assert resolve_free_month("last", date(2024, 3, 1), date(2025, 3, 31)) == "2025-02"


def test_free_month_custom_and_invalid():
    """Test that a custom month must be YYYY-MM."""
    assert resolve_free_month("custom", None, None, "2024-07") == "2024-07"
    with pytest.raises(ValidationError):
        resolve_free_month("custom", None, None, "July")
    assert resolve_free_month(None, None, None) is None


async def test_create_tenant_with_property_and_cheques(client, auth):
    """Test that a tenant is created together with its cheques."""
    property_id = await add_property(client, auth)
    tenant = await add_tenant(
        client,
        auth,
        property_id=property_id,
        lease_start="2024-01-01",
        lease_end="2024-12-31",
        free_month_type="first",
        cheques=[
            {"cheque_number": "001", "bank_name": "ABC", "cheque_date": "2024-01-01", "amount": 1000},
            {"cheque_number": "SEC", "amount": "500", "is_security": True},
        ],
    )
    assert tenant["property_name"] == "Harbour View"
    assert tenant["free_month_date"] == "2024-01"
    assert [c["cheque_number"] for c in tenant["cheques"]] == ["001", "SEC"]
    assert tenant["cheques"][1]["is_security"] is True


async def test_tenant_requires_names_and_email(client, auth):
    """Test that a tenant without a last name is rejected."""
    response = await client.post(
        "/api/tenants", json={"first_name": "Dana", "email": "d@example.com"}, headers=auth
    )
    assert response.status_code == 400
    assert response.json()["error"] == "First name, last name, and email are required"


async def test_tenant_invalid_email(client, auth):
    """Test that a malformed tenant email is rejected."""
    response = await client.post(
        "/api/tenants",
        json={"first_name": "Dana", "last_name": "Reyes", "email": "not-an-email"},
        headers=auth,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid email format"


async def test_tenant_foreign_property_rejected(client, auth):
    """Test that a tenant cannot be linked to another account's property."""
    other = await register(client, "neighbour")
    foreign_property = await add_property(client, other)

    response = await client.post(
        "/api/tenants",
        json={
            "first_name": "Dana",
            "last_name": "Reyes",
            "email": "dana@example.com",
            "property_id": foreign_property,
        },
        headers=auth,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Property not found or access denied"


async def test_update_replaces_cheques(client, auth):
    """Test that a supplied cheque list replaces the stored cheques."""
    tenant = await add_tenant(
        client, auth, cheques=[{"cheque_number": "1"}, {"cheque_number": "2"}]
    )

    response = await client.put(
        f"/api/tenants/{tenant['id']}",
        json={"cheques": [{"cheque_number": "9", "amount": 750}]},
        headers=auth,
    )
    assert response.status_code == 200
    cheques = response.json()["data"]["cheques"]
    assert [c["cheque_number"] for c in cheques] == ["9"]


async def test_update_without_cheques_keeps_them(client, auth):
    """Test that omitting cheques on update leaves them untouched."""
    tenant = await add_tenant(client, auth, cheques=[{"cheque_number": "1"}])

    response = await client.put(
        f"/api/tenants/{tenant['id']}", json={"phone": "555-0101"}, headers=auth
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["phone"] == "555-0101"
    assert len(data["cheques"]) == 1


async def test_failed_update_keeps_old_cheques(client, auth):
    """Test that a rejected update does not touch the cheque set."""
    tenant = await add_tenant(client, auth, cheques=[{"cheque_number": "1"}])

    response = await client.put(
        f"/api/tenants/{tenant['id']}",
        json={"email": "broken", "cheques": []},
        headers=auth,
    )
    assert response.status_code == 400

    fetched = await client.get(f"/api/tenants/{tenant['id']}", headers=auth)
    assert len(fetched.json()["data"]["cheques"]) == 1


async def test_delete_tenant(client, auth):
    """Test that a deleted tenant can no longer be fetched."""
    tenant = await add_tenant(client, auth)
    response = await client.delete(f"/api/tenants/{tenant['id']}", headers=auth)
    assert response.status_code == 200
    assert (await client.get(f"/api/tenants/{tenant['id']}", headers=auth)).status_code == 404


async def test_tenants_hidden_from_other_accounts(client, auth):
    """Test that another account can neither read, edit nor delete a tenant."""
    tenant = await add_tenant(client, auth)
    other = await register(client, "other")
    url = f"/api/tenants/{tenant['id']}"

    fetched = await client.get(url, headers=other)
    updated = await client.put(
        url,
        json={"first_name": "Mallory", "last_name": "Reyes", "email": "m@example.com"},
        headers=other,
    )
    deleted = await client.delete(url, headers=other)
    assert [fetched.status_code, updated.status_code, deleted.status_code] == [404, 404, 404]

    kept = (await client.get(url, headers=auth)).json()["data"]
    assert kept["first_name"] == "Dana"
    assert kept["email"] == "dana@example.com"


async def test_out_of_range_property_reference(client, auth):
    """Test that a property id beyond the integer range is a client error."""
    response = await client.post(
        "/api/tenants",
        json={
            "first_name": "Dana",
            "last_name": "Reyes",
            "email": "dana@example.com",
            "property_id": "99999999999999999999",
        },
        headers=auth,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid value for property_id"
