from datetime import timedelta

from sqlalchemy import update

from estatedesk_backend.core.utils import utc_now
from estatedesk_backend.modules.data_sharing.models import DataShare
from helpers import add_property, add_tenant, register


async def _share(client, headers, **fields):
    response = await client.post("/api/share-data", json=fields, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["data"]


async def test_create_share_link(client, auth):
    """Test that a share returns its token inside the link."""
    share = await _share(client, auth, data_type="properties", expires_in_days=3)
    assert len(share["share_token"]) == 16
    assert share["share_link"] == f"http://testserver?share={share['share_token']}"


async def test_invalid_share_type(client, auth):
    """Test that an unknown data type is rejected."""
    response = await client.post("/api/share-data", json={"data_type": "secrets"}, headers=auth)
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid data type"


async def test_invalid_recipient_email(client, auth):
    """Test that a malformed recipient email is a validation error."""
    response = await client.post(
        "/api/share-data", json={"recipient_email": "nobody"}, headers=auth
    )
    assert response.status_code == 400


async def test_shared_data_is_public_and_scoped(client, auth):
    """Test that anyone with the token sees only the shared scope."""
    await add_property(client, auth)
    await add_tenant(client, auth)
    share = await _share(client, auth, data_type="properties")

    response = await client.get(f"/api/shared-data/{share['share_token']}")
    assert response.status_code == 200
    data = response.json()["data"]
    assert set(data) == {"properties"}
    assert data["properties"][0]["name"] == "Harbour View"


async def test_share_all_names_owner(client, auth):
    """Test that a full share includes every section and its owner."""
    share = await _share(client, auth)
    data = (await client.get(f"/api/shared-data/{share['share_token']}")).json()["data"]
    assert {"properties", "tenants", "maintenance", "financial", "shared_by", "expires_at"} <= set(data)


async def test_expired_share_not_found(client, auth, db):
    """Test that a share past its expiry behaves as missing."""
    share = await _share(client, auth)
    await db.execute(
        update(DataShare)
        .where(DataShare.share_token == share["share_token"])
        .values(expires_at=utc_now() - timedelta(minutes=1))
    )
    await db.commit()

    response = await client.get(f"/api/shared-data/{share['share_token']}")
    assert response.status_code == 404
    assert response.json()["error"] == "Share not found or expired"


async def test_unknown_share_token(client):
    """Test that an unknown token is not found."""
    response = await client.get("/api/shared-data/doesnotexist")
    assert response.status_code == 404


async def test_import_remaps_references(client, auth):
    """Test that imported tenants point at the imported property copies."""
    property_id = await add_property(client, auth, electricity_number="E-9")
    await add_tenant(
        client, auth, property_id=property_id, cheques=[{"cheque_number": "77"}]
    )
    share = await _share(client, auth)

    receiver = await register(client, "receiver")
    response = await client.post(
        "/api/import-shared-data", json={"share_token": share["share_token"]}, headers=receiver
    )
    assert response.status_code == 200
    body = response.json()
    assert body["data"] == {"imported_count": 2, "errors": []}
    assert body["message"] == "Successfully imported 2 items"

    [prop] = (await client.get("/api/properties", headers=receiver)).json()["data"]
    [tenant] = (await client.get("/api/tenants", headers=receiver)).json()["data"]
    assert prop["id"] != property_id
    assert tenant["property_id"] == prop["id"]
    assert [c["cheque_number"] for c in tenant["cheques"]] == ["77"]


async def test_import_twice_reports_duplicates(client, auth):
    """Test that re-importing a property with matching utilities is refused."""
    await add_property(client, auth, electricity_number="E-9")
    share = await _share(client, auth, data_type="properties")
    receiver = await register(client, "receiver")

    first = await client.post(
        "/api/import-shared-data", json={"share_token": share["share_token"]}, headers=receiver
    )
    second = await client.post(
        "/api/import-shared-data", json={"share_token": share["share_token"]}, headers=receiver
    )
    assert first.json()["data"]["imported_count"] == 1
    result = second.json()["data"]
    assert result["imported_count"] == 0
    assert result["errors"][0].startswith("Property Harbour View: Duplicate property found")


async def test_import_requires_token(client, auth):
    """Test that import without a token is rejected."""
    response = await client.post("/api/import-shared-data", json={}, headers=auth)
    assert response.status_code == 400
    assert response.json()["error"] == "Share token is required"


async def test_share_expiry_too_far(client, auth):
    """Test that an unrepresentable expiry is refused."""
    response = await client.post(
        "/api/share-data", json={"expires_in_days": 10**12}, headers=auth
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Share expiry is too far in the future"
