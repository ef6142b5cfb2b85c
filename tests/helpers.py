"""Request helpers shared by the API tests."""

from io import BytesIO

from openpyxl import Workbook


async def register(client, username: str = "manager") -> dict:
    """Register an account and return its Authorization header."""
    response = await client.post(
        "/api/register",
        json={
            "username": username,
            "email": f"{username}@example.com",
            "password": "secret-pass",
        },
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['data']['token']}"}


async def add_property(client, headers: dict, **fields) -> int:
    payload = {"name": "Harbour View", "address": "1 Quay St", "type": "apartment"}
    payload.update(fields)
    response = await client.post("/api/properties", json=payload, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["data"]["id"]


async def add_tenant(client, headers: dict, **fields) -> dict:
    payload = {"first_name": "Dana", "last_name": "Reyes", "email": "dana@example.com"}
    payload.update(fields)
    response = await client.post("/api/tenants", json=payload, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["data"]


def workbook_bytes(header: list, *rows: list) -> bytes:
    """An in-memory .xlsx with one sheet."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(header)
    for row in rows:
        sheet.append(row)
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def excel_upload(content: bytes, name: str = "upload.xlsx") -> dict:
    return {"file": (name, content, XLSX)}
