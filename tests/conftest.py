"""Shared fixtures: one application and SQLite database per test."""

import os
from pathlib import Path

os.environ.setdefault(
    "CONFIG", str(Path(__file__).resolve().parents[1] / "resources/config/test.yaml")
)

import httpx
import pytest

from estatedesk_backend.config import settings
from estatedesk_backend.main import create_app
from estatedesk_backend.modules.auth.services import ensure_admin_account
from helpers import register


@pytest.fixture
def test_settings(tmp_path):
    return settings.model_copy(
        update={"database_url": f"sqlite+aiosqlite:///{tmp_path / 'estatedesk.db'}"}
    )


@pytest.fixture
async def app(test_settings):
    # ASGITransport does not run the lifespan, so bootstrap by hand
    application = create_app(test_settings)
    database = application.state.database
    await database.create_all()
    async with database.session_factory() as db:
        await ensure_admin_account(db, test_settings)
    yield application
    await database.dispose()


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


@pytest.fixture
async def db(app):
    """A session on the test database for direct row manipulation."""
    async with app.state.database.session_factory() as session:
        yield session


@pytest.fixture
async def auth(client):
    return await register(client)
