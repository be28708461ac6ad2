"""Fixtures for API tests."""

import pytest
from httpx import ASGITransport, AsyncClient

from inventory_pos.api.dependencies import get_client_id
from inventory_pos.api.main import app


@pytest.fixture
def api_app():
    """The app with the tenant header resolved to ``tenant-usd``."""
    app.dependency_overrides[get_client_id] = lambda: "tenant-usd"
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def api_client(api_app):
    transport = ASGITransport(app=api_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
