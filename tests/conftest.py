"""Shared pytest fixtures."""

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from mcphub.catalog import build_store
from mcphub.client import HubClient
from mcphub.config import Settings
from mcphub.main import create_app


@pytest.fixture
def settings():
    return Settings(seed_data=True, playground_latency=0, log_level="WARNING")


@pytest.fixture
def store():
    """A freshly seeded store, isolated from other tests."""
    return build_store(seed=True)


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def hub(app):
    """HubClient talking to the in-process app."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield HubClient(http=http)


@pytest.fixture
def contact_payload():
    """Factory for a valid contact submission."""

    def _make(**overrides):
        payload = {
            "name": "Ada Lovelace",
            "email": "Ada@Example.com",
            "subject": "Partnership",
            "message": "I would like to list my MCP server.",
        }
        payload.update(overrides)
        return payload

    return _make
