"""Root conftest — shared test configuration and fixtures.

Invariants:
    - Tests never reach a real MongoDB: app.state.store is an in-memory FakeStore
    - Lifespan does not run under ASGITransport, so the fixture installs the store itself
"""

import os

# Ensure tests don't accidentally point at a real database
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017/users_rest_api_test")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.core.entity_schemas import GROUP_SCHEMA, USER_SCHEMA  # noqa: E402
from app.main import app  # noqa: E402
from tests.fake_mongo import FakeStore  # noqa: E402


@pytest.fixture
def fake_store():
    return FakeStore(unique_fields={
        USER_SCHEMA.collection: USER_SCHEMA.unique_fields,
        GROUP_SCHEMA.collection: GROUP_SCHEMA.unique_fields,
    })


@pytest.fixture
async def client(fake_store):
    """FastAPI test client with the fake store installed on app.state."""
    original_store = getattr(app.state, "store", None)
    app.state.store = fake_store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.state.store = original_store


@pytest.fixture
def user_payload():
    return {
        "username": "john_doe",
        "email": "john@example.com",
        "password": "secret123",
    }
