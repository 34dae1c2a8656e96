"""
Todo API Backend: Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_storage: AsyncMock standing in for a TodoStorage
    ├── sql_storage: Real relational backend on a private in-memory SQLite DB
    ├── sample_todo_data: Wire-format todo body
    ├── app: Fresh FastAPI app (own storage)
    └── test_client: HTTPX AsyncClient with the app lifespan running
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_PROVIDER"] = "InMemory"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["COSMOS_CONNECTION_STRING"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from todoapi.config import Settings
from todoapi.database import build_storage
from todoapi.services.storage_base import TodoStorage


@pytest.fixture
def mock_storage():
    """
    Provides a mock storage backend.

    Every abstract method is an AsyncMock, so tests set return values with
    `mock_storage.get_by_identifier.return_value = ...`.
    """
    return AsyncMock(spec=TodoStorage)


@pytest_asyncio.fixture
async def sql_storage():
    """
    Provides the relational backend over a fresh in-memory SQLite database.

    Each test gets its own engine, so no rows leak between tests.
    """
    storage = await build_storage(
        Settings(
            _env_file=None,
            database_provider="InMemory",
            database_url="sqlite+aiosqlite:///:memory:",
        )
    )
    yield storage
    await storage.close()


@pytest.fixture
def sample_todo_data():
    """Wire-format body for create requests."""
    return {"name": "Buy milk", "isComplete": False}


@pytest.fixture
def app():
    from todoapi.main import create_app
    return create_app()


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not send lifespan events, so the lifespan is entered
    here; that is where the storage backend is built.
    """
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
