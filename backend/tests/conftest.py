"""
Microblog Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── store:        PostStore on a fresh SQLite file, schema created
    ├── mock_store:   AsyncMock standing in for PostStore
    ├── test_client:  HTTPX AsyncClient bound to an app using `store`
    └── mock_client:  HTTPX AsyncClient bound to an app using `mock_store`

Isolation:
    Every test gets its own database file under tmp_path, so tests never
    depend on posts left behind by earlier runs.
"""

import os
import tempfile
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Override settings for testing BEFORE any microblog imports
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///"
    + os.path.join(tempfile.mkdtemp(prefix="microblog_test_"), "default.db")
)
os.environ["LOG_LEVEL"] = "WARNING"

from microblog.main import create_app  # noqa: E402
from microblog.store import PostStore  # noqa: E402


@pytest_asyncio.fixture
async def store(tmp_path):
    """
    Provides a real PostStore backed by a throwaway SQLite file.

    The `posts` table is created up front; the engine is disposed afterwards.
    """
    post_store = PostStore(f"sqlite+aiosqlite:///{tmp_path / 'posts.db'}")
    await post_store.create_schema()
    yield post_store
    await post_store.dispose()


@pytest.fixture
def mock_store():
    """
    Provides a mock store.

    Usage:
        mock_store.insert.side_effect = StoreError("Failed to insert post into database")
    """
    post_store = AsyncMock(spec=PostStore)
    post_store.insert = AsyncMock(return_value=None)
    post_store.fetch_all = AsyncMock(return_value=[])
    return post_store


@pytest_asyncio.fixture
async def test_client(store):
    """
    Provides an async HTTP client talking to an app served from `store`.

    ASGITransport does not run the lifespan, so the store fixture has
    already created the schema.
    """
    app = create_app(store=store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def mock_client(mock_store):
    """Provides an async HTTP client talking to an app served from `mock_store`."""
    app = create_app(store=mock_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
