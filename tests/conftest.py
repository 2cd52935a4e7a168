"""Shared fixtures for visitor counter tests."""

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio

from visit_counter.adapters.database import SqlAlchemyVisitorRepository, StorageClient


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """SQLite database file unique to the test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'visitors.db'}"


@pytest_asyncio.fixture
async def storage(database_url: str) -> AsyncIterator[StorageClient]:
    """Open storage client with the schema synchronized."""
    client = StorageClient(database_url)
    await client.open()
    await client.sync_schema()
    yield client
    await client.close()


@pytest.fixture
def repository(storage: StorageClient) -> SqlAlchemyVisitorRepository:
    """Visitor repository over the test database."""
    return SqlAlchemyVisitorRepository(storage)
