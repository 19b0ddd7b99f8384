"""Pytest configuration and fixtures for integration tests."""

from collections.abc import AsyncIterator, Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.core.db_client import close_connection, init_db
from src.interface.api_router import get_catalog, get_record_store
from src.main import app
from src.services.catalog_service import parse_catalog
from src.services.record_store import InMemoryRecordStore, SqliteRecordStore


CATALOG_DOCUMENT = {
    "tasks": [
        {"id": "a", "title": "Task A", "score": 1},
        {"id": "b", "title": "Task B", "score": 2},
    ],
    "doubleScoreDates": ["2024-05-02"],
}


@pytest.fixture
def api_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def catalog_document() -> dict:
    """Mutable catalog document; tests may edit it between requests."""
    return {"tasks": list(CATALOG_DOCUMENT["tasks"]), "doubleScoreDates": list(CATALOG_DOCUMENT["doubleScoreDates"])}


@pytest.fixture
def client(api_store: InMemoryRecordStore, catalog_document: dict) -> Iterator[TestClient]:
    """Test client wired to an in-memory store and a catalog re-parsed per request."""
    app.dependency_overrides[get_catalog] = lambda: parse_catalog(catalog_document)
    app.dependency_overrides[get_record_store] = lambda: api_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def sqlite_store(tmp_path: Path) -> AsyncIterator[SqliteRecordStore]:
    """SQLite-backed store in a temporary database file."""
    db_path = str(tmp_path / "daily_tasks.db")
    await init_db(db_path=db_path)
    try:
        yield SqliteRecordStore(db_path=db_path)
    finally:
        await close_connection(db_path=db_path)
