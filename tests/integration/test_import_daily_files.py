"""Integration tests for the daily file import script."""

import json
from datetime import date

import pytest

from scripts.import_daily_files import find_daily_files, import_directory, run_import
from src.core.db_client import close_connection
from src.domain.record import CompletionEntry
from src.services.record_store import SqliteRecordStore


@pytest.fixture
def legacy_dir(tmp_path):
    """A data directory in the per-day file layout."""
    source = tmp_path / "data"
    source.mkdir()
    (source / "2024-05-01.json").write_text(
        json.dumps({"date": "2024-05-01", "updatedAt": "2024-05-01T20:00:00.000Z", "status": {"a": True}}),
        encoding="utf-8",
    )
    (source / "2024-05-02.json").write_text(
        json.dumps(
            {
                "date": "2024-05-02",
                "updatedAt": "2024-05-02T20:00:00.000Z",
                "status": {"b": {"completed": True, "completedAt": "2024-05-02T07:00:00.000Z"}},
            }
        ),
        encoding="utf-8",
    )
    (source / "2024-05-03.json").write_text("{broken", encoding="utf-8")
    (source / "notes.txt").write_text("ignored", encoding="utf-8")
    return source


@pytest.mark.integration
def test_find_daily_files(legacy_dir):
    """Only YYYY-MM-DD.json files are picked up, oldest first."""
    found = find_daily_files(legacy_dir)

    assert [day for day, _ in found] == [date(2024, 5, 1), date(2024, 5, 2), date(2024, 5, 3)]


@pytest.mark.integration
async def test_import_directory(legacy_dir, sqlite_store):
    """Valid files are imported; broken ones are counted as invalid."""
    results = await import_directory(source_dir=legacy_dir, store=sqlite_store)

    assert results == {"imported": 2, "skipped": 0, "invalid": 1}
    assert await sqlite_store.read(date(2024, 5, 1)) == {"a": CompletionEntry(completed=True)}
    assert await sqlite_store.read(date(2024, 5, 2)) == {
        "b": CompletionEntry(completed=True, completed_at="2024-05-02T07:00:00.000Z")
    }


@pytest.mark.integration
async def test_import_is_idempotent(legacy_dir, sqlite_store):
    """Re-running the import skips dates that already exist."""
    await import_directory(source_dir=legacy_dir, store=sqlite_store)

    results = await import_directory(source_dir=legacy_dir, store=sqlite_store)

    assert results == {"imported": 0, "skipped": 2, "invalid": 1}


@pytest.mark.integration
async def test_dry_run_writes_nothing(legacy_dir, tmp_path):
    """A dry run reports what it would import without creating the database."""
    db_path = tmp_path / "dry.db"

    results = await run_import(source_dir=legacy_dir, db_path=str(db_path), overwrite=False, dry_run=True)

    assert results["imported"] == 2
    assert not db_path.exists()


@pytest.mark.integration
async def test_run_import_creates_database(legacy_dir, tmp_path):
    """run_import initializes the schema and imports every valid file."""
    db_path = str(tmp_path / "fresh.db")

    results = await run_import(source_dir=legacy_dir, db_path=db_path, overwrite=False, dry_run=False)

    assert results["imported"] == 2
    store = SqliteRecordStore(db_path=db_path)
    try:
        assert await store.list_dates() == [date(2024, 5, 1), date(2024, 5, 2)]
    finally:
        await close_connection(db_path=db_path)
