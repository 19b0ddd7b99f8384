"""Daily record storage.

The store is a key-value abstraction over calendar date -> daily record.
Callers never see the persisted layout or the legacy completion shapes;
reads always return canonical CompletionEntry values.

Implementations:
- InMemoryRecordStore: dict-backed, used by tests and local tooling
- SqliteRecordStore: aiosqlite-backed, used by the running service
"""

import asyncio
import copy
import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from datetime import date
from typing import Any

import aiosqlite

from src.core import db_client
from src.core.config import Constants
from src.core.dates import format_date, utc_now_iso
from src.core.errors import StorageError
from src.domain.record import CompletionEntry, Completions, DailyRecord, decode_status


logger = logging.getLogger(__name__)

Mutator = Callable[[Completions], Completions]


def set_completed(existing: CompletionEntry | None, completed: bool, *, now: str | None = None) -> CompletionEntry:
    """Return the entry a task should have after being marked (un)completed.

    The first completion time of a day wins: re-completing an entry that is
    already completed with a timestamp returns it unchanged. Un-completing
    always clears the timestamp.
    """
    if not completed:
        return CompletionEntry(completed=False)
    if existing is not None and existing.completed and existing.completed_at:
        return existing
    return CompletionEntry(completed=True, completed_at=now or utc_now_iso())


class DailyRecordStore(ABC):
    """Persists one completion mapping per calendar date."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    @abstractmethod
    async def _load_document(self, key: str) -> object | None:
        """Return the persisted document for key, or None if there is none."""

    @abstractmethod
    async def _save_document(self, key: str, document: dict[str, Any]) -> None:
        """Replace the persisted document for key."""

    @abstractmethod
    async def list_dates(self) -> list[date]:
        """Return every date with a persisted record, ascending."""

    async def read(self, day: date) -> Completions:
        """Return the completions recorded for day; empty if nothing was written."""
        document = await self._load_document(format_date(day))
        if document is None:
            return {}
        return decode_status(document)

    async def write(self, day: date, completions: Mapping[str, CompletionEntry]) -> DailyRecord:
        """Replace the whole record for day. This is not a merge."""
        record = DailyRecord(date=format_date(day), updated_at=utc_now_iso(), completions=dict(completions))
        await self._save_document(record.date, record.to_document())
        logger.info("Wrote daily record", extra={"date": record.date, "tasks": len(record.completions)})
        return record

    async def update_record(self, day: date, mutator: Mutator) -> Completions:
        """Read, mutate, and write the record for day under a per-date lock.

        Concurrent updates to the same date are applied one after another, so
        toggles for different tasks on one day cannot overwrite each other.
        """
        key = format_date(day)
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._lock_users[key] = self._lock_users.get(key, 0) + 1
        try:
            async with lock:
                current = await self.read(day)
                updated = mutator(dict(current))
                await self.write(day, updated)
                return updated
        finally:
            # Drop the lock once no update for this date holds or awaits it.
            self._lock_users[key] -= 1
            if not self._lock_users[key]:
                del self._lock_users[key]
                del self._locks[key]


class InMemoryRecordStore(DailyRecordStore):
    """Dict-backed store holding raw documents, legacy shapes included."""

    def __init__(self, documents: Mapping[str, object] | None = None) -> None:
        super().__init__()
        self._documents: dict[str, object] = {key: copy.deepcopy(doc) for key, doc in (documents or {}).items()}

    async def _load_document(self, key: str) -> object | None:
        return copy.deepcopy(self._documents.get(key))

    async def _save_document(self, key: str, document: dict[str, Any]) -> None:
        self._documents[key] = copy.deepcopy(document)

    async def list_dates(self) -> list[date]:
        dates = []
        for key in self._documents:
            try:
                dates.append(date.fromisoformat(key))
            except ValueError:
                logger.warning("Ignoring record with invalid date key", extra={"key": key})
        return sorted(dates)

    def raw_document(self, day: date) -> object | None:
        """Return a copy of the stored document for day, for inspection."""
        return copy.deepcopy(self._documents.get(format_date(day)))


class SqliteRecordStore(DailyRecordStore):
    """Stores each daily record as a row in the daily_records table."""

    def __init__(self, *, db_path: str | None = None) -> None:
        super().__init__()
        self._db_path = db_path
        self._table = Constants.DAILY_RECORDS_TABLE

    async def _connection(self) -> aiosqlite.Connection:
        return await db_client.get_connection(db_path=self._db_path)

    async def _load_document(self, key: str) -> object | None:
        try:
            conn = await self._connection()
            cursor = await conn.execute(
                f"SELECT date, updated_at, status FROM {self._table} WHERE date = ?",  # noqa: S608 - constant table
                (key,),
            )
            row = await cursor.fetchone()
        except (aiosqlite.Error, OSError) as e:
            logger.error("daily_record_read_failed", extra={"date": key, "error": str(e)})
            raise StorageError(f"Failed to read daily record {key}: {e}") from e

        if row is None:
            return None

        try:
            status = json.loads(row[2])
        except json.JSONDecodeError as e:
            logger.error("daily_record_corrupt", extra={"date": key, "error": str(e)})
            raise StorageError(f"Daily record {key} is corrupt: {e.msg}") from e

        return {"date": row[0], "updatedAt": row[1], "status": status}

    async def _save_document(self, key: str, document: dict[str, Any]) -> None:
        await self._upsert(key, document, overwrite=True)

    async def _upsert(self, key: str, document: Mapping[str, Any], *, overwrite: bool) -> bool:
        verb = "INSERT OR REPLACE" if overwrite else "INSERT OR IGNORE"
        updated_at = document.get("updatedAt")
        if not isinstance(updated_at, str):
            updated_at = utc_now_iso()
        try:
            conn = await self._connection()
            cursor = await conn.execute(
                f"{verb} INTO {self._table} (date, updated_at, status) VALUES (?, ?, ?)",  # noqa: S608 - constant table
                (key, updated_at, json.dumps(document.get("status", {}))),
            )
            await conn.commit()
        except (aiosqlite.Error, OSError, TypeError) as e:
            logger.error("daily_record_write_failed", extra={"date": key, "error": str(e)})
            raise StorageError(f"Failed to write daily record {key}: {e}") from e
        return cursor.rowcount > 0

    async def import_document(self, day: date, document: Mapping[str, Any], *, overwrite: bool = False) -> bool:
        """Store a persisted document verbatim, legacy shapes included.

        Returns:
            True if a row was written, False if the date already existed
        """
        return await self._upsert(format_date(day), document, overwrite=overwrite)

    async def list_dates(self) -> list[date]:
        try:
            conn = await self._connection()
            cursor = await conn.execute(f"SELECT date FROM {self._table} ORDER BY date ASC")  # noqa: S608 - constant table
            rows = await cursor.fetchall()
        except (aiosqlite.Error, OSError) as e:
            logger.error("daily_record_list_failed", extra={"error": str(e)})
            raise StorageError(f"Failed to list daily records: {e}") from e

        dates = []
        for (key,) in rows:
            try:
                dates.append(date.fromisoformat(key))
            except ValueError:
                logger.warning("Ignoring record with invalid date key", extra={"key": key})
        return dates
