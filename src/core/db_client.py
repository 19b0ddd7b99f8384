"""SQLite connection management and schema for daily records."""

import asyncio
import logging
import threading
from pathlib import Path

import aiosqlite

from src.core.config import Constants, settings


logger = logging.getLogger(__name__)


_SCHEMA = f"""
CREATE TABLE IF NOT EXISTS {Constants.DAILY_RECORDS_TABLE} (
    date TEXT PRIMARY KEY,
    updated_at TEXT NOT NULL,
    status TEXT NOT NULL
)
"""


def get_db_path(db_path: str | None = None) -> Path:
    """Get the resolved SQLite database file path."""
    path_str = db_path or settings.sqlite_db_path
    return settings.resolve_path(path_str).resolve()


_db_connections: dict[tuple[int, int, str], aiosqlite.Connection] = {}
_db_lock = asyncio.Lock()


def _cache_key(db_path: str | None) -> tuple[int, int, str]:
    thread_id = threading.get_ident()
    loop_id = id(asyncio.get_running_loop())
    return thread_id, loop_id, str(get_db_path(db_path))


async def get_connection(*, db_path: str | None = None) -> aiosqlite.Connection:
    """Get or create a cached connection for the current thread, loop, and db path."""
    cache_key = _cache_key(db_path)

    if cache_key in _db_connections:
        return _db_connections[cache_key]

    # Create new connection with async lock to prevent races
    async with _db_lock:
        # Double-check after acquiring lock
        if cache_key in _db_connections:
            return _db_connections[cache_key]

        path = get_db_path(db_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        conn = await aiosqlite.connect(str(path))
        await conn.execute("PRAGMA journal_mode = WAL")

        _db_connections[cache_key] = conn

        logger.info(
            "Created new SQLite connection",
            extra={"db_path": str(path), "thread_id": cache_key[0], "loop_id": cache_key[1]},
        )
        return conn


async def close_connection(*, db_path: str | None = None) -> None:
    """Close the cached SQLite connection for the current thread, loop, and db path."""
    cache_key = _cache_key(db_path)

    if cache_key not in _db_connections:
        return

    try:
        async with _db_lock:
            conn = _db_connections.pop(cache_key, None)
            if conn is not None:
                await conn.close()
                logger.info("Closed SQLite connection", extra={"db_path": cache_key[2]})
    except Exception as e:
        logger.warning("Error closing SQLite connection", extra={"error": str(e), "db_path": cache_key[2]})


async def init_db(*, db_path: str | None = None) -> None:
    """Create the daily_records table if it does not exist."""
    conn = await get_connection(db_path=db_path)
    await conn.execute(_SCHEMA)
    await conn.commit()
    logger.info("Database schema ready", extra={"db_path": str(get_db_path(db_path))})
