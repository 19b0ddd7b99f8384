"""Import per-day JSON files into the SQLite record store.

Older deployments kept one file per date in a data directory:

    data/2024-05-01.json -> {"date": ..., "updatedAt": ..., "status": {...}}

This script copies those documents into the daily_records table verbatim.
Legacy completion values (plain booleans) are kept as-is; the store
normalizes them on read.

The import is idempotent - dates already in the database are skipped unless
--overwrite is given.
"""

import argparse
import asyncio
import json
import logging
import re
import shutil
import sys
from datetime import date, datetime
from pathlib import Path

from src.core.config import constants, settings
from src.core.db_client import close_connection, get_db_path, init_db
from src.services.record_store import SqliteRecordStore


logger = logging.getLogger(__name__)

_FILE_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})\.json$")


def create_backup(*, db_path: Path) -> Path | None:
    """Create a backup of the database before importing, if it exists."""
    if not db_path.exists():
        return None
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.parent / f"{db_path.stem}_backup_{timestamp}{db_path.suffix}"
    shutil.copy2(db_path, backup_path)
    logger.info("Created backup at: %s", backup_path)
    return backup_path


def find_daily_files(source_dir: Path) -> list[tuple[date, Path]]:
    """Return (date, path) for every YYYY-MM-DD.json file, oldest first."""
    found = []
    for path in source_dir.iterdir():
        if not path.is_file():
            continue
        match = _FILE_RE.match(path.name)
        if not match:
            continue
        try:
            found.append((date.fromisoformat(match.group(1)), path))
        except ValueError:
            logger.warning("Skipping file with invalid date name: %s", path.name)
    return sorted(found)


async def import_directory(
    *,
    source_dir: Path,
    store: SqliteRecordStore,
    overwrite: bool = False,
    dry_run: bool = False,
) -> dict[str, int]:
    """Copy every daily file in source_dir into store.

    Returns:
        Counts of imported, skipped, and invalid files
    """
    results = {"imported": 0, "skipped": 0, "invalid": 0}

    for day, path in find_daily_files(source_dir):
        try:
            document = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Skipping unreadable file %s: %s", path.name, e)
            results["invalid"] += 1
            continue

        if not isinstance(document, dict):
            logger.warning("Skipping %s: top level is not an object", path.name)
            results["invalid"] += 1
            continue

        if dry_run:
            logger.info("Would import %s", day.isoformat())
            results["imported"] += 1
            continue

        if await store.import_document(day, document, overwrite=overwrite):
            results["imported"] += 1
        else:
            logger.info("Record for %s already exists, skipping", day.isoformat())
            results["skipped"] += 1

    return results


async def run_import(*, source_dir: Path, db_path: str, overwrite: bool, dry_run: bool) -> dict[str, int]:
    """Initialize the database and import every file from source_dir."""
    store = SqliteRecordStore(db_path=db_path)
    if dry_run:
        return await import_directory(source_dir=source_dir, store=store, dry_run=True)

    create_backup(db_path=get_db_path(db_path))
    await init_db(db_path=db_path)
    try:
        return await import_directory(source_dir=source_dir, store=store, overwrite=overwrite)
    finally:
        await close_connection(db_path=db_path)


def main() -> None:
    """Main entry point for the import script."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Import per-day JSON files into the SQLite record store")
    parser.add_argument(
        "--source",
        type=str,
        default=str(constants.LEGACY_DATA_DIR),
        help="Directory holding YYYY-MM-DD.json files (default: ./data)",
    )
    parser.add_argument(
        "--db-path",
        type=str,
        default=None,
        help="Path to database file (default: uses settings.sqlite_db_path)",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace records that already exist in the database",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List what would be imported without writing anything",
    )

    args = parser.parse_args()

    source_dir = Path(args.source).resolve()
    if not source_dir.is_dir():
        logger.error("Source directory not found: %s", source_dir)
        sys.exit(1)

    db_path = args.db_path or settings.sqlite_db_path
    results = asyncio.run(
        run_import(source_dir=source_dir, db_path=db_path, overwrite=args.overwrite, dry_run=args.dry_run)
    )

    logger.info("Import Summary:")
    for key, value in results.items():
        logger.info("  %s: %s", key, value)


if __name__ == "__main__":
    main()
