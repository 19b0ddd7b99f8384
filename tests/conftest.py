"""Pytest configuration and shared fixtures."""

import itertools
import json
from collections.abc import Callable, Iterator
from datetime import date
from pathlib import Path
from typing import Any

import pytest

from src.domain.task import TaskCatalog
from src.services.catalog_service import parse_catalog
from src.services.record_store import InMemoryRecordStore


# Fixed "today" used by tests that depend on the current date
TODAY = date(2024, 5, 10)


@pytest.fixture
def catalog() -> TaskCatalog:
    """Two tasks worth 1 and 2 points, no double-score dates."""
    return parse_catalog(
        {
            "tasks": [
                {"id": "a", "title": "Task A", "score": 1},
                {"id": "b", "title": "Task B", "score": 2},
            ]
        }
    )


@pytest.fixture
def make_catalog() -> Callable[..., TaskCatalog]:
    """Factory for catalogs with custom double-score dates."""

    def _make(*, double_score_dates: list[str] | None = None, tasks: list[dict[str, Any]] | None = None) -> TaskCatalog:
        return parse_catalog(
            {
                "tasks": tasks
                or [
                    {"id": "a", "title": "Task A", "score": 1},
                    {"id": "b", "title": "Task B", "score": 2},
                ],
                "doubleScoreDates": double_score_dates or [],
            }
        )

    return _make


@pytest.fixture
def store() -> InMemoryRecordStore:
    """Provides a fresh in-memory record store for each test."""
    return InMemoryRecordStore()


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[object], Path]:
    """Write a catalog document to a temporary tasks.config.json."""

    def _write(document: object) -> Path:
        path = tmp_path / "tasks.config.json"
        text = document if isinstance(document, str) else json.dumps(document)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fixed_timestamps(monkeypatch) -> Iterator[list[str]]:
    """Make completion timestamps predictable: T1, T2, T3, ..."""
    counter = itertools.count(1)
    issued: list[str] = []

    def _next() -> str:
        value = f"2024-05-10T08:00:0{next(counter)}.000Z"
        issued.append(value)
        return value

    monkeypatch.setattr("src.services.record_store.utc_now_iso", _next)
    yield issued
