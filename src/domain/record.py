"""Daily record domain models and the persisted-document codec.

Two completion shapes exist on disk:
- legacy: ``{"<task_id>": true}``
- current: ``{"<task_id>": {"completed": true, "completedAt": "..."}}``

Both are decoded here into CompletionEntry. Nothing outside the store sees
the raw shapes.
"""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


logger = logging.getLogger(__name__)


class CompletionEntry(BaseModel):
    """Whether a task was done on a date and when it was first marked done."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, serialize_by_alias=True)

    completed: bool = Field(..., description="Whether the task is marked done")
    completed_at: str | None = Field(
        default=None,
        alias="completedAt",
        description="First completion time (ISO format); absent when not completed",
    )

    def to_document(self) -> dict[str, Any]:
        """Return the current on-disk shape for this entry."""
        return self.model_dump(by_alias=True, exclude_none=True)


Completions = dict[str, CompletionEntry]


class DailyRecord(BaseModel):
    """Persisted completion state for a single calendar date."""

    date: str = Field(..., description="Calendar date (YYYY-MM-DD)")
    updated_at: str = Field(..., description="Last write timestamp (ISO format)")
    completions: Completions = Field(default_factory=dict, description="Task id to completion entry")

    def to_document(self) -> dict[str, Any]:
        """Return the persisted document for this record."""
        return {
            "date": self.date,
            "updatedAt": self.updated_at,
            "status": encode_status(self.completions),
        }


def decode_entry(raw: object) -> CompletionEntry | None:
    """Decode one persisted completion value, or return None if unusable."""
    if isinstance(raw, bool):
        return CompletionEntry(completed=raw)
    if isinstance(raw, dict):
        completed = bool(raw.get("completed"))
        completed_at = raw.get("completedAt")
        if not completed or not isinstance(completed_at, str):
            completed_at = None
        return CompletionEntry(completed=completed, completed_at=completed_at)
    return None


def decode_status(document: object) -> Completions:
    """Decode the ``status`` mapping of a persisted daily document.

    Documents that are not objects, or whose status is not an object, decode
    to an empty mapping. Malformed per-task values are dropped.
    """
    if not isinstance(document, dict):
        return {}
    status = document.get("status")
    if not isinstance(status, dict):
        return {}

    completions: Completions = {}
    for task_id, raw in status.items():
        entry = decode_entry(raw)
        if entry is None:
            logger.debug("Dropping malformed completion value", extra={"task_id": task_id})
            continue
        completions[str(task_id)] = entry
    return completions


def encode_status(completions: Completions) -> dict[str, dict[str, Any]]:
    return {task_id: entry.to_document() for task_id, entry in completions.items()}
