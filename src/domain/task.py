"""Task catalog domain models."""

import math
import re
from datetime import date

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from src.core.config import Constants


_DATE_RE = re.compile(Constants.DATE_FORMAT_PATTERN)


class TaskDefinition(BaseModel):
    """A recurring task the user checks in every day."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, serialize_by_alias=True)

    id: str = Field(..., min_length=1, description="Unique, stable task key")
    title: str = Field(..., description="Display title")
    base_score: int | float = Field(
        default=Constants.DEFAULT_TASK_SCORE,
        validation_alias=AliasChoices("score", "baseScore", "base_score"),
        serialization_alias="score",
        description="Points earned on a normal day (defaults to 1 for older configs)",
    )

    @field_validator("id", "title", mode="before")
    @classmethod
    def _require_string(cls, value: object) -> object:
        if not isinstance(value, str):
            raise ValueError("each task needs a string id and title")
        return value

    @field_validator("base_score", mode="before")
    @classmethod
    def _check_score(cls, value: object) -> object:
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise ValueError("task score must be a number >= 0")
        if not math.isfinite(value) or value < 0:
            raise ValueError("task score must be a number >= 0")
        return value


class TaskCatalog(BaseModel):
    """Ordered task definitions plus the dates on which every score doubles.

    Loaded fresh for each request and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, serialize_by_alias=True)

    tasks: tuple[TaskDefinition, ...] = Field(..., description="Tasks in display order")
    double_score_dates: frozenset[date] = Field(
        default_factory=frozenset,
        validation_alias=AliasChoices("doubleScoreDates", "double_score_dates"),
        serialization_alias="doubleScoreDates",
        description="Dates on which every task's score is doubled",
    )

    @field_validator("tasks", mode="before")
    @classmethod
    def _require_task_list(cls, value: object) -> object:
        if not isinstance(value, list | tuple):
            raise ValueError("missing tasks array")
        return value

    @field_validator("double_score_dates", mode="before")
    @classmethod
    def _parse_dates(cls, value: object) -> object:
        if value is None:
            return frozenset()
        if not isinstance(value, list | tuple | set | frozenset):
            raise ValueError("doubleScoreDates must be an array of YYYY-MM-DD dates")
        parsed = set()
        for item in value:
            if isinstance(item, date):
                parsed.add(item)
                continue
            if not isinstance(item, str) or not _DATE_RE.match(item):
                raise ValueError(f"invalid double score date: {item!r}")
            parsed.add(date.fromisoformat(item))
        return frozenset(parsed)

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "TaskCatalog":
        seen: set[str] = set()
        for task in self.tasks:
            if task.id in seen:
                raise ValueError(f"duplicate task id: {task.id}")
            seen.add(task.id)
        return self

    @field_serializer("double_score_dates")
    def _serialize_dates(self, value: frozenset[date]) -> list[str]:
        return sorted(day.isoformat() for day in value)

    def is_double_score(self, day: date) -> bool:
        return day in self.double_score_dates

    def task_ids(self) -> list[str]:
        return [task.id for task in self.tasks]

    def get_task(self, task_id: str) -> TaskDefinition | None:
        """Return the definition for task_id, or None if it is not in the catalog."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None
