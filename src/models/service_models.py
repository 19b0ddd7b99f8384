"""Pydantic models for service layer return types.

These models are also the JSON shapes the API returns, so fields serialize
to camelCase.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.domain.record import Completions


class _ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, serialize_by_alias=True)


class DayTotals(_ApiModel):
    """Scores for one date, with double-score dates already applied."""

    total_score: int | float
    earned_score: int | float
    completed_count: int
    task_scores: dict[str, int | float]


class DayStats(_ApiModel):
    """One point of the statistics series."""

    date: date
    completed_count: int
    earned_score: int | float
    total_score: int | float
    cumulative_earned_score: int | float


class RangeStats(_ApiModel):
    """Statistics for a window of days ending today."""

    days: int
    tasks_count: int
    total_score_per_day: int | float
    total_earned_before_range: int | float
    data: list[DayStats]


class DayStatus(_ApiModel):
    """Completion state and scores for one date."""

    date: date
    status: Completions
    total_score: int | float
    earned_score: int | float
    task_scores: dict[str, int | float]


class ToggleRequest(_ApiModel):
    """Body of a completion toggle request."""

    date: str | None = Field(default=None, description="Target date (YYYY-MM-DD); defaults to today")
    task_id: str | None = Field(default=None, description="Task to toggle")
    completed: bool = Field(default=False, description="New completion state")

    @field_validator("task_id", mode="before")
    @classmethod
    def _coerce_numeric_task_id(cls, value: object) -> object:
        """Numeric ids are looked up by their string form."""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value
