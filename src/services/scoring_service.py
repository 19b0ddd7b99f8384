"""Scoring rules: per-task points and per-day totals.

All functions are pure. Scores depend on the date because every task is
worth double on the catalog's double-score dates, so totals must be
computed separately for each date.
"""

from collections.abc import Mapping
from datetime import date

from src.core.config import Constants
from src.domain.record import CompletionEntry
from src.domain.task import TaskCatalog, TaskDefinition
from src.models.service_models import DayTotals


def score_for_task(task: TaskDefinition, day: date, catalog: TaskCatalog) -> int | float:
    """Return the points task is worth on day."""
    if catalog.is_double_score(day):
        return task.base_score * Constants.DOUBLE_SCORE_MULTIPLIER
    return task.base_score


def day_totals(catalog: TaskCatalog, day: date, completions: Mapping[str, CompletionEntry]) -> DayTotals:
    """Compute the available and earned score for one date.

    Completion entries for task ids that are not in the catalog are ignored.
    """
    task_scores: dict[str, int | float] = {}
    total_score: int | float = 0
    earned_score: int | float = 0
    completed_count = 0

    for task in catalog.tasks:
        score = score_for_task(task, day, catalog)
        task_scores[task.id] = score
        total_score += score
        entry = completions.get(task.id)
        if entry is not None and entry.completed:
            earned_score += score
            completed_count += 1

    return DayTotals(
        total_score=total_score,
        earned_score=earned_score,
        completed_count=completed_count,
        task_scores=task_scores,
    )


def total_score_per_day(catalog: TaskCatalog) -> int | float:
    """Sum of base scores, without any doubling."""
    return sum((task.base_score for task in catalog.tasks), 0)
