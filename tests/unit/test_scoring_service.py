"""Unit tests for scoring rules."""

from datetime import date, timedelta

import pytest

from src.domain.record import CompletionEntry
from src.services.catalog_service import parse_catalog
from src.services.scoring_service import day_totals, score_for_task, total_score_per_day


NORMAL_DAY = date(2024, 5, 1)
DOUBLE_DAY = date(2024, 5, 2)


@pytest.mark.unit
class TestScoreForTask:
    """Tests for per-task scores."""

    def test_base_score_on_normal_days(self, make_catalog):
        """Every non-double date scores exactly the base score."""
        catalog = make_catalog(double_score_dates=["2024-05-02"])

        for offset in range(-10, 10):
            day = NORMAL_DAY + timedelta(days=offset)
            if day == DOUBLE_DAY:
                continue
            for task in catalog.tasks:
                assert score_for_task(task, day, catalog) == task.base_score

    def test_double_on_double_score_dates(self, make_catalog):
        """Double-score dates score exactly twice the base score."""
        catalog = make_catalog(double_score_dates=["2024-05-02"])

        for task in catalog.tasks:
            assert score_for_task(task, DOUBLE_DAY, catalog) == task.base_score * 2


@pytest.mark.unit
class TestDayTotals:
    """Tests for per-day totals."""

    def test_totals_for_normal_day(self, catalog):
        """Earned counts only completed tasks."""
        totals = day_totals(catalog, NORMAL_DAY, {"a": CompletionEntry(completed=True, completed_at="t")})

        assert totals.total_score == 3
        assert totals.earned_score == 1
        assert totals.completed_count == 1
        assert totals.task_scores == {"a": 1, "b": 2}

    def test_totals_for_double_day(self, make_catalog):
        """Double-score dates double every task score and the total."""
        catalog = make_catalog(double_score_dates=["2024-05-02"])

        totals = day_totals(catalog, DOUBLE_DAY, {"b": CompletionEntry(completed=True, completed_at="t")})

        assert totals.task_scores == {"a": 2, "b": 4}
        assert totals.total_score == 6
        assert totals.earned_score == 4

    def test_uncompleted_and_unknown_entries_ignored(self, catalog):
        """Not-completed entries and ids outside the catalog earn nothing."""
        completions = {
            "a": CompletionEntry(completed=False),
            "ghost": CompletionEntry(completed=True, completed_at="t"),
        }

        totals = day_totals(catalog, NORMAL_DAY, completions)

        assert totals.earned_score == 0
        assert totals.completed_count == 0

    def test_empty_catalog(self):
        """A catalog with no tasks scores zero."""
        catalog = parse_catalog({"tasks": []})

        totals = day_totals(catalog, NORMAL_DAY, {})

        assert totals.total_score == 0
        assert totals.task_scores == {}


@pytest.mark.unit
def test_total_score_per_day_ignores_doubling(make_catalog):
    """The per-day summary total is the plain sum of base scores."""
    catalog = make_catalog(double_score_dates=["2024-05-02"])

    assert total_score_per_day(catalog) == 3
