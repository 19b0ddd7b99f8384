"""Statistics over a window of days.

Key Concepts:
- Range: the `days` consecutive dates ending today, oldest first.
- Carry-in baseline: earned score of every persisted date before the range.
  Each of those dates is scored with its own double-score status.
- Cumulative: baseline plus earned scores up to and including each date.

Every persisted record is scanned on each call (O(history)). Record counts
are small (one per day used), so no running-total ledger is kept.
"""

import logging
import math
from datetime import date

from src.core.config import Constants, settings
from src.core.dates import date_range_ending, today as current_date
from src.core.logging import span
from src.domain.task import TaskCatalog
from src.models.service_models import DayStats, RangeStats
from src.services.record_store import DailyRecordStore
from src.services.scoring_service import day_totals, total_score_per_day


logger = logging.getLogger(__name__)


def parse_days(raw: object) -> int:
    """Turn a requested window size into a day count within the allowed bounds.

    Missing, non-numeric, and zero values fall back to the default. Infinite
    values clamp to the nearest bound and fractions are truncated before
    clamping.
    """
    default = settings.stats_default_days
    if raw is None or isinstance(raw, bool):
        return default
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    if math.isnan(value) or value == 0:
        return default
    if math.isinf(value):
        return settings.stats_max_days if value > 0 else Constants.STATS_MIN_DAYS
    return max(Constants.STATS_MIN_DAYS, min(settings.stats_max_days, int(value)))


async def compute_range(
    catalog: TaskCatalog,
    store: DailyRecordStore,
    days: object = None,
    *,
    today: date | None = None,
) -> RangeStats:
    """Build the per-day series and summary for the window ending today.

    Args:
        catalog: Task catalog loaded for this request
        store: Daily record store to read history from
        days: Requested window size (see parse_days)
        today: Last date of the window; defaults to the current date

    Returns:
        RangeStats with one DayStats per date in the window
    """
    with span("stats_service.compute_range"):
        window = parse_days(days)
        end = today or current_date()
        range_dates = date_range_ending(end, window)
        range_start = range_dates[0]

        history = await store.list_dates()
        total_earned_before_range: int | float = 0
        scanned = 0
        for day in history:
            if day >= range_start:
                continue
            completions = await store.read(day)
            total_earned_before_range += day_totals(catalog, day, completions).earned_score
            scanned += 1

        logger.debug(
            "Scanned history for carry-in baseline",
            extra={"persisted_dates": len(history), "scanned": scanned, "baseline": total_earned_before_range},
        )

        cumulative = total_earned_before_range
        data: list[DayStats] = []
        for day in range_dates:
            completions = await store.read(day)
            totals = day_totals(catalog, day, completions)
            cumulative += totals.earned_score
            data.append(
                DayStats(
                    date=day,
                    completed_count=totals.completed_count,
                    earned_score=totals.earned_score,
                    total_score=totals.total_score,
                    cumulative_earned_score=cumulative,
                )
            )

        result = RangeStats(
            days=window,
            tasks_count=len(catalog.tasks),
            total_score_per_day=total_score_per_day(catalog),
            total_earned_before_range=total_earned_before_range,
            data=data,
        )

        logger.info(
            "Computed range statistics",
            extra={"days": window, "start": range_start.isoformat(), "end": end.isoformat()},
        )
        return result
