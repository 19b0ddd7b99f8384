"""Daily status queries and the completion toggle."""

import logging
from datetime import date

from src.core.dates import resolve_date
from src.core.errors import ErrorCode, ValidationError
from src.core.logging import log_with_context, span
from src.domain.record import Completions
from src.domain.task import TaskCatalog
from src.models.service_models import DayStatus, ToggleRequest
from src.services.record_store import DailyRecordStore, set_completed
from src.services.scoring_service import day_totals


logger = logging.getLogger(__name__)


def build_day_status(catalog: TaskCatalog, day: date, completions: Completions) -> DayStatus:
    """Combine stored completions with that date's scores."""
    totals = day_totals(catalog, day, completions)
    return DayStatus(
        date=day,
        status=completions,
        total_score=totals.total_score,
        earned_score=totals.earned_score,
        task_scores=totals.task_scores,
    )


async def get_status(catalog: TaskCatalog, store: DailyRecordStore, *, date_str: str | None = None) -> DayStatus:
    """Return completions and scores for a date (today when not given).

    Raises:
        ValidationError: If date_str is not a YYYY-MM-DD date
    """
    day = resolve_date(date_str)
    with span("status_service.get_status"):
        completions = await store.read(day)
        return build_day_status(catalog, day, completions)


async def toggle_task(catalog: TaskCatalog, store: DailyRecordStore, request: ToggleRequest) -> DayStatus:
    """Mark a task completed or not completed for a date and persist it.

    All input is validated before the store is touched, so a rejected
    request never writes anything.

    Raises:
        ValidationError: If the date is malformed or the task id is empty or unknown
        StorageError: If the record cannot be read or written
    """
    day = resolve_date(request.date)
    task_id = request.task_id or ""
    if not task_id:
        raise ValidationError("taskId is required", code=ErrorCode.ERR_TASK_ID_REQUIRED)
    if catalog.get_task(task_id) is None:
        raise ValidationError("unknown taskId", code=ErrorCode.ERR_UNKNOWN_TASK)

    def apply(completions: Completions) -> Completions:
        completions[task_id] = set_completed(completions.get(task_id), request.completed)
        return completions

    with span("status_service.toggle_task"):
        updated = await store.update_record(day, apply)

    log_with_context(
        logger,
        "info",
        "Task toggled",
        date=day.isoformat(),
        task_id=task_id,
        completed=request.completed,
    )
    return build_day_status(catalog, day, updated)
