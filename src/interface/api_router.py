"""JSON API consumed by the check-in and statistics pages."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request

from src.domain.task import TaskCatalog
from src.models.service_models import DayStatus, RangeStats, ToggleRequest
from src.services import stats_service, status_service
from src.services.catalog_service import load_catalog
from src.services.record_store import DailyRecordStore


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["api"])


def get_catalog() -> TaskCatalog:
    """Load the task catalog fresh for the current request."""
    return load_catalog()


def get_record_store(request: Request) -> DailyRecordStore:
    """Return the record store created during application startup."""
    return request.app.state.record_store


CatalogDep = Annotated[TaskCatalog, Depends(get_catalog)]
StoreDep = Annotated[DailyRecordStore, Depends(get_record_store)]


@router.get("/health")
async def health() -> dict[str, bool]:
    """Liveness probe."""
    return {"ok": True}


@router.get("/config")
async def get_config(catalog: CatalogDep) -> dict[str, Any]:
    """Return the current task catalog."""
    return catalog.model_dump(mode="json")


@router.get("/status", response_model=DayStatus, response_model_exclude_none=True)
async def get_status(
    catalog: CatalogDep,
    store: StoreDep,
    date: Annotated[str | None, Query(description="Date to read (YYYY-MM-DD); defaults to today")] = None,
) -> DayStatus:
    """Return completions and scores for one date."""
    return await status_service.get_status(catalog, store, date_str=date)


@router.post("/status", response_model=DayStatus, response_model_exclude_none=True)
async def post_status(body: ToggleRequest, catalog: CatalogDep, store: StoreDep) -> DayStatus:
    """Mark a task completed or not completed for a date."""
    return await status_service.toggle_task(catalog, store, body)


@router.get("/stats", response_model=RangeStats)
async def get_stats(
    catalog: CatalogDep,
    store: StoreDep,
    days: Annotated[str | None, Query(description="Window size in days (1-30, default 7)")] = None,
) -> RangeStats:
    """Return per-day scores and the cumulative total for a window ending today."""
    return await stats_service.compute_range(catalog, store, days)
