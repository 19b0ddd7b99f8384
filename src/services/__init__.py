from src.services import (
    catalog_service,
    scoring_service,
    stats_service,
    status_service,
)


__all__ = [
    "catalog_service",
    "scoring_service",
    "stats_service",
    "status_service",
]
