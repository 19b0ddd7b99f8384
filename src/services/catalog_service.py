"""Task catalog loading and validation."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from src.core.config import settings
from src.core.errors import ConfigError
from src.domain.task import TaskCatalog


logger = logging.getLogger(__name__)


def _describe(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    message = first["msg"].removeprefix("Value error, ")
    return f"{location}: {message}" if location else message


def parse_catalog(data: object) -> TaskCatalog:
    """Validate an already-decoded catalog document.

    Raises:
        ConfigError: If the document does not describe a valid catalog
    """
    if not isinstance(data, dict):
        raise ConfigError("Invalid tasks config: expected a JSON object")
    try:
        return TaskCatalog.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid tasks config: {_describe(e)}") from e


def load_catalog(path: str | Path | None = None) -> TaskCatalog:
    """Load the task catalog from its JSON file.

    Called once per request; the result is never cached.

    Args:
        path: Catalog file; defaults to the configured tasks_config_path

    Returns:
        Validated, immutable TaskCatalog

    Raises:
        ConfigError: If the file is missing, unreadable, or malformed
    """
    config_path = Path(path) if path is not None else settings.resolve_path(settings.tasks_config_path)

    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("catalog_read_failed", extra={"path": str(config_path), "error": str(e)})
        raise ConfigError(f"Cannot read tasks config {config_path.name}: {e.strerror or e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error("catalog_parse_failed", extra={"path": str(config_path), "error": str(e)})
        raise ConfigError(f"Invalid tasks config: {e.msg}") from e

    catalog = parse_catalog(data)
    logger.debug(
        "Loaded task catalog",
        extra={"tasks": len(catalog.tasks), "double_score_dates": len(catalog.double_score_dates)},
    )
    return catalog
