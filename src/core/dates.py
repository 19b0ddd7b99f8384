"""Calendar helpers shared by the store, the services, and the API."""

import re
from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

from src.core.config import Constants, settings
from src.core.errors import ErrorCode, ValidationError


_DATE_RE = re.compile(Constants.DATE_FORMAT_PATTERN)


def today() -> date:
    """Return the current calendar date in the configured timezone."""
    if settings.timezone:
        return datetime.now(ZoneInfo(settings.timezone)).date()
    return datetime.now().date()


def utc_now_iso() -> str:
    """Return the current UTC time as an ISO string with a 'Z' suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_date(value: str) -> date:
    """Parse a strict YYYY-MM-DD string.

    Raises:
        ValidationError: If the string is not a real calendar date in that form
    """
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise ValidationError("Invalid date format, expected YYYY-MM-DD", code=ErrorCode.ERR_INVALID_DATE)
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Invalid date: {value}", code=ErrorCode.ERR_INVALID_DATE) from e


def resolve_date(value: str | None) -> date:
    """Parse an optional request date, defaulting to today when absent.

    Only a missing value means today; an empty string is rejected like any
    other malformed date.
    """
    if value is None:
        return today()
    return parse_date(value)


def format_date(day: date) -> str:
    return day.isoformat()


def date_range_ending(end: date, days: int) -> list[date]:
    """Return `days` consecutive dates ending at `end` (inclusive), ascending."""
    return [end - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
