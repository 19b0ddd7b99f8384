"""Error taxonomy and classification for the check-in service."""

from enum import Enum

from pydantic import BaseModel

from src.core.config import Constants


class ErrorCategory(Enum):
    """Categories of errors the service can surface."""

    CONFIG = "config"
    VALIDATION = "validation"
    STORAGE = "storage"
    UNKNOWN = "unknown"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Server-side errors
    ERR_CONFIG = "ERR_CONFIG"
    ERR_STORAGE = "ERR_STORAGE"

    # Request errors
    ERR_INVALID_DATE = "ERR_INVALID_DATE"
    ERR_TASK_ID_REQUIRED = "ERR_TASK_ID_REQUIRED"
    ERR_UNKNOWN_TASK = "ERR_UNKNOWN_TASK"
    ERR_BAD_REQUEST = "ERR_BAD_REQUEST"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class DailyTasksError(Exception):
    """Base class for errors raised by the check-in core."""

    category: ErrorCategory = ErrorCategory.UNKNOWN
    default_code: str = ErrorCode.ERR_UNKNOWN
    status_code: int = Constants.HTTP_SERVER_ERROR

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code


class ConfigError(DailyTasksError):
    """The task catalog is missing or malformed."""

    category = ErrorCategory.CONFIG
    default_code = ErrorCode.ERR_CONFIG


class ValidationError(DailyTasksError):
    """A request was rejected before any mutation was attempted."""

    category = ErrorCategory.VALIDATION
    default_code = ErrorCode.ERR_BAD_REQUEST
    status_code = Constants.HTTP_BAD_REQUEST


class StorageError(DailyTasksError):
    """Reading or writing a daily record failed."""

    category = ErrorCategory.STORAGE
    default_code = ErrorCode.ERR_STORAGE


class ErrorResponse(BaseModel):
    """Structured error response returned to API callers."""

    code: str
    message: str
    status_code: int

    def to_payload(self) -> dict[str, str]:
        """Return the JSON body sent to the client."""
        return {"error": self.message, "code": self.code}


def classify_error(exception: Exception) -> ErrorResponse:
    """Map an exception to the structured response the API returns.

    Domain errors carry their own code and status. Anything else is reported
    as an unknown server-side failure without leaking internals.

    Args:
        exception: The exception raised while handling a request

    Returns:
        ErrorResponse with code, message, and HTTP status
    """
    if isinstance(exception, DailyTasksError):
        return ErrorResponse(
            code=exception.code,
            message=exception.message,
            status_code=exception.status_code,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
        status_code=Constants.HTTP_SERVER_ERROR,
    )
