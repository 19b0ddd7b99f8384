"""Unit tests for error classification."""

import pytest

from src.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorCode,
    StorageError,
    ValidationError,
    classify_error,
)


@pytest.mark.unit
class TestClassifyError:
    """Tests for classify_error."""

    def test_config_error_is_server_side(self):
        """Config errors map to a 500 with the config code."""
        response = classify_error(ConfigError("Invalid tasks config: missing tasks array"))

        assert response.status_code == 500
        assert response.code == ErrorCode.ERR_CONFIG
        assert response.to_payload() == {"error": "Invalid tasks config: missing tasks array", "code": "ERR_CONFIG"}

    def test_validation_error_is_client_side(self):
        """Validation errors map to a 400 and keep their specific code."""
        response = classify_error(ValidationError("unknown taskId", code=ErrorCode.ERR_UNKNOWN_TASK))

        assert response.status_code == 400
        assert response.code == ErrorCode.ERR_UNKNOWN_TASK
        assert response.message == "unknown taskId"

    def test_storage_error_is_server_side(self):
        """Storage errors map to a 500."""
        response = classify_error(StorageError("disk full"))

        assert response.status_code == 500
        assert response.code == ErrorCode.ERR_STORAGE

    def test_unexpected_exception_hides_details(self):
        """Unknown exceptions do not leak their message."""
        response = classify_error(RuntimeError("secret internals"))

        assert response.status_code == 500
        assert response.code == ErrorCode.ERR_UNKNOWN
        assert "secret" not in response.message

    def test_categories(self):
        """Each error class carries its category."""
        assert ConfigError("x").category == ErrorCategory.CONFIG
        assert ValidationError("x").category == ErrorCategory.VALIDATION
        assert StorageError("x").category == ErrorCategory.STORAGE
