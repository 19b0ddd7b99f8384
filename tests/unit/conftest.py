"""Pytest configuration and fixtures for unit tests."""

from datetime import date

import pytest

from tests.conftest import TODAY


@pytest.fixture
def frozen_today(monkeypatch) -> date:
    """Pin the statistics window's 'today' to a fixed date."""
    monkeypatch.setattr("src.services.stats_service.current_date", lambda: TODAY)
    return TODAY
