"""Tests for typed settings."""

import pytest
from pydantic import ValidationError

from planner.app.config import DEFAULT_TIME_SLOT_LABELS, Settings, get_settings


def test_defaults() -> None:
    """Test default settings."""
    settings = Settings()

    assert settings.time_slot_labels == list(DEFAULT_TIME_SLOT_LABELS)
    assert settings.tax_rate_percent == 5.0
    assert settings.max_days == 14
    assert settings.database_url is None


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test PLANNER_-prefixed environment variables override defaults."""
    monkeypatch.setenv("PLANNER_TAX_RATE_PERCENT", "8")
    monkeypatch.setenv("PLANNER_MAX_DAYS", "3")
    monkeypatch.setenv("PLANNER_TIME_SLOT_LABELS", '["8:00 AM", "9:00 AM"]')

    settings = Settings()

    assert settings.tax_rate_percent == 8.0
    assert settings.max_days == 3
    assert settings.time_slot_labels == ["8:00 AM", "9:00 AM"]


@pytest.mark.parametrize(
    "overrides",
    [{"tax_rate_percent": 150}, {"tax_rate_percent": -1}, {"max_days": 0}, {"time_slot_labels": []}],
)
def test_invalid_values(overrides: dict) -> None:
    """Test out-of-range settings are rejected."""
    with pytest.raises(ValidationError):
        Settings(**overrides)


def test_get_settings_is_cached() -> None:
    """Test get_settings returns one shared instance."""
    assert get_settings() is get_settings()
