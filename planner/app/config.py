"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TIME_SLOT_LABELS = (
    "9:00 AM",
    "10:00 AM",
    "11:00 AM",
    "12:00 PM",
    "1:00 PM",
    "2:00 PM",
    "3:00 PM",
    "4:00 PM",
    "5:00 PM",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="PLANNER_", extra="ignore"
    )

    # Daily grid
    time_slot_labels: list[str] = list(DEFAULT_TIME_SLOT_LABELS)

    # Pricing
    tax_rate_percent: float = 5.0

    # Wizard limits
    max_days: int = 14
    min_recommendations: int = 0
    default_package_type: str = "standard"

    # Database (None keeps bookings in memory)
    database_url: str | None = None

    # Logging
    log_level: str = "INFO"

    @field_validator("time_slot_labels")
    @classmethod
    def validate_slot_labels(cls, v: list[str]) -> list[str]:
        """Ensure the slot grid is non-empty."""
        if not v:
            raise ValueError("time_slot_labels must contain at least one label")
        return v

    @field_validator("tax_rate_percent")
    @classmethod
    def validate_tax_rate(cls, v: float) -> float:
        """Ensure tax rate is a sane percentage."""
        if not 0 <= v <= 100:
            raise ValueError(f"tax_rate_percent must be within 0-100, got {v}")
        return v

    @field_validator("max_days")
    @classmethod
    def validate_max_days(cls, v: int) -> int:
        """At least one day must always fit."""
        if v < 1:
            raise ValueError("max_days must be >= 1")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
