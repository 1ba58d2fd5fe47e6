"""
Configuration settings for the stepwise session engine.

Uses Pydantic Settings for environment variable management with .env file support.
All variables are prefixed with STEPWISE_ (e.g. STEPWISE_LOG_LEVEL=DEBUG).
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STEPWISE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    # ========================================
    # Storage & Content
    # ========================================
    results_dir: str = Field(
        default="~/.stepwise",
        description="Directory holding results.json (completion history)",
    )
    catalog_file: str | None = Field(
        default=None,
        description="JSON catalog of sessions (None for the built-in sample catalog)",
    )

    # ========================================
    # Session Timing
    # ========================================
    tick_interval_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Granularity of elapsed-time ticks",
    )
    enforce_time_limit: bool = Field(
        default=False,
        description="Finish a session automatically when its time limit runs out",
    )

    # ========================================
    # Scoring
    # ========================================
    quiz_points_per_percent: int = Field(
        default=10,
        ge=0,
        description="Reward points per quiz score percent",
    )
    points_per_level: int = Field(
        default=50,
        gt=0,
        description="Reward points needed per level",
    )
    quality_floor: int = Field(
        default=80,
        ge=0,
        le=100,
        description="Lowest placeholder quality score for a finished workout",
    )

    def get_scoring_config(self) -> dict[str, int]:
        """Get scoring configuration as a dictionary."""
        return {
            "points_per_percent": self.quiz_points_per_percent,
            "points_per_level": self.points_per_level,
            "quality_floor": self.quality_floor,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
