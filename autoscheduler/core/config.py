"""
Application configuration using Pydantic Settings.

Scheduling defaults live here so the engine never falls back to inline constants.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local", "test", "production"] = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # Working hours (fallback when the user has no active schedule)
    # ===========================================
    DEFAULT_WORKING_HOURS_START: int = Field(9, ge=0, le=23)
    DEFAULT_WORKING_HOURS_END: int = Field(22, ge=1, le=24)

    # ===========================================
    # Block placement
    # ===========================================
    DEFAULT_BLOCK_DURATION_MINUTES: int = Field(60, ge=1)
    # Idle time enforced between a blocker's last block and a dependent's first block
    GAP_BETWEEN_BLOCKS_MINUTES: int = Field(5, ge=0)
    # Placements start on this grid (quarter hours keep the calendar aligned)
    SLOT_GRANULARITY_MINUTES: int = Field(15, ge=1, le=60)
    # Upper bound on packer iterations per task
    MAX_PLACEMENT_ITERATIONS: int = Field(10_000, ge=1)

    # ===========================================
    # Calendar
    # ===========================================
    SCHEDULER_TIMEZONE: str = "UTC"
    SKIP_WEEKENDS: bool = False
    # Python weekday numbers (0 = Monday) that never receive blocks
    NON_WORKING_WEEKDAYS: List[int] = Field(default_factory=list)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
