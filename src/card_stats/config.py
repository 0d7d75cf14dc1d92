"""Configuration management for card_stats.

This module provides typed configuration classes using pydantic-settings.
Configuration is loaded from environment variables with optional .env file support.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "FSRS5_DEFAULT_DECAY",
    "CardStatsConfig",
    "LoggingSettings",
    "SchedulingSettings",
    "TimingSettings",
]

FSRS5_DEFAULT_DECAY = 0.5


class SchedulingSettings(BaseSettings):
    """Scheduling and retrievability settings."""

    model_config = SettingsConfigDict(
        env_prefix="CARD_STATS_SCHEDULING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Used when an item has no decay of its own
    default_decay: float = Field(default=FSRS5_DEFAULT_DECAY, gt=0.0)
    # Due values above this are epoch seconds, anything else is a day number
    epoch_timestamp_threshold: int = 1_000_000_000


class TimingSettings(BaseSettings):
    """Day boundary settings for the system clock."""

    model_config = SettingsConfigDict(
        env_prefix="CARD_STATS_TIMING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    collection_created: int = Field(default=0, ge=0, description="Epoch seconds")
    rollover_hour: int = Field(default=4, ge=0, le=23)


class LoggingSettings(BaseSettings):
    """Logging output settings."""

    model_config = SettingsConfigDict(
        env_prefix="CARD_STATS_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = "INFO"
    json_output: bool = False
    add_timestamp: bool = True


class CardStatsConfig(BaseSettings):
    """Main configuration aggregating all settings.

    Example usage:
        config = CardStatsConfig()
        decay = config.scheduling.default_decay
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    scheduling: SchedulingSettings = SchedulingSettings()
    timing: TimingSettings = TimingSettings()
