"""Configuration management for screenmatch using pydantic-settings.

Settings cover the ambient behaviour of the engine (logging, similarity
metric, worker pool size, capture monitor, poller defaults). Per-search
options live in :class:`screenmatch.model.MatchConfig` instead.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScreenMatchSettings(BaseSettings):
    """Main configuration settings for screenmatch."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SCREENMATCH_",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging settings
    log_level: str = Field("INFO", description="Log level for the screenmatch loggers")
    structured_logs: bool = Field(False, description="Render logs as JSON lines")
    log_file: Path | None = Field(None, description="Optional file to mirror logs into")
    log_timestamps: bool = Field(True, description="Stamp log records with ISO timestamps")
    log_caller_info: bool = Field(True, description="Add file, line and function to records")
    log_colors: bool = Field(True, description="Colorize plain console output")

    # Matching settings
    match_method: Literal["TM_CCORR_NORMED", "TM_CCOEFF_NORMED"] = Field(
        "TM_CCOEFF_NORMED", description="OpenCV similarity metric used by the matcher"
    )
    nms_iou_threshold: float = Field(
        0.5, ge=0.0, le=1.0, description="IoU above which cross-scale duplicates are dropped"
    )
    max_workers: int = Field(4, ge=1, description="Maximum threads used to evaluate scales")

    # Capture settings
    monitor: int = Field(1, ge=0, description="mss monitor index (0 = all monitors)")

    # Poller settings
    default_timeout_ms: int = Field(10000, ge=0, description="Default wait timeout")
    default_interval_ms: int = Field(500, ge=0, description="Default wait poll interval")


# Singleton instance
_settings: ScreenMatchSettings | None = None


def get_settings() -> ScreenMatchSettings:
    """Get the singleton settings instance.

    Returns:
        ScreenMatchSettings instance
    """
    global _settings

    if _settings is None:
        _settings = ScreenMatchSettings()

    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (mainly for testing)."""
    global _settings
    _settings = None
