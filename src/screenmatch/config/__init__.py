"""Configuration package.

Usage:
    from screenmatch.config import get_settings

    settings = get_settings()
    settings.nms_iou_threshold
"""

from .settings import ScreenMatchSettings, get_settings, reset_settings

__all__ = ["ScreenMatchSettings", "get_settings", "reset_settings"]
