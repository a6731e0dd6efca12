"""Data model: templates, configs, captures, regions and results."""

from .image_resource import ImageResource
from .match_config import DEFAULT_SCALE_STEPS, MatchConfig, normalize_config
from .match_result import MatchResult
from .screen_capture import ScreenCapture
from .screen_region import ScreenRegion

__all__ = [
    "DEFAULT_SCALE_STEPS",
    "ImageResource",
    "MatchConfig",
    "MatchResult",
    "ScreenCapture",
    "ScreenRegion",
    "normalize_config",
]
