"""Exception hierarchy for screenmatch.

This module re-exports all exceptions from domain-specific modules
for convenience.
"""

from .base_exceptions import ScreenMatchException
from .config_exceptions import ConfigurationException, ValidationError
from .hardware_exceptions import HardwareException, ScreenCaptureException
from .vision_exceptions import (
    BoundsError,
    DecodeError,
    ImageLoadError,
    PatternMatchError,
    PerceptionException,
)

__all__ = [
    "ScreenMatchException",
    "ConfigurationException",
    "ValidationError",
    "HardwareException",
    "ScreenCaptureException",
    "PerceptionException",
    "BoundsError",
    "DecodeError",
    "ImageLoadError",
    "PatternMatchError",
]
