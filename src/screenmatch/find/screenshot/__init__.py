"""Screen capture abstraction for find operations."""

from .mss_provider import MSSCaptureProvider
from .screenshot_provider import CaptureProvider

__all__ = [
    "CaptureProvider",
    "MSSCaptureProvider",
]
