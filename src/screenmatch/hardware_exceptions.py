"""Hardware exceptions.

This module contains exceptions for screen capture backends.
"""

from .base_exceptions import ScreenMatchException


class HardwareException(ScreenMatchException):
    """Base exception for hardware/system errors."""

    pass


class ScreenCaptureException(HardwareException):
    """Raised when screen capture fails."""

    def __init__(self, reason: str, monitor: int | None = None, **kwargs) -> None:
        """Initialize with capture details."""
        message = "Screen capture failed"
        if monitor is not None:
            message += f" on monitor {monitor}"
        message += f": {reason}"

        super().__init__(
            message,
            error_code="SCREEN_CAPTURE_FAILED",
            context={"reason": reason, "monitor": monitor, **kwargs},
        )
