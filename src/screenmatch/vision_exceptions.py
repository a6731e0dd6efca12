"""Vision and perception-related exceptions.

This module contains exceptions for template loading, decoding,
search regions and matching operations.
"""

from .base_exceptions import ScreenMatchException


class PerceptionException(ScreenMatchException):
    """Base exception for perception/matching errors."""

    pass


class BoundsError(PerceptionException, ValueError):
    """Raised when a search region is empty or leaves the screen."""

    def __init__(
        self,
        reason: str,
        region: tuple[int, int, int, int] | None = None,
        screen_size: tuple[int, int] | None = None,
    ) -> None:
        """Initialize with region details."""
        message = "Invalid search region"
        if region is not None:
            message += f" {region}"
        message += f": {reason}"

        super().__init__(
            message,
            error_code="REGION_OUT_OF_BOUNDS",
            context={"reason": reason, "region": region, "screen_size": screen_size},
        )
        self.region = region
        self.screen_size = screen_size


class ImageLoadError(PerceptionException, OSError):
    """Raised when a template file cannot be read."""

    def __init__(self, image_path: str, reason: str) -> None:
        """Initialize with file details."""
        super().__init__(
            f"Cannot read image '{image_path}': {reason}",
            error_code="IMAGE_LOAD_FAILED",
            context={"image_path": image_path, "reason": reason},
        )
        self.image_path = image_path


class DecodeError(PerceptionException, ValueError):
    """Raised when image bytes are corrupt or in an unsupported format."""

    def __init__(self, reason: str, image_path: str | None = None) -> None:
        """Initialize with decoding details."""
        message = "Image decoding failed"
        if image_path:
            message += f" for image '{image_path}'"
        message += f": {reason}"

        super().__init__(
            message,
            error_code="DECODE_FAILED",
            context={"reason": reason, "image_path": image_path},
        )
        self.image_path = image_path


class PatternMatchError(PerceptionException):
    """Raised when pattern matching operation fails."""

    def __init__(self, reason: str, scale: float | None = None, **kwargs) -> None:
        """Initialize with pattern matching details."""
        message = "Pattern matching failed"
        if scale is not None:
            message += f" at scale {scale}"
        message += f": {reason}"

        super().__init__(
            message,
            error_code="PATTERN_MATCH_FAILED",
            context={"reason": reason, "scale": scale, **kwargs},
        )
