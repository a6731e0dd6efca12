"""Abstract base interface for screen capture.

Defines the contract for capture backends used by the find executor.
"""

from abc import ABC, abstractmethod

from ...model.screen_capture import ScreenCapture
from ...model.screen_region import ScreenRegion


class CaptureProvider(ABC):
    """Abstract base for screen capture implementations.

    Providers return uncompressed pixels for the entire screen or an
    absolute sub-region. Failures propagate to the caller unchanged.
    """

    @abstractmethod
    def capture(self, region: ScreenRegion | None = None) -> ScreenCapture:
        """Capture the entire screen or a region.

        Args:
            region: Optional absolute region to capture. If None, captures
                    the entire screen.

        Returns:
            ScreenCapture with BGRA pixel bytes.
        """
        pass

    @abstractmethod
    def get_screen_size(self) -> tuple[int, int]:
        """Get screen size without capturing.

        Returns:
            Tuple of (width, height) in pixels
        """
        pass
