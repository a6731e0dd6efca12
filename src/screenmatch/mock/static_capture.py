"""StaticCaptureProvider - serves captures from an in-memory frame.

Enables headless, deterministic searches: the "screen" is a BGR array
that tests (or offline tooling) control. Swapping the frame simulates
the screen changing between polls.
"""

from __future__ import annotations

import threading

import numpy as np

from ..find.screenshot.screenshot_provider import CaptureProvider
from ..logging import get_logger
from ..model.screen_capture import ScreenCapture
from ..model.screen_region import ScreenRegion

logger = get_logger(__name__)


class StaticCaptureProvider(CaptureProvider):
    """Capture provider backed by a fixed BGR frame.

    Example:
        >>> screen = np.zeros((1080, 1920, 3), dtype=np.uint8)
        >>> provider = StaticCaptureProvider(screen)
        >>> provider.capture().width
        1920

    Attributes:
        capture_count: Number of capture() calls served so far
        captured_regions: Region argument of every capture() call
    """

    def __init__(self, frame: np.ndarray) -> None:
        self._lock = threading.Lock()
        self._frame = self._prepare(frame)
        self.capture_count = 0
        self.captured_regions: list[ScreenRegion | None] = []

    @staticmethod
    def _prepare(frame: np.ndarray) -> np.ndarray:
        if frame.dtype != np.uint8 or frame.ndim not in (2, 3):
            raise ValueError("frame must be a uint8 BGR or grayscale array")
        return frame.copy()

    @property
    def frame(self) -> np.ndarray:
        return self._frame

    def set_frame(self, frame: np.ndarray) -> None:
        """Replace the frame served by subsequent captures."""
        prepared = self._prepare(frame)
        with self._lock:
            self._frame = prepared

    def get_screen_size(self) -> tuple[int, int]:
        height, width = self._frame.shape[:2]
        return (int(width), int(height))

    def capture(self, region: ScreenRegion | None = None) -> ScreenCapture:
        with self._lock:
            frame = self._frame
            self.capture_count += 1
            self.captured_regions.append(region)

        if region is not None:
            frame = frame[region.y : region.bottom, region.x : region.right]

        logger.debug("static_capture", region=region.as_tuple() if region else None)
        return ScreenCapture.from_bgr(np.ascontiguousarray(frame))
