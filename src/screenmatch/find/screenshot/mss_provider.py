"""MSS-based screen capture implementation."""

import threading

import mss
from mss.base import MSSBase
from mss.exception import ScreenShotError

from ...config import get_settings
from ...hardware_exceptions import ScreenCaptureException
from ...logging import get_logger
from ...model.screen_capture import ScreenCapture
from ...model.screen_region import ScreenRegion
from .screenshot_provider import CaptureProvider

logger = get_logger(__name__)


class MSSCaptureProvider(CaptureProvider):
    """Fast screen capture implementation using MSS.

    Captures one monitor (the primary one by default). Region coordinates
    are relative to that monitor's origin, which for the primary monitor
    is the screen origin.
    """

    def __init__(self, monitor: int | None = None) -> None:
        """Initialize MSS screen capture.

        Args:
            monitor: mss monitor index (0 = all monitors combined,
                     1 = primary). Defaults to the ``monitor`` setting.
        """
        self.monitor = get_settings().monitor if monitor is None else monitor
        self._thread_local = threading.local()
        self._handles: list[MSSBase] = []
        self._handles_lock = threading.Lock()

    @property
    def sct(self) -> MSSBase:
        """Get or create the thread-local mss instance.

        mss handles are not shareable across threads on every platform.
        """
        if not hasattr(self._thread_local, "sct"):
            handle = mss.mss()
            with self._handles_lock:
                self._handles.append(handle)
            self._thread_local.sct = handle
            logger.debug("mss_instance_created", thread_id=threading.get_ident())
        return self._thread_local.sct

    def _monitor_bounds(self) -> dict[str, int]:
        try:
            monitors = self.sct.monitors
        except ScreenShotError as e:
            raise ScreenCaptureException(str(e), monitor=self.monitor) from e
        if not 0 <= self.monitor < len(monitors):
            raise ScreenCaptureException(
                f"invalid monitor index (available: 0-{len(monitors) - 1})",
                monitor=self.monitor,
            )
        return monitors[self.monitor]

    def get_screen_size(self) -> tuple[int, int]:
        """Get the size of the captured monitor.

        Returns:
            Tuple of (width, height) in pixels
        """
        bounds = self._monitor_bounds()
        return (int(bounds["width"]), int(bounds["height"]))

    def capture(self, region: ScreenRegion | None = None) -> ScreenCapture:
        """Capture the monitor or a region of it.

        Raises:
            ScreenCaptureException: If the backend fails
        """
        bounds = self._monitor_bounds()
        if region is None:
            area = dict(bounds)
        else:
            area = {
                "left": bounds["left"] + region.x,
                "top": bounds["top"] + region.y,
                "width": region.width,
                "height": region.height,
            }

        try:
            shot = self.sct.grab(area)
        except ScreenShotError as e:
            raise ScreenCaptureException(str(e), monitor=self.monitor) from e

        logger.debug(
            "screen_captured",
            monitor=self.monitor,
            region=region.as_tuple() if region else None,
            size=(shot.width, shot.height),
        )
        return ScreenCapture(width=shot.width, height=shot.height, pixel_bytes=bytes(shot.bgra))

    def close(self) -> None:
        """Release the mss handles created by every thread.

        The provider stays usable; the next capture opens a fresh handle.
        """
        handles = getattr(self, "_handles", None)
        if not handles:
            return
        with self._handles_lock:
            handles, self._handles = self._handles, []
            self._thread_local = threading.local()

        for handle in handles:
            try:
                handle.close()
            except ScreenShotError as e:
                logger.warning("mss_close_failed", monitor=self.monitor, error=str(e))
        logger.debug("mss_capture_closed", monitor=self.monitor, handles=len(handles))

    def __enter__(self) -> "MSSCaptureProvider":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __del__(self) -> None:
        self.close()
