"""screenmatch: multi-scale template matching for locating UI elements on screen.

Quick start:
    >>> import screenmatch
    >>>
    >>> button = screenmatch.image_resource_sync("button.png")
    >>> match = screenmatch.find_on_screen(button, {"confidence": 0.85})
    >>> if match:
    ...     print(screenmatch.get_match_center(match))
    >>>
    >>> spinner = screenmatch.image_resource_sync("loading.png")
    >>> screenmatch.wait_for_gone(spinner, timeout_ms=30000, interval_ms=1000)

The module-level functions share one lazily created FindExecutor bound to an
mss capture provider. Use set_capture_provider() to point them at another
provider, or build a FindExecutor directly.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .config import ScreenMatchSettings, get_settings, reset_settings
from .exceptions import (
    BoundsError,
    DecodeError,
    ImageLoadError,
    PatternMatchError,
    ScreenCaptureException,
    ScreenMatchException,
    ValidationError,
)
from .find import (
    CaptureProvider,
    FindExecutor,
    MSSCaptureProvider,
    ResultAggregator,
    TemplateMatcher,
)
from .model import (
    ImageResource,
    MatchConfig,
    MatchResult,
    ScreenCapture,
    ScreenRegion,
    normalize_config,
)
from .wait import Poller, PollState

__version__ = "0.1.0"

ConfigLike = MatchConfig | Mapping[str, Any] | None

_executor: FindExecutor | None = None
_executor_lock = threading.Lock()


def get_executor() -> FindExecutor:
    """Get the shared executor, creating an mss-backed one on first use."""
    global _executor

    with _executor_lock:
        if _executor is None:
            _executor = FindExecutor(MSSCaptureProvider())
        return _executor


def set_capture_provider(provider: CaptureProvider | None) -> None:
    """Rebind the module-level functions to another capture provider.

    Args:
        provider: Provider to use, or None to fall back to mss on next use
    """
    global _executor

    with _executor_lock:
        previous, _executor = _executor, FindExecutor(provider) if provider is not None else None

    # A closed mss provider reopens its handles on next use
    if previous is not None and isinstance(previous.capture_provider, MSSCaptureProvider):
        previous.capture_provider.close()


async def image_resource(path: str | Path) -> ImageResource:
    """Load a template file asynchronously."""
    return await ImageResource.load(path)


def image_resource_sync(path: str | Path) -> ImageResource:
    """Load a template file."""
    return ImageResource.load_sync(path)


def image_resource_from_buffer(data: bytes) -> ImageResource:
    """Wrap an encoded image buffer, e.g. ``capture.encode()``."""
    return ImageResource.from_buffer(data)


def find_on_screen(template: ImageResource, config: ConfigLike = None) -> MatchResult | None:
    return get_executor().find_on_screen(template, config)


def find_all_on_screen(template: ImageResource, config: ConfigLike = None) -> list[MatchResult]:
    return get_executor().find_all_on_screen(template, config)


def find_in_region(
    template: ImageResource,
    x: int,
    y: int,
    width: int,
    height: int,
    config: ConfigLike = None,
) -> MatchResult | None:
    return get_executor().find_in_region(template, x, y, width, height, config)


def find_all_in_region(
    template: ImageResource,
    x: int,
    y: int,
    width: int,
    height: int,
    config: ConfigLike = None,
) -> list[MatchResult]:
    return get_executor().find_all_in_region(template, x, y, width, height, config)


def wait_for(
    template: ImageResource,
    timeout_ms: int = 10000,
    interval_ms: int = 500,
    config: ConfigLike = None,
) -> MatchResult | None:
    """Wait for a template to appear; None if it does not within the timeout."""
    return Poller(get_executor().find_on_screen).wait_for(template, timeout_ms, interval_ms, config)


def wait_for_gone(
    template: ImageResource,
    timeout_ms: int = 10000,
    interval_ms: int = 500,
    config: ConfigLike = None,
) -> bool:
    """Wait for a template to disappear; False if it is still there at the timeout."""
    poller = Poller(get_executor().find_on_screen)
    return poller.wait_for_gone(template, timeout_ms, interval_ms, config)


def capture_screen() -> ScreenCapture:
    return get_executor().capture_screen()


def capture_screen_region(x: int, y: int, width: int, height: int) -> ScreenCapture:
    return get_executor().capture_region(x, y, width, height)


def get_match_center(match: MatchResult) -> tuple[int, int]:
    """Center point of a match, e.g. for clicking it."""
    return match.center


def get_match_bounds(match: MatchResult) -> dict[str, int]:
    """Edges of a match as left/top/right/bottom."""
    return {"left": match.x, "top": match.y, "right": match.right, "bottom": match.bottom}


__all__ = [
    # Model
    "ImageResource",
    "MatchConfig",
    "MatchResult",
    "ScreenCapture",
    "ScreenRegion",
    "normalize_config",
    # Engine
    "CaptureProvider",
    "FindExecutor",
    "MSSCaptureProvider",
    "Poller",
    "PollState",
    "ResultAggregator",
    "TemplateMatcher",
    # Settings
    "ScreenMatchSettings",
    "get_settings",
    "reset_settings",
    # Errors
    "BoundsError",
    "DecodeError",
    "ImageLoadError",
    "PatternMatchError",
    "ScreenCaptureException",
    "ScreenMatchException",
    "ValidationError",
    # Functions
    "capture_screen",
    "capture_screen_region",
    "find_all_in_region",
    "find_all_on_screen",
    "find_in_region",
    "find_on_screen",
    "get_executor",
    "get_match_bounds",
    "get_match_center",
    "image_resource",
    "image_resource_from_buffer",
    "image_resource_sync",
    "set_capture_provider",
    "wait_for",
    "wait_for_gone",
]
