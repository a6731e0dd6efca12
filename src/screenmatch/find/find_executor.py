"""FindExecutor orchestrates template searches on the screen.

Coordinates screen capture, scale space generation, per-scale matching
and result aggregation. Uses dependency injection for testability.
"""

from __future__ import annotations

import numbers
import time
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import numpy as np

from ..config import get_settings
from ..logging import LogContext, get_logger
from ..model.image_resource import ImageResource
from ..model.match_config import MatchConfig, normalize_config
from ..model.match_result import MatchResult
from ..model.screen_capture import ScreenCapture
from ..model.screen_region import ScreenRegion
from ..vision_exceptions import BoundsError
from .aggregator import ResultAggregator
from .matchers.image_matcher import ImageMatcher
from .matchers.template_matcher import TemplateMatcher
from .scale_space import ScaledTemplate, generate_scales
from .screenshot.screenshot_provider import CaptureProvider

logger = get_logger(__name__)

ConfigLike = MatchConfig | Mapping[str, Any] | None


class FindExecutor:
    """Orchestrates find operations using specialized components.

    Coordinates the complete find workflow:
    1. Normalize the configuration and decode the template
    2. Validate the search region (region variants only)
    3. Capture the screen or the region using the CaptureProvider
    4. Evaluate every scale with the ImageMatcher (fan-out)
    5. Rank and de-duplicate with the ResultAggregator (fan-in)
    6. Translate region-local results to absolute screen coordinates

    The executor holds no per-search state, so one instance can serve
    concurrent callers.

    Example:
        >>> from screenmatch.find.screenshot import MSSCaptureProvider
        >>>
        >>> executor = FindExecutor(MSSCaptureProvider())
        >>> button = ImageResource.load_sync("button.png")
        >>> match = executor.find_on_screen(button, {"confidence": 0.9})
        >>> if match:
        ...     print(match.center)

    Attributes:
        capture_provider: Component for capturing the screen
        matcher: Component evaluating one scale
        aggregator: Component merging the scales
        max_workers: Upper bound on threads per search
    """

    def __init__(
        self,
        capture_provider: CaptureProvider,
        matcher: ImageMatcher | None = None,
        aggregator: ResultAggregator | None = None,
        max_workers: int | None = None,
    ) -> None:
        """Initialize FindExecutor with components.

        Args:
            capture_provider: Component for capturing the screen.
            matcher: Matcher for a single scale. Defaults to a
                    TemplateMatcher using the configured metric.
            aggregator: Cross-scale aggregator. Defaults to one using the
                       configured IoU threshold.
            max_workers: Thread pool size for parallel scale evaluation.

        Raises:
            ValueError: If capture_provider is None
        """
        if capture_provider is None:
            raise ValueError("capture_provider cannot be None")

        settings = get_settings()
        self.capture_provider = capture_provider
        self.matcher = matcher or TemplateMatcher(method=settings.match_method)
        self.aggregator = aggregator or ResultAggregator(iou_threshold=settings.nms_iou_threshold)
        self.max_workers = max_workers or settings.max_workers

    def find_on_screen(
        self, template: ImageResource, config: ConfigLike = None
    ) -> MatchResult | None:
        """Find the best match of a template on the whole screen.

        Returns:
            Best match, or None if nothing reaches the confidence threshold

        Raises:
            ValidationError: If the configuration is malformed
            DecodeError: If the template bytes cannot be decoded
        """
        results = self.find_all_on_screen(template, config)
        return results[0] if results else None

    def find_all_on_screen(
        self, template: ImageResource, config: ConfigLike = None
    ) -> list[MatchResult]:
        """Find all matches of a template on the whole screen.

        Returns:
            Matches sorted by confidence (highest first), at most
            ``config.limit`` of them
        """
        resolved = normalize_config(config)
        needle = template.pixels
        return self._search(needle, resolved, region=None, template_name=template.name)

    def find_in_region(
        self,
        template: ImageResource,
        x: int,
        y: int,
        width: int,
        height: int,
        config: ConfigLike = None,
    ) -> MatchResult | None:
        """Find the best match of a template inside a screen region.

        Returns:
            Best match in absolute screen coordinates, or None

        Raises:
            BoundsError: If the region is not a non-empty whole-pixel area of the screen
        """
        results = self.find_all_in_region(template, x, y, width, height, config)
        return results[0] if results else None

    def find_all_in_region(
        self,
        template: ImageResource,
        x: int,
        y: int,
        width: int,
        height: int,
        config: ConfigLike = None,
    ) -> list[MatchResult]:
        """Find all matches of a template inside a screen region.

        Only the region is captured; results are translated back to
        absolute screen coordinates.

        Raises:
            BoundsError: If the region is not a non-empty whole-pixel area of the screen
        """
        resolved = normalize_config(config)
        needle = template.pixels
        region = self._checked_region(x, y, width, height)
        return self._search(needle, resolved, region=region, template_name=template.name)

    def capture_screen(self) -> ScreenCapture:
        """Capture the whole screen."""
        return self.capture_provider.capture(None)

    def capture_region(self, x: int, y: int, width: int, height: int) -> ScreenCapture:
        """Capture a validated screen region.

        Raises:
            BoundsError: If the region is not a non-empty whole-pixel area of the screen
        """
        return self.capture_provider.capture(self._checked_region(x, y, width, height))

    def _checked_region(self, x: int, y: int, width: int, height: int) -> ScreenRegion:
        values = (x, y, width, height)
        for value in values:
            if not _is_whole_number(value):
                raise BoundsError(
                    f"coordinates must be whole numbers, got {value!r}", region=values
                )

        screen_width, screen_height = self.capture_provider.get_screen_size()
        region = ScreenRegion(*(int(value) for value in values))
        return region.validate_within(screen_width, screen_height)

    def _search(
        self,
        needle: np.ndarray,
        config: MatchConfig,
        region: ScreenRegion | None,
        template_name: str | None,
    ) -> list[MatchResult]:
        started = time.monotonic()
        capture = self.capture_provider.capture(region)
        haystack = capture.to_bgr()

        scales = generate_scales(needle, config, (capture.width, capture.height))
        candidates = self._evaluate(haystack, scales, config)
        results = self.aggregator.aggregate(candidates, config)

        if region is not None:
            results = [m.offset(region.x, region.y) for m in results]

        with LogContext(logger, template=template_name) as log:
            log.debug(
                "search_completed",
                region=region.as_tuple() if region else None,
                scales=[s.scale for s in scales],
                candidates=len(candidates),
                results=len(results),
                best=results[0].confidence if results else None,
                duration_ms=round((time.monotonic() - started) * 1000, 2),
            )
        return results

    def _evaluate(
        self,
        haystack: np.ndarray,
        scales: list[ScaledTemplate],
        config: MatchConfig,
    ) -> list[MatchResult]:
        """Run the matcher for every scale and collect all candidates."""
        if not scales:
            return []

        if not config.parallel or len(scales) == 1 or self.max_workers == 1:
            per_scale = [self.matcher.match(haystack, scaled, config) for scaled in scales]
        else:
            workers = min(self.max_workers, len(scales))
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="screenmatch") as pool:
                futures = [
                    pool.submit(self.matcher.match, haystack, scaled, config) for scaled in scales
                ]
                # result() re-raises the first failure of a scale
                per_scale = [future.result() for future in futures]

        return [match for matches in per_scale for match in matches]


def _is_whole_number(value: Any) -> bool:
    """Accept ints (numpy included) and integral floats; reject bools and strings."""
    if isinstance(value, bool):
        return False
    if isinstance(value, numbers.Integral):
        return True
    return isinstance(value, numbers.Real) and float(value).is_integer()
