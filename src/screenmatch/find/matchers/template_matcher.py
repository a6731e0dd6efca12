"""OpenCV template matching implementation.

Provides normalized template matching with local non-maximum suppression,
producing one candidate per distinct occurrence of the template.
"""

import math

import cv2
import numpy as np

from ...logging import get_logger
from ...model.match_config import MatchConfig
from ...model.match_result import MatchResult
from ...vision_exceptions import PatternMatchError
from ..scale_space import ScaledTemplate
from .image_matcher import ImageMatcher

logger = get_logger(__name__)

# Highest score a window that is not pixel-identical to the template can get
_NEAR_PERFECT = math.nextafter(1.0, 0.0)

# Float error allowed when preselecting peaks; the final threshold check is exact
_SCORE_TOLERANCE = 1e-4


class TemplateMatcher(ImageMatcher):
    """OpenCV template matching implementation.

    Uses OpenCV's matchTemplate function with:
    - Normalized similarity metrics (scores in [0, 1])
    - Optional grayscale comparison
    - Local non-maximum suppression over a template-sized window

    A score of exactly 1.0 is reserved for windows that are pixel-identical
    to the template; any other window is capped just below 1.0.

    Attributes:
        method: OpenCV matching method name (e.g., "TM_CCOEFF_NORMED")
    """

    METHODS = {
        "TM_CCORR_NORMED": cv2.TM_CCORR_NORMED,
        "TM_CCOEFF_NORMED": cv2.TM_CCOEFF_NORMED,
    }

    def __init__(self, method: str = "TM_CCOEFF_NORMED") -> None:
        """Initialize template matcher.

        Args:
            method: OpenCV matching method name

        Raises:
            ValueError: If method name is not recognized
        """
        if method not in self.METHODS:
            raise ValueError(f"Unknown method: {method}. Available: {list(self.METHODS.keys())}")
        self.method = method

    def match(
        self,
        haystack: np.ndarray,
        template: ScaledTemplate,
        config: MatchConfig,
    ) -> list[MatchResult]:
        """Find local-maximum matches of one scaled template.

        Args:
            haystack: Image to search in (BGR)
            template: Scaled template (BGR)
            config: Normalized match configuration

        Returns:
            Candidates in haystack-local coordinates, best first

        Raises:
            PatternMatchError: If OpenCV matching fails
        """
        if config.use_grayscale:
            haystack = to_grayscale(haystack)
            needle = to_grayscale(template.pixels)
        else:
            needle = template.pixels

        if needle.shape[0] > haystack.shape[0] or needle.shape[1] > haystack.shape[1]:
            return []

        try:
            scores = self._score_map(haystack, needle)
        except cv2.error as e:
            raise PatternMatchError(
                f"OpenCV error during matching: {e}", scale=template.scale
            ) from e

        scores = self._settle_identity(scores, haystack, needle)
        peaks = self._local_maxima(scores, template.width, template.height, config.confidence)

        matches: list[MatchResult] = []
        for x, y in peaks:
            confidence = float(scores[y, x])
            if confidence < config.confidence:
                continue
            matches.append(
                MatchResult(
                    x=x,
                    y=y,
                    width=template.width,
                    height=template.height,
                    confidence=confidence,
                    scale=template.scale,
                )
            )

        logger.debug(
            "scale_evaluated",
            scale=template.scale,
            template_size=(template.width, template.height),
            candidates=len(matches),
            best=max((m.confidence for m in matches), default=None),
        )
        return matches

    def _score_map(self, haystack: np.ndarray, needle: np.ndarray) -> np.ndarray:
        """Compute the similarity of every template position, clipped to [0, 1]."""
        if self._is_degenerate(needle):
            # Normalized metrics divide by the template norm; fall back to squared differences
            sqdiff = cv2.matchTemplate(haystack, needle, cv2.TM_SQDIFF)
            max_diff = 255.0 * 255.0 * needle.size
            return np.clip(1.0 - sqdiff / max_diff, 0.0, 1.0).astype(np.float32)

        result = cv2.matchTemplate(haystack, needle, self.METHODS[self.method])
        # Flat windows yield NaN/inf under normalized metrics
        result = np.nan_to_num(result, nan=0.0, posinf=0.0, neginf=0.0)
        return np.clip(result, 0.0, 1.0)

    def _settle_identity(
        self, scores: np.ndarray, haystack: np.ndarray, needle: np.ndarray
    ) -> np.ndarray:
        """Pin pixel-identical windows to 1.0 and cap every other score below it.

        Runs before suppression so an identical window always wins its
        neighbourhood over look-alikes the metric cannot tell apart (e.g.
        brightness-shifted copies under TM_CCOEFF_NORMED).
        """
        # float32 cannot represent _NEAR_PERFECT
        settled = np.minimum(scores.astype(np.float64), _NEAR_PERFECT)
        height, width = needle.shape[:2]

        ys, xs = np.nonzero(scores >= 1.0 - _SCORE_TOLERANCE)
        for y, x in zip(ys.tolist(), xs.tolist()):
            if np.array_equal(haystack[y : y + height, x : x + width], needle):
                settled[y, x] = 1.0

        return settled

    def _is_degenerate(self, needle: np.ndarray) -> bool:
        """Check whether the template has zero norm under the configured metric."""
        if self.method == "TM_CCORR_NORMED":
            return not needle.any()
        # TM_CCOEFF_NORMED subtracts the per-channel mean
        channels = 1 if needle.ndim == 2 else needle.shape[2]
        pixels = needle.reshape(-1, channels)
        return bool((pixels == pixels[0]).all())

    def _local_maxima(
        self, scores: np.ndarray, width: int, height: int, threshold: float
    ) -> list[tuple[int, int]]:
        """Select positions that dominate their template-sized neighbourhood.

        Among peaks closer than one template width and height to each other,
        only the highest-scoring one is kept; equal scores resolve in
        row-major order.

        Returns:
            (x, y) positions, best first
        """
        kernel = np.ones((height, width), dtype=np.uint8)
        neighbourhood_max = cv2.dilate(scores, kernel)
        candidates = (scores >= neighbourhood_max) & (scores >= threshold - _SCORE_TOLERANCE)

        ys, xs = np.nonzero(candidates)
        if len(xs) == 0:
            return []

        order = np.argsort(-scores[ys, xs], kind="stable")
        suppressed = np.zeros(scores.shape, dtype=bool)
        rows, cols = scores.shape

        peaks: list[tuple[int, int]] = []
        for index in order:
            x, y = int(xs[index]), int(ys[index])
            if suppressed[y, x]:
                continue
            peaks.append((x, y))
            suppressed[
                max(0, y - height + 1) : min(rows, y + height),
                max(0, x - width + 1) : min(cols, x + width),
            ] = True

        return peaks


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """Convert a BGR image to single-channel luminance (ITU-R BT.601 weights)."""
    if image.ndim == 2:
        return image
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
