"""Find module: scale space search, matching, aggregation and region search."""

from .aggregator import ResultAggregator, rank_key
from .find_executor import FindExecutor
from .matchers import ImageMatcher, TemplateMatcher
from .scale_space import ScaledTemplate, generate_scales, scaled_size
from .screenshot import CaptureProvider, MSSCaptureProvider

__all__ = [
    "CaptureProvider",
    "FindExecutor",
    "ImageMatcher",
    "MSSCaptureProvider",
    "ResultAggregator",
    "ScaledTemplate",
    "TemplateMatcher",
    "generate_scales",
    "rank_key",
    "scaled_size",
]
