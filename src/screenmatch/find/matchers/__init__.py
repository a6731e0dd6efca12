"""Image matchers.

- ImageMatcher: Abstract base class for matchers
- TemplateMatcher: OpenCV normalized template matching
"""

from .image_matcher import ImageMatcher
from .template_matcher import TemplateMatcher, to_grayscale

__all__ = ["ImageMatcher", "TemplateMatcher", "to_grayscale"]
