"""ScreenRegion - an absolute rectangle of screen coordinates."""

from __future__ import annotations

from dataclasses import dataclass

from ..vision_exceptions import BoundsError
from .match_result import MatchResult


@dataclass(frozen=True)
class ScreenRegion:
    """Rectangular area on the screen.

    Attributes:
        x: X coordinate of top-left corner
        y: Y coordinate of top-left corner
        width: Width of the region
        height: Height of the region
    """

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)

    def contains(self, match: MatchResult) -> bool:
        """Check whether a match's origin lies inside this region (edges included)."""
        return self.x <= match.x <= self.right and self.y <= match.y <= self.bottom

    def validate_within(self, screen_width: int, screen_height: int) -> ScreenRegion:
        """Check the region is non-empty and fully on screen.

        Args:
            screen_width: Current screen width in pixels
            screen_height: Current screen height in pixels

        Returns:
            Self, for chaining

        Raises:
            BoundsError: If the region is empty or exceeds the screen bounds
        """
        screen_size = (screen_width, screen_height)
        if self.width <= 0 or self.height <= 0:
            raise BoundsError(
                "width and height must be positive", self.as_tuple(), screen_size
            )
        if self.x < 0 or self.y < 0:
            raise BoundsError("origin must not be negative", self.as_tuple(), screen_size)
        if self.right > screen_width or self.bottom > screen_height:
            raise BoundsError(
                f"region exceeds screen bounds {screen_width}x{screen_height}",
                self.as_tuple(),
                screen_size,
            )
        return self
