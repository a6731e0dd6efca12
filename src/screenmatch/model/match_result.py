"""MatchResult - one located occurrence of a template."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class MatchResult:
    """Result of a template match in absolute screen coordinates.

    Attributes:
        x: X coordinate of the top-left corner
        y: Y coordinate of the top-left corner
        width: Width of the matched (scaled) template
        height: Height of the matched (scaled) template
        confidence: Similarity score in [0, 1], 1.0 for a pixel-identical match
        scale: Scale factor the template was matched at
    """

    x: int
    y: int
    width: int
    height: int
    confidence: float
    scale: float = 1.0

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> tuple[int, int]:
        """Center point, rounded to the nearest pixel."""
        return (int(self.x + self.width / 2 + 0.5), int(self.y + self.height / 2 + 0.5))

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        """Bounding box as (x, y, width, height)."""
        return (self.x, self.y, self.width, self.height)

    def overlaps(self, other: MatchResult) -> bool:
        """Check whether the two bounding boxes share any area."""
        return (
            self.x < other.right
            and self.right > other.x
            and self.y < other.bottom
            and self.bottom > other.y
        )

    def iou(self, other: MatchResult) -> float:
        """Calculate Intersection over Union with another match.

        Returns:
            IoU value in range [0.0, 1.0]
        """
        if not self.overlaps(other):
            return 0.0

        inter_w = min(self.right, other.right) - max(self.x, other.x)
        inter_h = min(self.bottom, other.bottom) - max(self.y, other.y)
        intersection = inter_w * inter_h
        union = self.area + other.area - intersection

        if union <= 0:
            return 0.0
        return intersection / union

    def offset(self, dx: int, dy: int) -> MatchResult:
        """Return a copy translated by (dx, dy)."""
        return MatchResult(
            x=self.x + dx,
            y=self.y + dy,
            width=self.width,
            height=self.height,
            confidence=self.confidence,
            scale=self.scale,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
