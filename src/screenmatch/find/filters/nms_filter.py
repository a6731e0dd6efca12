"""Non-Maximum Suppression filter for removing overlapping matches.

Implements NMS algorithm to eliminate redundant matches that overlap
significantly with higher-ranked matches.
"""


from ...model.match_result import MatchResult
from .match_filter import MatchFilter


class NMSFilter(MatchFilter):
    """Non-Maximum Suppression filter.

    The algorithm:
    1. Walk matches in the order given (callers pass them best first)
    2. Keep a match unless its IoU with an already kept match
       exceeds the threshold

    Example:
        >>> nms = NMSFilter(iou_threshold=0.5)
        >>> filtered = nms.filter(ranked_matches)
    """

    def __init__(self, iou_threshold: float = 0.5) -> None:
        """Initialize NMS filter.

        Args:
            iou_threshold: IoU above which a lower-ranked match is dropped.
                          Range: 0.0 to 1.0
                          Lower values = more aggressive suppression

        Raises:
            ValueError: If iou_threshold is not in range [0.0, 1.0]
        """
        if not 0.0 <= iou_threshold <= 1.0:
            raise ValueError(f"iou_threshold must be in [0.0, 1.0], got {iou_threshold}")
        self.iou_threshold = iou_threshold

    def filter(
        self, matches: list[MatchResult], limit: int | None = None
    ) -> list[MatchResult]:
        """Apply Non-Maximum Suppression to a ranked list.

        Args:
            matches: Matches ordered best first
            limit: Stop once this many matches are kept

        Returns:
            Surviving matches, order preserved
        """
        kept: list[MatchResult] = []
        for match in matches:
            if all(match.iou(other) <= self.iou_threshold for other in kept):
                kept.append(match)
                if limit is not None and len(kept) >= limit:
                    break
        return kept
