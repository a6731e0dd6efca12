"""Result aggregation across scales.

The aggregator is the fan-in point of a search: it receives the candidates
of every evaluated scale, removes cross-scale duplicates and produces the
final ranked list.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..model.match_config import MatchConfig
from ..model.match_result import MatchResult
from .filters import NMSFilter


def rank_key(match: MatchResult) -> tuple[float, float, int, int]:
    """Sort key: confidence descending, then scale closest to 1.0, then position."""
    return (-match.confidence, abs(match.scale - 1.0), match.y, match.x)


class ResultAggregator:
    """Merge per-scale candidates into a ranked, de-duplicated result list.

    Attributes:
        nms: Filter used for cross-scale suppression
    """

    def __init__(self, iou_threshold: float = 0.5) -> None:
        self.nms = NMSFilter(iou_threshold=iou_threshold)

    def aggregate(
        self, candidates: Iterable[MatchResult], config: MatchConfig
    ) -> list[MatchResult]:
        """Rank candidates and drop overlapping duplicates.

        Args:
            candidates: Union of the candidates of every scale
            config: Normalized match configuration

        Returns:
            At most ``config.limit`` matches, best first
        """
        eligible = [m for m in candidates if m.confidence >= config.confidence]
        eligible.sort(key=rank_key)
        return self.nms.filter(eligible, limit=config.limit)

    def best(self, candidates: Iterable[MatchResult], config: MatchConfig) -> MatchResult | None:
        """Return the top-ranked match, or None when nothing qualifies."""
        ranked = self.aggregate(candidates, config)
        return ranked[0] if ranked else None
