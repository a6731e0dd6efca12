"""Base filter interface for match filtering."""


from abc import ABC, abstractmethod

from ...model.match_result import MatchResult


class MatchFilter(ABC):
    """Abstract base class for match filters.

    All filters must implement the filter() method which takes a list
    of matches and returns a filtered list. Filters are stateless.
    """

    @abstractmethod
    def filter(self, matches: list[MatchResult]) -> list[MatchResult]:
        """Filter a list of matches according to filter criteria.

        Args:
            matches: List of matches to filter

        Returns:
            Filtered list of matches
        """
        pass
