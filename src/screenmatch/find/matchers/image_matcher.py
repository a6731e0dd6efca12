"""Abstract base interface for image matching algorithms.

Defines the contract that all image matchers must implement.
"""

from abc import ABC, abstractmethod

import numpy as np

from ...model.match_config import MatchConfig
from ...model.match_result import MatchResult
from ..scale_space import ScaledTemplate


class ImageMatcher(ABC):
    """Abstract base class for image matching algorithms.

    A matcher evaluates one scaled template against one haystack. It must be
    a pure function of its inputs so evaluations for different scales can
    run concurrently.
    """

    @abstractmethod
    def match(
        self,
        haystack: np.ndarray,
        template: ScaledTemplate,
        config: MatchConfig,
    ) -> list[MatchResult]:
        """Find template occurrences in the haystack.

        Args:
            haystack: Image to search in (BGR)
            template: Scaled template to search for (BGR)
            config: Normalized match configuration

        Returns:
            Candidate matches in haystack-local coordinates, each with
            ``confidence >= config.confidence``.

        Raises:
            PatternMatchError: If matching fails
        """
        pass
