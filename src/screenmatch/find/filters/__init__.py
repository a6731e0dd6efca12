"""Match filtering components for the find module.

- MatchFilter: Abstract base class for all filters
- NMSFilter: Non-Maximum Suppression for removing overlapping matches
"""

from .match_filter import MatchFilter
from .nms_filter import NMSFilter

__all__ = [
    "MatchFilter",
    "NMSFilter",
]
