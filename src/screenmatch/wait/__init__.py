"""Wait primitives built on top of single-best searches."""

from .poller import Poller, PollState

__all__ = ["Poller", "PollState"]
