"""Poller - wait for a template to appear on or vanish from the screen.

Each attempt runs one full capture-and-match pass. The time spent searching
counts against the timeout, so the real cadence is interval + search cost.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from enum import Enum, auto
from typing import Any

from ..config import get_settings
from ..config_exceptions import ValidationError
from ..logging import get_logger
from ..model.image_resource import ImageResource
from ..model.match_config import MatchConfig, normalize_config
from ..model.match_result import MatchResult

logger = get_logger(__name__)

SearchFunction = Callable[[ImageResource, MatchConfig], MatchResult | None]


class PollState(Enum):
    """Outcome of a wait operation."""

    POLLING = auto()  # Still checking
    FOUND = auto()  # Awaited condition observed
    TIMED_OUT = auto()  # Deadline passed first


class Poller:
    """Timed retry loop around a single-best search.

    Errors raised by the search stop the loop and propagate; they are
    never retried.

    Example:
        >>> poller = Poller(executor.find_on_screen)
        >>> dialog = poller.wait_for(dialog_image, timeout_ms=5000, interval_ms=250)
        >>> poller.state
        <PollState.FOUND: 2>

    Attributes:
        state: State reached by the most recent wait
    """

    def __init__(
        self,
        search: SearchFunction,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the poller.

        Args:
            search: Callable returning the best match or None
            sleep: Suspends for the given number of seconds
            clock: Monotonic clock in seconds
        """
        self.search = search
        self._sleep = sleep
        self._clock = clock
        self.state = PollState.POLLING

    def wait_for(
        self,
        template: ImageResource,
        timeout_ms: int | None = None,
        interval_ms: int | None = None,
        config: MatchConfig | Mapping[str, Any] | None = None,
    ) -> MatchResult | None:
        """Wait until the template appears.

        Args:
            template: Template to look for
            timeout_ms: Deadline in milliseconds (default 10000)
            interval_ms: Pause between attempts in milliseconds (default 500)
            config: Match configuration

        Returns:
            The match as soon as one is found, None on timeout
        """
        result = self._poll(template, timeout_ms, interval_ms, config, want_present=True)
        return result if isinstance(result, MatchResult) else None

    def wait_for_gone(
        self,
        template: ImageResource,
        timeout_ms: int | None = None,
        interval_ms: int | None = None,
        config: MatchConfig | Mapping[str, Any] | None = None,
    ) -> bool:
        """Wait until the template is no longer found.

        Returns:
            True as soon as a search finds nothing, False if the template
            is still present when the deadline passes
        """
        return self._poll(template, timeout_ms, interval_ms, config, want_present=False) is True

    def _poll(
        self,
        template: ImageResource,
        timeout_ms: int | None,
        interval_ms: int | None,
        config: MatchConfig | Mapping[str, Any] | None,
        want_present: bool,
    ) -> MatchResult | bool | None:
        settings = get_settings()
        timeout_ms = _check_duration(
            "timeout_ms", settings.default_timeout_ms if timeout_ms is None else timeout_ms
        )
        interval_ms = _check_duration(
            "interval_ms", settings.default_interval_ms if interval_ms is None else interval_ms
        )
        resolved = normalize_config(config)

        self.state = PollState.POLLING
        started = self._clock()
        attempts = 0

        while True:
            attempts += 1
            match = self.search(template, resolved)

            if want_present and match is not None:
                self.state = PollState.FOUND
                logger.info("wait_found", template=template.name, attempts=attempts)
                return match
            if not want_present and match is None:
                self.state = PollState.FOUND
                logger.info("wait_gone", template=template.name, attempts=attempts)
                return True

            self._sleep(interval_ms / 1000.0)

            elapsed_ms = (self._clock() - started) * 1000.0
            if elapsed_ms >= timeout_ms:
                self.state = PollState.TIMED_OUT
                logger.info(
                    "wait_timed_out",
                    template=template.name,
                    waiting_for="appear" if want_present else "vanish",
                    attempts=attempts,
                    elapsed_ms=round(elapsed_ms, 1),
                )
                return None if want_present else False


def _check_duration(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not value >= 0:
        raise ValidationError(name, f"must be a non-negative number of milliseconds, got {value!r}")
    return float(value)
