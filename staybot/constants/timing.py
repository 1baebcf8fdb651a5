"""Timing-related constants (timeouts, intervals, delays) in SECONDS."""

from typing import Final


class Timeouts:
    """Synchronization budgets."""

    WAIT: Final[float] = 30.0
    # Budget for expected-negative probes (error banner, popup, next link)
    PROBE: Final[float] = 5.0
    NAVIGATION: Final[float] = 45.0


class Intervals:
    """Polling intervals."""

    POLL: Final[float] = 0.5


class Delays:
    """UI interaction delays."""

    STEPPER_CLICK: Final[float] = 0.1
    STEPPER_CLICK_MAX: Final[float] = 2.0
    STALE_RETRY: Final[float] = 0.2
