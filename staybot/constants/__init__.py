"""Unified constants for staybot.

All classes and constants can be imported directly from this package:
    from staybot.constants import Timeouts, QueryParams, DEFAULT_SELECTORS
"""

from .booking import (
    ISO_DATE_FORMAT,
    US_DATE_FORMAT,
    Calendar,
    Endpoints,
    QueryParams,
    Results,
    Retries,
)
from .selectors import DEFAULT_SELECTORS
from .timing import Delays, Intervals, Timeouts

__all__ = [
    # Timing
    "Timeouts",
    "Intervals",
    "Delays",
    # Booking
    "Endpoints",
    "QueryParams",
    "Calendar",
    "Results",
    "Retries",
    "US_DATE_FORMAT",
    "ISO_DATE_FORMAT",
    # Locators
    "DEFAULT_SELECTORS",
]
