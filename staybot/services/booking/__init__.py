"""Booking services: calendar navigation, result aggregation and ranking.

The workflow orchestrator lives in ``booking_workflow`` and is imported from
there directly, since it depends on the page surfaces built on these services.
"""

from .calendar_navigator import CalendarNavigator
from .ranking import rank
from .result_aggregator import (
    AggregationResult,
    ResultAggregator,
    SkippedCard,
    parse_price,
    parse_rating,
)

__all__ = [
    "CalendarNavigator",
    "ResultAggregator",
    "AggregationResult",
    "SkippedCard",
    "parse_price",
    "parse_rating",
    "rank",
]
