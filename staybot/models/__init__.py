"""Data models."""

from .booking import BookingParameters, GuestType, ListingSummary
from .wait import WaitSpec

__all__ = ["BookingParameters", "GuestType", "ListingSummary", "WaitSpec"]
