"""Booking-site constants: endpoints, query keys, workflow bounds."""

from typing import Final


class Endpoints:
    """Path prefixes on the booking site."""

    RESERVATION: Final[str] = "/book/stays"


class QueryParams:
    """Query-string keys consumed and produced by the URL codec."""

    ADULTS: Final[str] = "numberOfAdults"
    CHILDREN: Final[str] = "numberOfChildren"
    INFANTS: Final[str] = "numberOfInfants"
    PETS: Final[str] = "numberOfPets"

    # Reservation URLs carry these
    DECODE_CHECKIN: Final[str] = "checkin"
    DECODE_CHECKOUT: Final[str] = "checkout"

    # Listing URLs carry these
    REPLACE_CHECKIN: Final[str] = "check_in"
    REPLACE_CHECKOUT: Final[str] = "check_out"


class Calendar:
    """Date picker bounds."""

    MAX_FORWARD_PAGES: Final[int] = 24


class Results:
    """Result listing bounds."""

    MIN_CARDS: Final[int] = 6


class Retries:
    """Retry configuration."""

    MAX_SET_TEXT: Final[int] = 2


US_DATE_FORMAT: Final[str] = "%m/%d/%Y"
ISO_DATE_FORMAT: Final[str] = "%Y-%m-%d"
