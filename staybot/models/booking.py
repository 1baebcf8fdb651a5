"""Value types for booking parameters and extracted listings."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from staybot.constants import QueryParams
from staybot.core.exceptions import ValidationError
from staybot.utils.dates import us_to_iso


class GuestType(Enum):
    """Guest categories accepted by the site's steppers and query strings."""

    ADULT = "adults"
    CHILD = "children"
    INFANT = "infants"
    PET = "pets"

    @property
    def slug(self) -> str:
        """Token used inside stepper test ids, e.g. ``stepper-children-...``."""
        return self.value

    @property
    def query_key(self) -> str:
        """Query-string key carrying this category's count."""
        return {
            GuestType.ADULT: QueryParams.ADULTS,
            GuestType.CHILD: QueryParams.CHILDREN,
            GuestType.INFANT: QueryParams.INFANTS,
            GuestType.PET: QueryParams.PETS,
        }[self]


@dataclass(frozen=True)
class BookingParameters:
    """
    Search and reservation parameters.

    Dates come in two representations: ``*_us`` ("M/D/YYYY", what the workflow
    is configured with and what the listing page shows) and ``*_iso``
    ("YYYY-MM-DD", what the site puts in URLs). Parameters decoded from a URL
    carry only the ISO pair, copied verbatim.
    """

    location: Optional[str] = None
    checkin_us: Optional[str] = None
    checkout_us: Optional[str] = None
    checkin_iso: Optional[str] = None
    checkout_iso: Optional[str] = None
    adults: int = 0
    children: int = 0
    infants: int = 0
    pets: int = 0

    def __post_init__(self) -> None:
        for guest_type in GuestType:
            count = self.guest_count(guest_type)
            if not isinstance(count, int) or count < 0:
                raise ValidationError(
                    f"{guest_type.slug} must be a non-negative integer", guest_type.slug, count
                )

    @classmethod
    def from_us_dates(
        cls,
        location: Optional[str],
        checkin: str,
        checkout: str,
        adults: int = 0,
        children: int = 0,
        infants: int = 0,
        pets: int = 0,
    ) -> "BookingParameters":
        """Build parameters from US dates, deriving the ISO pair."""
        return cls(
            location=location,
            checkin_us=checkin,
            checkout_us=checkout,
            checkin_iso=us_to_iso(checkin),
            checkout_iso=us_to_iso(checkout),
            adults=adults,
            children=children,
            infants=infants,
            pets=pets,
        )

    def with_dates(self, checkin_us: str, checkout_us: str) -> "BookingParameters":
        """Copy with new dates; the receiver is left untouched."""
        return replace(
            self,
            checkin_us=checkin_us,
            checkout_us=checkout_us,
            checkin_iso=us_to_iso(checkin_us),
            checkout_iso=us_to_iso(checkout_us),
        )

    def guest_count(self, guest_type: GuestType) -> int:
        return {
            GuestType.ADULT: self.adults,
            GuestType.CHILD: self.children,
            GuestType.INFANT: self.infants,
            GuestType.PET: self.pets,
        }[guest_type]


@dataclass(frozen=True)
class ListingSummary:
    """
    One listing as seen by the workflow.

    Summaries built from a result card carry name, pricing and rating; those
    decoded from a URL carry ``booking_params`` instead.
    """

    url: str
    name: Optional[str] = None
    rating: Optional[float] = None
    price_per_night: Optional[float] = None
    total_price: Optional[float] = None
    booking_params: Optional[BookingParameters] = None

    def __post_init__(self) -> None:
        if not self.url or not self.url.strip():
            raise ValidationError("Listing url must be non-empty", "url", self.url)
        if self.rating is not None and not 1.0 <= self.rating <= 5.0:
            raise ValidationError("Rating must be within 1.0..5.0", "rating", self.rating)
        for field_name in ("price_per_night", "total_price"):
            value = getattr(self, field_name)
            if value is not None and value < 0:
                raise ValidationError(f"{field_name} must be >= 0", field_name, value)

    def with_url_and_dates(
        self, url: str, checkin_iso: Optional[str], checkout_iso: Optional[str]
    ) -> "ListingSummary":
        """Copy with a new url and booking dates, preserving everything else."""
        params = self.booking_params or BookingParameters()
        return replace(
            self,
            url=url,
            booking_params=replace(params, checkin_iso=checkin_iso, checkout_iso=checkout_iso),
        )
