"""Encode and decode booking state carried in site URLs."""

import re
from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import parse_qsl, urlsplit

from loguru import logger

from staybot.constants import Endpoints, QueryParams
from staybot.core.exceptions import ValidationError
from staybot.models import BookingParameters, GuestType, ListingSummary

# Characters that would change the query structure if written unescaped
_UNSAFE_VALUE = re.compile(r"[&#=\s]")


@dataclass(frozen=True)
class DateParamNames:
    """Query keys holding the check-in and check-out dates."""

    checkin: str
    checkout: str


DECODE_NAMES = DateParamNames(QueryParams.DECODE_CHECKIN, QueryParams.DECODE_CHECKOUT)
REPLACE_NAMES = DateParamNames(QueryParams.REPLACE_CHECKIN, QueryParams.REPLACE_CHECKOUT)


class UrlStateCodec:
    """
    Read booking parameters from URLs and rewrite their date parameters.

    Reservation URLs carry ``checkin``/``checkout`` while listing URLs carry
    ``check_in``/``check_out``, so decoding and replacing use separate name
    sets. With equal name sets, ``decode(replace_dates(u, a, b))`` yields the
    dates ``a`` and ``b``.
    """

    def __init__(
        self,
        decode_names: DateParamNames = DECODE_NAMES,
        replace_names: DateParamNames = REPLACE_NAMES,
        reservation_path: str = Endpoints.RESERVATION,
    ):
        self.decode_names = decode_names
        self.replace_names = replace_names
        self.reservation_path = reservation_path

    @classmethod
    def from_settings(cls, settings) -> "UrlStateCodec":
        """Build a codec from the configured parameter names."""
        return cls(
            decode_names=DateParamNames(
                settings.decode_checkin_param, settings.decode_checkout_param
            ),
            replace_names=DateParamNames(
                settings.replace_checkin_param, settings.replace_checkout_param
            ),
            reservation_path=settings.reservation_path,
        )

    def _query(self, url: str) -> Dict[str, str]:
        try:
            parts = urlsplit(url)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Unparsable URL: {url!r}", "url", url) from e
        if not parts.scheme or not parts.netloc:
            raise ValidationError(f"URL has no scheme or host: {url!r}", "url", url)
        # First occurrence wins for repeated keys
        query: Dict[str, str] = {}
        for key, value in parse_qsl(parts.query, keep_blank_values=True):
            query.setdefault(key, value)
        return query

    def decode(self, url: str) -> BookingParameters:
        """
        Extract booking parameters from a URL's query string.

        Guest counts absent from the URL are 0. Dates are copied verbatim.

        Raises:
            ValidationError: If the URL is malformed or a guest count is not a
                non-negative integer
        """
        query = self._query(url)
        counts: Dict[str, int] = {}
        for guest_type in GuestType:
            raw = query.get(guest_type.query_key)
            if raw is None or raw == "":
                counts[guest_type.slug] = 0
                continue
            try:
                count = int(raw)
            except ValueError as e:
                raise ValidationError(
                    f"{guest_type.query_key} is not an integer: {raw!r}",
                    guest_type.query_key,
                    raw,
                ) from e
            if count < 0:
                raise ValidationError(
                    f"{guest_type.query_key} is negative: {count}", guest_type.query_key, raw
                )
            counts[guest_type.slug] = count

        return BookingParameters(
            checkin_iso=query.get(self.decode_names.checkin),
            checkout_iso=query.get(self.decode_names.checkout),
            **counts,
        )

    def decode_listing(self, url: str) -> ListingSummary:
        """Summary view of a URL: the url itself plus its booking parameters."""
        return ListingSummary(url=url, booking_params=self.decode(url))

    def replace_dates(
        self, url: str, checkin_iso: Optional[str], checkout_iso: Optional[str]
    ) -> str:
        """
        Rewrite the check-in and check-out values, leaving every other byte intact.

        A parameter missing from the URL is not added. ``None`` leaves that
        parameter untouched.

        Raises:
            ValidationError: If a replacement value contains ``&``, ``#``, ``=``
                or whitespace
        """
        result = url
        for name, value in (
            (self.replace_names.checkin, checkin_iso),
            (self.replace_names.checkout, checkout_iso),
        ):
            if value is None:
                continue
            if _UNSAFE_VALUE.search(value):
                raise ValidationError(f"Unsafe value for {name}: {value!r}", name, value)
            pattern = re.compile(r"([?&]" + re.escape(name) + r"=)[^&#]*")
            result, replaced = pattern.subn(lambda m: m.group(1) + value, result, count=1)
            if not replaced:
                logger.debug(f"Parameter '{name}' not present in URL, left unchanged")
        return result

    def is_reservation_url(self, url: str, prefix: Optional[str] = None) -> bool:
        """Whether the URL's path starts with the reservation prefix."""
        try:
            path = urlsplit(url).path
        except (TypeError, ValueError):
            return False
        return path.startswith(prefix or self.reservation_path)
