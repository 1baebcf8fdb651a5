"""Tests for the URL state codec."""

import pytest

from staybot.core.exceptions import ValidationError
from staybot.models import GuestType
from staybot.utils.url_codec import DECODE_NAMES, DateParamNames, UrlStateCodec

LISTING_URL = (
    "https://www.example.com/rooms/123?adults=2&children=1"
    "&check_in=2025-07-24&check_out=2025-07-27&source_impression_id=p3_x#photos"
)
RESERVATION_URL = (
    "https://www.example.com/book/stays/123?numberOfAdults=2&numberOfChildren=0"
    "&checkin=2025-07-31&checkout=2025-08-03&guestCurrency=USD"
)


@pytest.fixture
def codec():
    return UrlStateCodec()


class TestDecode:
    """Test decoding booking parameters from a URL."""

    def test_missing_counts_default_to_zero(self, codec):
        params = codec.decode("https://x.test/book?numberOfAdults=2&checkin=2025-07-24")

        assert params.adults == 2
        assert params.children == 0
        assert params.infants == 0
        assert params.pets == 0
        assert params.checkin_iso == "2025-07-24"
        assert params.checkout_iso is None

    def test_reservation_url(self, codec):
        params = codec.decode(RESERVATION_URL)

        assert params.guest_count(GuestType.ADULT) == 2
        assert params.guest_count(GuestType.CHILD) == 0
        assert (params.checkin_iso, params.checkout_iso) == ("2025-07-31", "2025-08-03")

    def test_dates_copied_verbatim(self, codec):
        params = codec.decode("https://x.test/b?checkin=not-a-date")
        assert params.checkin_iso == "not-a-date"

    def test_first_occurrence_wins(self, codec):
        params = codec.decode("https://x.test/b?numberOfAdults=3&numberOfAdults=5")
        assert params.adults == 3

    @pytest.mark.parametrize("raw", ["two", "-1", "1.5"])
    def test_bad_count(self, codec, raw):
        with pytest.raises(ValidationError) as exc_info:
            codec.decode(f"https://x.test/b?numberOfChildren={raw}")
        assert exc_info.value.field == "numberOfChildren"

    @pytest.mark.parametrize("url", ["not a url", "/book/stays/1?numberOfAdults=1", ""])
    def test_invalid_url(self, codec, url):
        with pytest.raises(ValidationError):
            codec.decode(url)

    def test_decode_listing(self, codec):
        summary = codec.decode_listing(RESERVATION_URL)
        assert summary.url == RESERVATION_URL
        assert summary.booking_params.adults == 2
        assert summary.rating is None


class TestReplaceDates:
    """Test rewriting date parameters in place."""

    def test_only_date_values_change(self, codec):
        result = codec.replace_dates(LISTING_URL, "2025-07-31", "2025-08-03")

        assert result == LISTING_URL.replace("2025-07-24", "2025-07-31").replace(
            "2025-07-27", "2025-08-03"
        )
        assert result.endswith("&source_impression_id=p3_x#photos")

    def test_absent_parameter_is_not_added(self, codec):
        url = "https://x.test/rooms/1?adults=2&check_in=2025-07-24"
        result = codec.replace_dates(url, "2025-07-31", "2025-08-03")
        assert result == "https://x.test/rooms/1?adults=2&check_in=2025-07-31"

    def test_none_leaves_parameter_untouched(self, codec):
        result = codec.replace_dates(LISTING_URL, None, "2025-08-03")
        assert "check_in=2025-07-24" in result
        assert "check_out=2025-08-03" in result

    def test_similar_names_are_not_touched(self, codec):
        url = "https://x.test/r?my_check_in=a&check_in=2025-07-24"
        result = codec.replace_dates(url, "2025-07-31", None)
        assert result == "https://x.test/r?my_check_in=a&check_in=2025-07-31"

    @pytest.mark.parametrize("value", ["2025-07-31&x=1", "a#b", "a=b", "2025 07 31"])
    def test_unsafe_values_rejected(self, codec, value):
        with pytest.raises(ValidationError):
            codec.replace_dates(LISTING_URL, value, None)

    def test_replace_then_decode_with_shared_names(self):
        """Test decoding a rewritten URL yields the new dates when names agree."""
        codec = UrlStateCodec(decode_names=DECODE_NAMES, replace_names=DECODE_NAMES)

        rewritten = codec.replace_dates(RESERVATION_URL, "2025-09-01", "2025-09-05")
        params = codec.decode(rewritten)

        assert (params.checkin_iso, params.checkout_iso) == ("2025-09-01", "2025-09-05")
        assert params.adults == 2

    def test_custom_names(self):
        codec = UrlStateCodec(replace_names=DateParamNames("from", "to"))
        result = codec.replace_dates("https://x.test/r?from=1&to=2", "a", "b")
        assert result == "https://x.test/r?from=a&to=b"


class TestReservationUrl:
    def test_reservation_prefix(self, codec):
        assert codec.is_reservation_url(RESERVATION_URL)
        assert not codec.is_reservation_url(LISTING_URL)

    def test_custom_prefix(self, codec):
        assert codec.is_reservation_url(LISTING_URL, prefix="/rooms/")

    def test_from_settings(self, settings):
        codec = UrlStateCodec.from_settings(settings)
        assert codec.decode_names == DateParamNames("checkin", "checkout")
        assert codec.replace_names == DateParamNames("check_in", "check_out")
        assert codec.reservation_path == "/book/stays"
