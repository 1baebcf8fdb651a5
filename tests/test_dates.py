"""Tests for US/ISO date helpers."""

from datetime import date

import pytest

from staybot.core.exceptions import ValidationError
from staybot.utils.dates import (
    add_weeks,
    format_us_date,
    iso_to_us,
    month_label,
    parse_iso_date,
    parse_us_date,
    us_to_iso,
)


class TestParsing:
    def test_parse_us_date(self):
        assert parse_us_date("7/24/2025") == date(2025, 7, 24)
        assert parse_us_date("07/04/2025") == date(2025, 7, 4)

    def test_parse_iso_date(self):
        assert parse_iso_date("2025-07-24") == date(2025, 7, 24)

    @pytest.mark.parametrize("value", ["2025-07-24", "13/1/2025", "2/30/2025", "", None])
    def test_invalid_us_date(self, value):
        with pytest.raises(ValidationError):
            parse_us_date(value)

    def test_invalid_iso_date(self):
        with pytest.raises(ValidationError):
            parse_iso_date("7/24/2025")


class TestConversions:
    def test_us_to_iso(self):
        assert us_to_iso("7/24/2025") == "2025-07-24"

    def test_iso_to_us_is_not_zero_padded(self):
        assert iso_to_us("2025-07-04") == "7/4/2025"
        assert format_us_date(date(2025, 12, 31)) == "12/31/2025"

    def test_add_weeks_crosses_month(self):
        assert add_weeks("7/27/2025", 1) == "8/3/2025"
        assert add_weeks("12/30/2025", 1) == "1/6/2026"

    def test_month_label(self):
        assert month_label("7/24/2025") == "July 2025"
        assert month_label("1/1/2026") == "January 2026"
