"""Conversions between the workflow's US dates and the wire's ISO dates."""

from datetime import date, datetime, timedelta

from staybot.constants import ISO_DATE_FORMAT, US_DATE_FORMAT
from staybot.core.exceptions import ValidationError

# The site renders English headers regardless of process locale
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def parse_us_date(us_date: str) -> date:
    """
    Parse a month-first "M/D/YYYY" date.

    Raises:
        ValidationError: If the string is not a valid US date
    """
    try:
        return datetime.strptime(us_date.strip(), US_DATE_FORMAT).date()
    except (AttributeError, ValueError) as e:
        raise ValidationError(f"Invalid US date (M/D/YYYY): {us_date!r}", "date", us_date) from e


def parse_iso_date(iso_date: str) -> date:
    """
    Parse a "YYYY-MM-DD" date.

    Raises:
        ValidationError: If the string is not a valid ISO date
    """
    try:
        return datetime.strptime(iso_date.strip(), ISO_DATE_FORMAT).date()
    except (AttributeError, ValueError) as e:
        raise ValidationError(
            f"Invalid ISO date (YYYY-MM-DD): {iso_date!r}", "date", iso_date
        ) from e


def format_us_date(d: date) -> str:
    """Format without zero padding, as the site displays it ("7/4/2025")."""
    return f"{d.month}/{d.day}/{d.year}"


def us_to_iso(us_date: str) -> str:
    """Convert "7/24/2025" to "2025-07-24"."""
    return parse_us_date(us_date).isoformat()


def iso_to_us(iso_date: str) -> str:
    """Convert "2025-07-24" to "7/24/2025"."""
    return format_us_date(parse_iso_date(iso_date))


def add_weeks(us_date: str, weeks: int) -> str:
    """Shift a US date by whole weeks, keeping the US format."""
    return format_us_date(parse_us_date(us_date) + timedelta(weeks=weeks))


def month_label(us_date: str) -> str:
    """Calendar header for the month containing ``us_date``, e.g. "July 2025"."""
    d = parse_us_date(us_date)
    return f"{MONTH_NAMES[d.month - 1]} {d.year}"
