"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from typing import Optional
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

# Tried in order; the first format that yields a valid date wins. Numeric
# strings like 03/04/2024 are valid under several of these, so the order is
# what decides between month-first and day-first. strptime's %m and %d take
# one or two digits, so M/d/yyyy and d/M/yyyy are covered by the first two.
DATE_FORMATS = (
    "%m/%d/%Y",  # MM/dd/yyyy
    "%d/%m/%Y",  # dd/MM/yyyy
    "%Y-%m-%d",  # yyyy-MM-dd
    "%m-%d-%Y",  # MM-dd-yyyy
    "%d-%m-%Y",  # dd-MM-yyyy
    "%Y/%m/%d",  # yyyy/MM/dd
    "%b %d, %Y",  # MMM dd, yyyy
    "%d %b %Y",  # dd MMM yyyy
    "%B %d, %Y",  # MMMM dd, yyyy
)


def parse_date_string(date_str: str) -> Optional[date]:
    """Parse a statement date using the known export formats.

    Falls back to a free-form dateutil parse when no known format matches.

    Args:
        date_str: Date string as it appears in the export

    Returns:
        Date object, or None if the string is not a recognizable date
    """
    if not date_str or not date_str.strip():
        return None

    date_str = date_str.strip()

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError):
        return None


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports statement formats plus relative dates:
    - Absolute dates: "2024-01-15", "01/15/2024", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "this month", "last month",
      "this year", "last year"

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    normalized = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "this year": today.replace(month=1, day=1),
        "last year": today.replace(month=1, day=1) - relativedelta(years=1),
    }

    if normalized in relative_dates:
        return relative_dates[normalized]

    parsed = parse_date_string(date_str)
    if parsed is None:
        raise ValueError(f"Could not parse date '{date_str}'")
    return parsed
