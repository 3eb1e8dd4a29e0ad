"""
Date helpers for request builders.

Google's People API takes dates as separate day/month/year components,
while workflow users type (or pick) free-form date strings. split_date()
bridges the two.

Accepted inputs:
- ISO 8601 dates and datetimes (1990-05-15, 1990-05-15T10:00:00Z)
- US style MM/DD/YYYY
- YYYY/MM/DD
- Long forms like "May 15, 1990" or "15 May 1990"
- date / datetime objects
"""
from __future__ import annotations

import logging
from datetime import date, datetime

logger = logging.getLogger(__name__)

_FALLBACK_FORMATS = (
    "%m/%d/%Y",
    "%Y/%m/%d",
    "%m-%d-%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def parse_date(value: str | date) -> date:
    """
    Parse a free-form date value.

    Args:
        value: Date string or date/datetime object

    Returns:
        The calendar date (time part dropped)

    Raises:
        ValueError: If the value matches no supported format
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass

    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    raise ValueError(f"Unrecognized date: {value!r}")


def split_date(value: str | date) -> dict[str, str]:
    """
    Split a date into zero-padded day/month/year strings.

    Example:
        >>> split_date("1990-05-15")
        {'day': '15', 'month': '05', 'year': '1990'}
    """
    parsed = parse_date(value)
    month, day, year = parsed.strftime("%m/%d/%Y").split("/")
    return {"day": day, "month": month, "year": year}
