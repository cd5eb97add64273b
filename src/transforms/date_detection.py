"""Date column detection for temporal checks.

A view is scanned once, on its first row: well-known date headers are
tried first, then any column holding an ISO-like date string.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from dateutil import parser as date_parser

from core.constants import DATE_COLUMN_CANDIDATES, ISO_DATE_PATTERN
from core.types import CanonicalRow

_ISO_DATE = re.compile(ISO_DATE_PATTERN)
_YEAR_FIRST_DATE = re.compile(r"\d{4}[-/.]")
# Fixed fill-in for partial dates keeps parsing independent of today's date.
_DEFAULT_DATE = datetime(2000, 1, 1)


def detect_date_column(row: CanonicalRow | None) -> str | None:
    """Find the date-bearing column of a row.

    Args:
        row: First row of the verified view, or ``None`` for empty views.

    Returns:
        Column name, or ``None`` when no column holds a parseable date.
    """
    if row is None:
        return None
    values = row.to_dict()
    for column in DATE_COLUMN_CANDIDATES:
        if column in values and parse_date(values[column]) is not None:
            return column
    for column, value in values.items():
        if isinstance(value, str) and _ISO_DATE.search(value) and parse_date(value) is not None:
            return column
    return None


def parse_date(value: object) -> datetime | None:
    """Parse a date value leniently, day-first for ambiguous text.

    Returns:
        Parsed datetime, or ``None`` when the value is not a date.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    # Year-first text keeps its month position; other text is read day-first.
    dayfirst = _YEAR_FIRST_DATE.match(text) is None
    try:
        return date_parser.parse(text, dayfirst=dayfirst, default=_DEFAULT_DATE)
    except (ValueError, OverflowError):
        return None


def month_key(value: object) -> str | None:
    """Return ``YYYY-MM`` for a date value, ``None`` when unparseable."""
    parsed = parse_date(value)
    if parsed is None:
        return None
    return f"{parsed.year:04d}-{parsed.month:02d}"
