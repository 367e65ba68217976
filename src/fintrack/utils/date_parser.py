"""Date parsing utilities."""

from datetime import date, datetime
from typing import Optional
import re

from dateutil import parser as date_parser

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
FOUR_DIGIT_YEAR = re.compile(r"^(\d{1,2})[/.](\d{1,2})[/.](\d{4})$")
TWO_DIGIT_YEAR = re.compile(r"^(\d{1,2})[/.](\d{1,2})[/.](\d{2})$")

# Two-digit years up to and including this value belong to the 2000s.
CENTURY_CUTOFF = 30

_FALLBACK_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def _iso(year: int, month: int, day: int) -> Optional[str]:
    """Return the ISO string for a calendar date, or None if it does not exist."""
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def expand_two_digit_year(year: int) -> int:
    """Map a two-digit year onto a century: 00-30 -> 2000s, 31-99 -> 1900s."""
    return 2000 + year if year <= CENTURY_CUTOFF else 1900 + year


def _parse_four_digit_year(first: int, second: int, year: int) -> Optional[str]:
    if first > 12 and second <= 12:
        # Unambiguously DD/MM/YYYY
        return _iso(year, second, first)
    if second > 12 and first <= 12:
        # Unambiguously MM/DD/YYYY
        return _iso(year, first, second)
    # Ambiguous: European DD/MM/YYYY, accepted only if it is a real date
    return _iso(year, second, first)


def _parse_two_digit_year(first: int, second: int, short_year: int) -> Optional[str]:
    year = expand_two_digit_year(short_year)
    if first > 12 and second <= 12:
        return _iso(year, second, first)
    # MM/DD/YY, including the ambiguous case
    return _iso(year, first, second)


def parse_date(date_str: Optional[str]) -> Optional[str]:
    """Parse a bank export date into an ISO "YYYY-MM-DD" string.

    Tried in order:
    - ISO "2024-01-15" (returned unchanged when it is a real date)
    - "D/M/YYYY" or "D.M.YYYY": a component above 12 decides the order,
      otherwise day-first (European)
    - "M/D/YY" or "D.M.YY": a first component above 12 means day-first,
      otherwise month-first (US); years 00-30 are 20xx, 31-99 are 19xx
    - anything python-dateutil understands, e.g. "Jan 15, 2024", as long as
      it names a full year, month and day ("Jan 15" or "2024" is rejected)

    Args:
        date_str: Raw date cell

    Returns:
        ISO date string, or None if the value is not a recognizable date
    """
    if date_str is None:
        return None
    trimmed = date_str.strip()
    if not trimmed:
        return None

    if ISO_DATE.match(trimmed):
        year, month, day = (int(part) for part in trimmed.split("-"))
        return _iso(year, month, day)

    match = FOUR_DIGIT_YEAR.match(trimmed)
    if match:
        first, second, year = (int(part) for part in match.groups())
        parsed = _parse_four_digit_year(first, second, year)
        if parsed is not None:
            return parsed

    match = TWO_DIGIT_YEAR.match(trimmed)
    if match:
        first, second, short_year = (int(part) for part in match.groups())
        parsed = _parse_two_digit_year(first, second, short_year)
        if parsed is not None:
            return parsed

    # Parse against two defaults that differ in year, month and day; any
    # component missing from the cell shows up as a disagreement.
    try:
        first, second = (
            date_parser.parse(trimmed, default=default).date()
            for default in _FALLBACK_DEFAULTS
        )
    except (ValueError, OverflowError):
        return None
    if first != second:
        return None
    return first.isoformat()
