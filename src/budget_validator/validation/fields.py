"""Field-level predicates for single cell values.

Every function here is total: malformed or missing input returns False
(or the INVALID_YEAR sentinel) instead of raising.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Optional

from .config import INVALID_YEAR

_INTEGER_RE = re.compile(r"-?[0-9]+")
_DATE_RE = re.compile(r"([0-9]{2})/([0-9]{2})/([0-9]{4})")


def is_non_empty(value: Optional[str]) -> bool:
    return value is not None and len(value.strip()) > 0


def is_numeric(value: Optional[str]) -> bool:
    """Check that the text is an integer with an optional leading '-'.

    Decimal points, exponents, '+' signs and thousands separators are rejected.

    Examples:
        >>> is_numeric(" -200 ")
        True
        >>> is_numeric("1,000")
        False
    """
    if value is None:
        return False
    return _INTEGER_RE.fullmatch(value.strip()) is not None


def is_positive(value: Optional[str]) -> bool:
    if not is_numeric(value):
        return False
    return int(value.strip()) > 0


def is_within_range(value: Optional[str], min_value: float, max_value: float) -> bool:
    """Check that an integer string lies in [min_value, max_value] inclusive."""
    if not is_numeric(value):
        return False
    number = int(value.strip())
    return min_value <= number <= max_value


def parse_date(value: Optional[str]) -> Optional[date]:
    """Parse a MM/DD/YYYY string into a date.

    Returns:
        The calendar date, or None when the text is not a real date in
        MM/DD/YYYY form (wrong width, wrong separators, month 13, Feb 30...).
    """
    if value is None:
        return None
    match = _DATE_RE.fullmatch(value.strip())
    if match is None:
        return None
    month, day, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def is_valid_date(value: Optional[str]) -> bool:
    """Check the date is in MM/DD/YYYY format and exists on the calendar.

    Examples:
        >>> is_valid_date("02/29/2024")
        True
        >>> is_valid_date("02/29/2023")
        False
        >>> is_valid_date("2/9/2024")
        False
    """
    return parse_date(value) is not None


def extract_year(value: Optional[str]) -> int:
    """Return the 4-digit year of a valid date, or INVALID_YEAR (-1)."""
    parsed = parse_date(value)
    if parsed is None:
        return INVALID_YEAR
    return parsed.year


__all__ = [
    "is_non_empty",
    "is_numeric",
    "is_positive",
    "is_within_range",
    "is_valid_date",
    "extract_year",
    "parse_date",
]
