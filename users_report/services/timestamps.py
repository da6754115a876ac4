"""
Normalization of the timestamp values returned by the lookups.

Lookups hand back whatever the source system produced: datetimes, dates,
strings in several layouts, or placeholders for "no value". Everything that is
not a usable point in time becomes ``None`` so it never reaches date arithmetic.
"""

import logging
import math
from datetime import date, datetime, timezone
from typing import Any, Optional

import dateutil.parser

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "Not Available"

# Placeholder strings that mean "no date" (compared case-insensitively).
MISSING_VALUES = {"", "null", "none", "undefined", "nan", "nat", "invalid date", "not available"}

# Two defaults that differ in year, month and day.
PARSE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def _naive_utc(value: datetime) -> datetime:
    # Aware and naive datetimes cannot be compared, so aware values are
    # converted to UTC and stripped.
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_timestamp(value: Any, dayfirst: bool = False) -> Optional[datetime]:
    """
    Convert a raw timestamp value into a naive datetime, or None if absent.

    Args:
        value: A datetime, date, string or placeholder.
        dayfirst: Read ambiguous dates such as ``05/10/2024`` as day/month.

    Returns:
        The parsed datetime, or None for empty, placeholder or malformed values.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _naive_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, float) and math.isnan(value):
        return None
    if not isinstance(value, str):
        logger.debug(f"Ignoring non-date timestamp value {value!r}")
        return None

    text = value.strip()
    if text.lower() in MISSING_VALUES:
        return None

    try:
        parsed = dateutil.parser.parse(text, dayfirst=dayfirst, default=PARSE_DEFAULTS[0])
        check = dateutil.parser.parse(text, dayfirst=dayfirst, default=PARSE_DEFAULTS[1])
    except (ValueError, OverflowError, TypeError) as e:
        logger.debug(f"Failed to parse timestamp '{text}': {e}")
        return None

    # dateutil fills missing parts from the default, so a partial value such
    # as "May" or "2024" parses differently under each default.
    if parsed.date() != check.date():
        logger.debug(f"Ignoring partial timestamp '{text}'")
        return None
    return _naive_utc(parsed)


def format_date(instant: Optional[datetime]) -> str:
    """Format a timestamp as ``YYYY-MM-DD`` for the report."""
    if instant is None:
        return NOT_AVAILABLE
    return instant.strftime("%Y-%m-%d")
