"""
Parsing and formatting helpers for invoice data.

Provides helpers for:
- Numeric coercion of user-entered quantities, prices and rates
- Date and timestamp parsing (ISO and m/d/y formats)
- Currency and date formatting for display
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from decimal import Decimal, InvalidOperation, Overflow
from typing import Any

INVALID_DATE = "Invalid Date"

_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%m/%d/%y")

# Largest accepted power of ten for a single quantity, price or rate
MAX_MAGNITUDE = 100


def parse_number(value: Any) -> Decimal | None:
    """
    Coerce a user-entered value to a finite Decimal.

    Floats go through str() so 0.1 becomes Decimal("0.1") rather than its
    binary expansion. Booleans, blank strings, non-numeric text, NaN,
    infinities and values of 10**101 or more are rejected.

    Args:
        value: Raw quantity, price or rate.

    Returns:
        The parsed Decimal, or None when the value is not numeric.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, int):
        number = Decimal(value)
    elif isinstance(value, float):
        number = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = Decimal(text)
        except (InvalidOperation, Overflow, ValueError):
            return None
    else:
        return None
    if not number.is_finite():
        return None
    if number and number.adjusted() > MAX_MAGNITUDE:
        return None
    return number


def parse_date(value: Any) -> date | None:
    """
    Parse a calendar date.

    Accepts date/datetime objects, ISO strings ("2024-01-15" or a full
    ISO timestamp, whose date part is used) and m/d/y strings.

    Returns:
        date object if parsing succeeds, None otherwise.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            pass

    timestamp = parse_datetime(text)
    return timestamp.date() if timestamp else None


def parse_datetime(value: Any) -> datetime | None:
    """
    Parse a timestamp into a timezone-aware UTC datetime.

    Naive values are taken to be UTC. A bare date maps to midnight UTC.
    The trailing "Z" of JavaScript ISO strings is accepted.

    Returns:
        Aware datetime if parsing succeeds, None otherwise.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = f"{text[:-1]}+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_range_bound(value: Any) -> date | datetime | None:
    """
    Parse one end of a date range.

    Date-only strings ("2024-01-15", "01/15/2024") stay plain dates so the
    bound covers the whole day; anything with a time becomes an aware
    UTC datetime.

    Returns:
        date or datetime if parsing succeeds, None otherwise.
    """
    if isinstance(value, datetime):
        return parse_datetime(value)
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            pass
    return parse_datetime(text)


def format_timestamp(value: datetime) -> str:
    """Format a timestamp the way JavaScript's toISOString does."""
    utc = value.astimezone(timezone.utc) if value.tzinfo else value
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def format_currency(value: Any, symbol: str = "$") -> str:
    """
    Format an amount with the currency symbol prefix.

    Unparseable values are shown as zero.

    Returns:
        Formatted string like '$1,234.56'.
    """
    amount = parse_number(value) or Decimal("0")
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_date(value: Any) -> str:
    """Format a date for display, or 'Invalid Date' when it cannot be parsed."""
    parsed = parse_date(value)
    if parsed is None:
        return INVALID_DATE
    return parsed.strftime("%b %d, %Y")


def utc_now() -> datetime:
    """Current UTC time truncated to the millisecond precision of stored timestamps."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)
