"""Utility functions shared across the invoice manager package."""

from invoice_manager.utils.invoice_helpers import (
    INVALID_DATE,
    format_currency,
    format_date,
    format_timestamp,
    parse_date,
    parse_datetime,
    parse_number,
    parse_range_bound,
    utc_now,
)

__all__ = [
    "INVALID_DATE",
    "format_currency",
    "format_date",
    "format_timestamp",
    "parse_date",
    "parse_datetime",
    "parse_number",
    "parse_range_bound",
    "utc_now",
]
