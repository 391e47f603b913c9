from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from invoice_manager.utils import (
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


@pytest.mark.parametrize(
    "value, expected",
    [
        (3, Decimal("3")),
        (0.1, Decimal("0.1")),
        (" 12.50 ", Decimal("12.50")),
        ("-4", Decimal("-4")),
        ("1e2", Decimal("1E+2")),
        ("1e100", Decimal("1E+100")),
        (10**100, Decimal(10**100)),
        (Decimal("7.25"), Decimal("7.25")),
    ],
)
def test_parse_number_accepts_numeric_input(value, expected) -> None:
    assert parse_number(value) == expected


@pytest.mark.parametrize("value", [None, "", "   ", "abc", "12abc", True, "NaN", "Infinity", float("nan"), [1], "1e101", "1e999999999", 10**101])
def test_parse_number_rejects_non_numeric_input(value) -> None:
    assert parse_number(value) is None


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-01-15", date(2024, 1, 15)),
        ("1/15/2024", date(2024, 1, 15)),
        ("2024-01-15T23:30:00.000Z", date(2024, 1, 15)),
        (datetime(2024, 1, 15, 8), date(2024, 1, 15)),
        (date(2024, 1, 15), date(2024, 1, 15)),
    ],
)
def test_parse_date(value, expected) -> None:
    assert parse_date(value) == expected


@pytest.mark.parametrize("value", [None, "", "2024-13-45", "soon", 20240115])
def test_parse_date_invalid(value) -> None:
    assert parse_date(value) is None


def test_parse_datetime_normalizes_to_utc() -> None:
    assert parse_datetime("2024-01-15T10:30:00.000Z") == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    assert parse_datetime("2024-01-15T12:30:00+02:00") == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    assert parse_datetime(datetime(2024, 1, 15)).tzinfo is timezone.utc
    assert parse_datetime(date(2024, 1, 15)) == datetime(2024, 1, 15, tzinfo=timezone.utc)
    assert parse_datetime("garbage") is None


def test_format_timestamp_matches_javascript_iso() -> None:
    value = datetime(2024, 1, 15, 10, 30, 5, 123456, tzinfo=timezone(timedelta(hours=1)))

    assert format_timestamp(value) == "2024-01-15T09:30:05.123Z"


def test_utc_now_has_millisecond_precision() -> None:
    now = utc_now()

    assert now.tzinfo is timezone.utc
    assert now.microsecond % 1000 == 0
    assert parse_datetime(format_timestamp(now)) == now


def test_format_currency() -> None:
    assert format_currency(Decimal("1234.5")) == "$1,234.50"
    assert format_currency("-3") == "-$3.00"
    assert format_currency("abc") == "$0.00"


def test_format_date() -> None:
    assert format_date("2024-01-05") == "Jan 05, 2024"
    assert format_date("bad") == INVALID_DATE
    assert format_date(None) == INVALID_DATE


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-01-15", date(2024, 1, 15)),
        (" 01/15/2024 ", date(2024, 1, 15)),
        ("2024-01-15T10:30:00.000Z", datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)),
        ("2024-01-15T10:30:00", datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)),
        (datetime(2024, 1, 15, 10, 30), datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)),
        (date(2024, 1, 15), date(2024, 1, 15)),
    ],
)
def test_parse_range_bound(value, expected) -> None:
    parsed = parse_range_bound(value)

    assert parsed == expected
    assert type(parsed) is type(expected)


@pytest.mark.parametrize("value", [None, "", "next week", "2024-13-45", 20240115])
def test_parse_range_bound_invalid(value) -> None:
    assert parse_range_bound(value) is None
