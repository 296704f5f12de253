from __future__ import annotations

from datetime import date

import pytest

from src.analytics.value_normalizer import parse_sheet_date, safe_parse_int


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("1 500 000", 1500000),
        ("", 0),
        ("-12", -12),
        ("abc", 0),
        ("$1,200", 1200),
        ("-", 0),
        (None, 0),
    ],
)
def test_safe_parse_int(raw, expected) -> None:
    assert safe_parse_int(raw) == expected


def test_parse_day_first_slash_date() -> None:
    assert parse_sheet_date("31/01/2024") == date(2024, 1, 31)


def test_parse_iso_date() -> None:
    assert parse_sheet_date("2024-01-31") == date(2024, 1, 31)
    assert parse_sheet_date("2024-01-31 14:05:00") == date(2024, 1, 31)


def test_parse_dotted_date_is_day_first() -> None:
    assert parse_sheet_date("5.3.2024") == date(2024, 3, 5)


def test_ambiguous_slash_date_is_month_first() -> None:
    assert parse_sheet_date("03/04/2024") == date(2024, 3, 4)


def test_generic_fallback_formats() -> None:
    assert parse_sheet_date("2024/02/29") == date(2024, 2, 29)
    assert parse_sheet_date("Jan 31, 2024") == date(2024, 1, 31)


@pytest.mark.parametrize("raw", ["", "   ", "not a date", "2024-02-30", "31.13.2024", "13/13/2024", None])
def test_unparsable_dates_return_none(raw) -> None:
    assert parse_sheet_date(raw) is None
