"""Tests for number and date formatting helpers."""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from metricboard.core.formatting import (
    DateFormat,
    NumberFormat,
    format_axis_value,
    format_date,
    format_number,
    humanize_number,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1_500_000, "1.5M"),
        (1_000_000, "1.0M"),
        (1_250_000, "1.3M"),
        (2_500, "2.5K"),
        (999_999, "1000.0K"),
        (1_000, "1.0K"),
        (42, "42"),
        (42.5, "42.5"),
        (0, "0"),
        (-5_000, "-5000"),
        (Decimal("3200"), "3.2K"),
    ],
)
def test_format_axis_value(value, expected) -> None:
    assert format_axis_value(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [(float("inf"), "inf"), (float("-inf"), "-inf"), (float("nan"), "nan")],
)
def test_format_axis_value_passes_non_finite_values_through(value, expected) -> None:
    assert format_axis_value(value) == expected


def test_grouped_numbers_use_thousands_separators() -> None:
    assert format_number(1234567.5, NumberFormat.GROUPED) == "1,234,567.5"
    assert format_number(100.0, NumberFormat.GROUPED) == "100"
    assert format_number(0.12345, NumberFormat.GROUPED) == "0.123"
    assert format_number(-0.0001, NumberFormat.GROUPED) == "0"


def test_plain_numbers_drop_trailing_zero() -> None:
    assert format_number(300.0) == "300"
    assert format_number(0.25, NumberFormat.PLAIN) == "0.25"


def test_format_date_modes() -> None:
    day = date(2024, 1, 3)

    assert format_date(day) == "Jan 3"
    assert format_date(day, DateFormat.MEDIUM) == "Jan 3, 2024"
    assert format_date(day, DateFormat.ISO) == "2024-01-03"
    assert format_date(datetime(2024, 12, 25, 18, 30), DateFormat.SHORT) == "Dec 25"


def test_humanize_number_keeps_small_values_plain() -> None:
    assert humanize_number(9_999) == "9999"
    assert humanize_number(1_234_567, short=True) == "1.2M"
    assert humanize_number(-25_000) == "-25.0 thousand"
