"""Helper functions for formatting chart numbers and dates."""

from __future__ import annotations

import math
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

_UNITS = [
    (Decimal("1e12"), "trillion", "T"),
    (Decimal("1e9"), "billion", "B"),
    (Decimal("1e6"), "million", "M"),
    (Decimal("1e3"), "thousand", "k"),
]

# Axis labels only ever step up to millions.
_AXIS_UNITS = [
    (1_000_000, "M"),
    (1_000, "K"),
]

# Fixed English abbreviations so labels do not follow the process locale.
_MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_ONE_DECIMAL = Decimal("0.1")

Number = int | float | Decimal


class NumberFormat(str, Enum):
    """Rendering modes for numeric values shown on charts."""

    COMPACT = "compact"
    GROUPED = "grouped"
    PLAIN = "plain"


class DateFormat(str, Enum):
    """Rendering modes for axis dates."""

    SHORT = "short"
    MEDIUM = "medium"
    ISO = "iso"


def _plain(value: float) -> str:
    if value == 0:
        return "0"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _compact(value: float) -> str:
    if not math.isfinite(value):
        return _plain(value)
    for threshold, suffix in _AXIS_UNITS:
        if value >= threshold:
            scaled = Decimal(value / threshold).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)
            return f"{scaled}{suffix}"
    return _plain(value)


def _grouped(value: float) -> str:
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return "0" if text in {"-0", ""} else text


def format_number(value: Number, mode: NumberFormat = NumberFormat.PLAIN) -> str:
    """Render ``value`` using one of the chart number formats.

    ``COMPACT`` renders values of a million or more as ``"1.5M"``, values of a
    thousand or more as ``"2.5K"`` and anything smaller as plain text.
    ``GROUPED`` uses comma thousands separators with at most three fraction
    digits. ``PLAIN`` is the shortest decimal text, without a trailing ``.0``
    for whole numbers.
    """
    number = float(value)
    if mode is NumberFormat.COMPACT:
        return _compact(number)
    if mode is NumberFormat.GROUPED:
        return _grouped(number)
    return _plain(number)


def format_axis_value(value: Number) -> str:
    """Format a y-axis tick label (``1_500_000`` -> ``"1.5M"``)."""
    return format_number(value, NumberFormat.COMPACT)


def format_date(value: date | datetime, mode: DateFormat = DateFormat.SHORT) -> str:
    """Render a calendar date as a display label."""
    if isinstance(value, datetime):
        value = value.date()
    if mode is DateFormat.ISO:
        return value.isoformat()
    label = f"{_MONTH_ABBREVIATIONS[value.month - 1]} {value.day}"
    if mode is DateFormat.MEDIUM:
        return f"{label}, {value.year}"
    return label


def humanize_number(
    value: int | float | Decimal,
    short: bool = False,
    decimals: int = 1
) -> str:
    """Format a number with human-readable units.

    Args:
        value: The number to format
        short: If True, use short suffixes (k, M, B, T) instead of full words
        decimals: Number of decimal places to show
    """
    d = Decimal(str(value))
    sign = "-" if d < 0 else ""
    d = abs(d)

    def _format_plain_number() -> str:
        if d == d.to_integral():
            whole = format(d, "f")
            if "." in whole:
                whole = whole.rstrip("0").rstrip(".") or "0"
            return f"{sign}{whole}"
        return f"{sign}{d:.{decimals}f}"

    if d < Decimal("1e4"):
        return _format_plain_number()

    for threshold, long_name, short_name in _UNITS:
        if d >= threshold:
            if short:
                return f"{sign}{(d / threshold):.{decimals}f}{short_name}"
            return f"{sign}{(d / threshold):.{decimals}f} {long_name}"

    return _format_plain_number()

