"""Date-axis unification and per-metric series alignment.

Both stages are pure functions over an in-memory list of ``MetricRow``: the
unified axis is the sorted set of every date seen in any row, and each aligned
series has exactly one value per axis date, zero-filled where the metric has
no row for that day.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date
from enum import Enum
from typing import Any

from metricboard.schemas.metrics import MetricRow

__all__ = [
    "DuplicateMetricRowError",
    "DuplicatePolicy",
    "align_series",
    "group_by_metric",
    "unify_axis",
]


class DuplicateMetricRowError(ValueError):
    """Raised when a metric has more than one row for the same day."""

    def __init__(self, metric_name: str, metric_date: date) -> None:
        self.metric_name = metric_name
        self.metric_date = metric_date
        super().__init__(
            f"Duplicate rows for metric '{metric_name}' on {metric_date.isoformat()}"
        )


class DuplicatePolicy(str, Enum):
    """How to resolve several rows sharing a ``(metric_name, metric_date)`` pair."""

    FIRST = "first"
    REJECT = "reject"


def _rows(rows: Iterable[Any] | None) -> list[MetricRow]:
    return MetricRow.coerce_many(rows)


def unify_axis(rows: Iterable[Any] | None) -> list[date]:
    """Return the ascending, de-duplicated dates present in ``rows``."""

    return sorted({row.metric_date for row in _rows(rows)})


def group_by_metric(rows: Iterable[Any] | None) -> dict[str, list[MetricRow]]:
    """Group rows by metric name, keyed in order of first appearance."""

    groups: dict[str, list[MetricRow]] = {}
    for row in _rows(rows):
        groups.setdefault(row.metric_name, []).append(row)
    return groups


def _index_values(
    rows: Iterable[MetricRow],
    metric_name: str,
    policy: DuplicatePolicy,
) -> dict[date, float]:
    values: dict[date, float] = {}
    for row in rows:
        if row.metric_name != metric_name:
            continue
        if row.metric_date in values:
            if policy is DuplicatePolicy.REJECT:
                raise DuplicateMetricRowError(metric_name, row.metric_date)
            continue
        values[row.metric_date] = float(row.metric_value)
    return values


def align_series(
    rows: Iterable[Any] | None,
    metric_name: str,
    axis: Sequence[date],
    *,
    duplicates: DuplicatePolicy | str = DuplicatePolicy.FIRST,
) -> list[float]:
    """Map one metric onto ``axis``, substituting ``0.0`` for missing days.

    Matching is exact on the metric name (case-sensitive) and on the calendar
    day. When several rows share a day the first one in input order wins,
    unless ``duplicates`` is ``REJECT``.
    """

    policy = DuplicatePolicy(duplicates)
    values = _index_values(_rows(rows), metric_name, policy)
    return [values.get(day, 0.0) for day in axis]
