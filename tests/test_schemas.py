"""Tests for metric row coercion."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from metricboard.schemas.metrics import AlignedSeries, MetricRow, MetricsData, coerce_metric_date


@dataclass
class _OrmLikeRow:
    metric_name: str
    metric_date: date
    metric_value: Decimal
    tenant_id: str = "tenant-1"


def test_metric_row_accepts_database_and_client_names() -> None:
    snake = MetricRow.coerce(
        {"metric_name": "Revenue", "metric_date": "2024-01-01", "metric_value": "10", "tenant_id": "t"}
    )
    camel = MetricRow.coerce({"metricName": "Revenue", "metricDate": "2024-01-01", "metricValue": 10})

    assert snake == camel
    assert snake.metric_value == 10.0


def test_metric_row_reads_orm_attributes() -> None:
    row = MetricRow.coerce(_OrmLikeRow("Users", date(2024, 5, 1), Decimal("7.5")))

    assert row.metric_name == "Users"
    assert row.metric_date == date(2024, 5, 1)
    assert row.metric_value == 7.5


@pytest.mark.parametrize(
    "value",
    ["2024-01-03", "20240103", "2024-01-03T23:59:00Z", datetime(2024, 1, 3, 8), date(2024, 1, 3)],
)
def test_coerce_metric_date_normalises_to_day(value) -> None:
    assert coerce_metric_date(value) == date(2024, 1, 3)


def test_metric_row_rejects_unparseable_values() -> None:
    with pytest.raises(ValidationError):
        MetricRow.coerce({"metric_name": "Revenue", "metric_date": "yesterday", "metric_value": 1})
    with pytest.raises(ValidationError):
        MetricRow.coerce({"metric_name": "Revenue", "metric_date": "2024-01-01", "metric_value": "lots"})


def test_metrics_data_serialises_to_generic_shape() -> None:
    series = AlignedSeries(name="Revenue", color="#3B82F6", data=[1.0, 0.0])
    payload = MetricsData(labels=["Jan 1", "Jan 2"], datasets=[series.to_dataset()])

    assert payload.model_dump() == {
        "labels": ["Jan 1", "Jan 2"],
        "datasets": [{"name": "Revenue", "data": [1.0, 0.0], "color": "#3B82F6"}],
    }
