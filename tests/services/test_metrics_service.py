"""Tests for the tenant metrics service and repository."""
from __future__ import annotations

from datetime import date, timedelta

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from metricboard.core.config import ChartSettings
from metricboard.repositories import MetricsRepository
from metricboard.schemas.metrics import MetricRow
from metricboard.services import DuplicateMetricRowError, MetricsService


def _row(name: str, day: str, value: float) -> MetricRow:
    return MetricRow.coerce({"metric_name": name, "metric_date": day, "metric_value": value})


@pytest.fixture()
def seeded(session: Session) -> Session:
    repository = MetricsRepository(session)
    repository.add(
        "tenant-a",
        [
            _row("Revenue", "2024-01-03", 300),
            _row("Revenue", "2024-01-01", 100),
            _row("Users", "2024-01-02", 5),
        ],
    )
    repository.add("tenant-b", [_row("Revenue", "2024-01-05", 999)])
    session.commit()
    return session


def test_repository_scopes_rows_to_tenant(seeded: Session) -> None:
    rows = MetricsRepository(seeded).list_for_tenant("tenant-a")

    assert [(row.metric_name, row.metric_date) for row in rows] == [
        ("Revenue", date(2024, 1, 1)),
        ("Users", date(2024, 1, 2)),
        ("Revenue", date(2024, 1, 3)),
    ]
    assert all(row.metric_value != 999 for row in rows)


def test_repository_keeps_most_recent_rows(session: Session) -> None:
    start = date(2024, 1, 1)
    MetricsRepository(session).add(
        "tenant-a",
        [_row("Revenue", (start + timedelta(days=offset)).isoformat(), offset) for offset in range(40)],
    )
    session.commit()

    rows = MetricsRepository(session).list_for_tenant("tenant-a", limit=30)

    assert len(rows) == 30
    assert rows[0].metric_date == start + timedelta(days=10)
    assert rows[-1].metric_date == start + timedelta(days=39)


def test_overview_aligns_tenant_metrics(seeded: Session) -> None:
    service = MetricsService(settings=ChartSettings())

    data = service.get_overview(seeded, "tenant-a")

    assert data.labels == ["Jan 1", "Jan 2", "Jan 3"]
    assert [(dataset.name, dataset.data) for dataset in data.datasets] == [
        ("Revenue", [100, 0, 300]),
        ("Users", [0, 5, 0]),
    ]


def test_area_chart_for_unknown_tenant_is_empty(seeded: Session) -> None:
    service = MetricsService(settings=ChartSettings())

    config = service.get_area_chart(seeded, "nobody")

    assert config["xAxis"]["data"] == []
    assert [series["data"] for series in config["series"]] == [[], []]


def test_query_failure_degrades_to_empty_rows(session: Session, monkeypatch) -> None:
    def _fail(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is gone"))

    monkeypatch.setattr(MetricsRepository, "list_for_tenant", _fail)
    service = MetricsService(settings=ChartSettings())

    data = service.get_overview(session, "tenant-a")

    assert data.labels == []
    assert data.datasets == []


def test_duplicate_rows_rejected_when_configured(seeded: Session) -> None:
    MetricsRepository(seeded).add("tenant-a", [_row("Users", "2024-01-02", 6)])
    seeded.commit()
    service = MetricsService(settings=ChartSettings(duplicate_policy="reject"))

    with pytest.raises(DuplicateMetricRowError):
        service.get_area_chart(seeded, "tenant-a", ["Users"])
