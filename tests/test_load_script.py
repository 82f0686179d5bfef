"""Tests for the CSV metrics loader script."""
from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from metricboard.repositories import MetricsRepository
from scripts import load_metrics_csv


def test_load_metrics_csv_persists_rows_for_tenant(tmp_path: Path) -> None:
    csv_path = tmp_path / "metrics.csv"
    csv_path.write_text(
        "metricName,metricDate,metricValue\n"
        "Revenue,2024-01-02,250.5\n"
        "Users,2024-01-01,12\n",
        encoding="utf-8",
    )
    database_url = f"sqlite:///{tmp_path / 'metrics.db'}"

    exit_code = load_metrics_csv.main(
        [str(csv_path), "--tenant", "tenant-a", "--database-url", database_url, "--create-tables"]
    )

    assert exit_code == 0
    engine = create_engine(database_url)
    with Session(engine) as session:
        rows = MetricsRepository(session).list_for_tenant("tenant-a")
        assert MetricsRepository(session).list_for_tenant("tenant-b") == []
    engine.dispose()
    assert [(row.metric_name, row.metric_value) for row in rows] == [
        ("Users", 12.0),
        ("Revenue", 250.5),
    ]
