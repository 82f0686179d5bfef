"""Service layer that feeds a tenant's metric rows into the chart generator."""
from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from metricboard.core.config import ChartSettings, get_settings
from metricboard.core.logger import get_logger, log_context
from metricboard.repositories import MetricsRepository
from metricboard.schemas.metrics import MetricRow, MetricsData

from .chart_generator import ChartGenerator

LOGGER = get_logger(__name__)


class MetricsService:
    """Fetch tenant metrics and build dashboard chart payloads."""

    def __init__(
        self,
        generator: ChartGenerator | None = None,
        settings: ChartSettings | None = None,
    ) -> None:
        self.settings = settings or get_settings().charts
        self.generator = generator or ChartGenerator(settings=self.settings)

    def fetch_rows(self, session: Session, tenant_id: str) -> list[MetricRow]:
        """Return the tenant's recent rows, or an empty list if the query fails."""

        repository = MetricsRepository(session)
        try:
            return repository.list_for_tenant(tenant_id, limit=self.settings.fetch_limit)
        except SQLAlchemyError:
            LOGGER.exception("Error fetching metrics data for tenant %s", tenant_id)
            return []

    def get_overview(self, session: Session, tenant_id: str) -> MetricsData:
        """Return the generic ``{labels, datasets}`` payload for a tenant."""

        with log_context.scoped(tenant=tenant_id):
            rows = self.fetch_rows(session, tenant_id)
            data = self.generator.format_metrics_data(rows)
            LOGGER.info(
                "Built metrics overview with %d series over %d dates",
                len(data.datasets),
                len(data.labels),
            )
            return data

    def get_area_chart(
        self,
        session: Session,
        tenant_id: str,
        metric_names: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        """Return the area chart configuration for a tenant."""

        with log_context.scoped(tenant=tenant_id):
            rows = self.fetch_rows(session, tenant_id)
            config = self.generator.create_area_chart_config(rows, metric_names)
            LOGGER.info(
                "Built area chart for %s over %d dates",
                ", ".join(config["legend"]["data"]) or "no metrics",
                len(config["xAxis"]["data"]),
            )
            return config
