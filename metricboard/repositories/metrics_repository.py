"""Data access for tenant-scoped metric rows."""
from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from metricboard.core.logger import get_logger
from metricboard.models import Metric
from metricboard.schemas.metrics import MetricRow

LOGGER = get_logger(__name__)


class MetricsRepository:
    """Read metric rows for a single tenant."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_for_tenant(self, tenant_id: str, *, limit: int = 30) -> list[MetricRow]:
        """Return the tenant's most recent ``limit`` rows in ascending date order."""

        statement = (
            select(Metric)
            .where(Metric.tenant_id == tenant_id)
            .order_by(Metric.metric_date.desc(), Metric.id.desc())
            .limit(limit)
        )
        records = self._session.scalars(statement).all()
        LOGGER.debug("Fetched %d metric rows for tenant %s", len(records), tenant_id)
        return [MetricRow.coerce(record) for record in reversed(records)]

    def add(
        self,
        tenant_id: str,
        rows: list[MetricRow],
    ) -> int:
        """Persist ``rows`` for ``tenant_id`` and return how many were added."""

        self._session.add_all(
            Metric(
                tenant_id=tenant_id,
                metric_name=row.metric_name,
                metric_date=row.metric_date,
                metric_value=Decimal(str(row.metric_value)),
            )
            for row in rows
        )
        self._session.flush()
        return len(rows)
