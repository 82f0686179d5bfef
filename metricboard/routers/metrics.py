"""Metric chart routes for the tenant dashboard."""
from __future__ import annotations

from collections.abc import Generator
from functools import lru_cache
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session, sessionmaker

from metricboard.core.logger import get_logger
from metricboard.core.security import TenantPrincipal, get_current_tenant
from metricboard.db.session import get_sessionmaker
from metricboard.schemas.metrics import MetricsData
from metricboard.services import DuplicateMetricRowError, MetricsService

router = APIRouter(prefix="/metrics", tags=["metrics"])
LOGGER = get_logger(__name__)


@lru_cache(maxsize=1)
def _session_factory() -> sessionmaker:
    return get_sessionmaker()


def get_db_session() -> Generator[Session, None, None]:
    """Yield a database session and ensure it is closed after use."""

    session = _session_factory()()
    try:
        yield session
    finally:
        session.close()


def get_metrics_service() -> MetricsService:
    """Return a new ``MetricsService`` instance for the request lifecycle."""

    return MetricsService()


def _unprocessable(exc: DuplicateMetricRowError) -> HTTPException:
    LOGGER.warning("Rejected metric rows: %s", exc)
    return HTTPException(status_code=422, detail=str(exc))


@router.get("/", summary="Aligned metric datasets", response_model=MetricsData)
def read_metrics_overview(
    tenant: TenantPrincipal = Depends(get_current_tenant),
    service: MetricsService = Depends(get_metrics_service),
    session: Session = Depends(get_db_session),
) -> MetricsData:
    """Return every metric of the tenant aligned to a shared date axis."""

    try:
        return service.get_overview(session, tenant.tenant_id)
    except DuplicateMetricRowError as exc:
        raise _unprocessable(exc) from exc


@router.get("/chart", summary="Area chart configuration")
def read_metrics_chart(
    metric: list[str] | None = Query(default=None, description="Metric names to plot, in order"),
    tenant: TenantPrincipal = Depends(get_current_tenant),
    service: MetricsService = Depends(get_metrics_service),
    session: Session = Depends(get_db_session),
) -> dict[str, Any]:
    """Return the declarative area chart configuration for the requested metrics."""

    try:
        return service.get_area_chart(session, tenant.tenant_id, metric)
    except DuplicateMetricRowError as exc:
        raise _unprocessable(exc) from exc


@router.get("/chart.js", summary="Area chart configuration with formatter callbacks")
def read_metrics_chart_script(
    metric: list[str] | None = Query(default=None, description="Metric names to plot, in order"),
    tenant: TenantPrincipal = Depends(get_current_tenant),
    service: MetricsService = Depends(get_metrics_service),
    session: Session = Depends(get_db_session),
) -> Response:
    """Return the chart configuration as a script literal with JS formatters inlined."""

    try:
        config = service.get_area_chart(session, tenant.tenant_id, metric)
    except DuplicateMetricRowError as exc:
        raise _unprocessable(exc) from exc
    return Response(
        content=service.generator.format_for_frontend(config),
        media_type="application/javascript",
    )
