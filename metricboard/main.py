"""FastAPI application instance."""
from __future__ import annotations

from fastapi import FastAPI

from metricboard.core import get_logger
from metricboard.routers import metrics_router

LOGGER = get_logger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(title="Metrics Dashboard", version="0.1.0")
    app.include_router(metrics_router)
    LOGGER.info("Metrics dashboard application created")
    return app


app = create_app()
