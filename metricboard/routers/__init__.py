"""API routers for the metrics dashboard."""

from .metrics import router as metrics_router

__all__ = ["metrics_router"]
