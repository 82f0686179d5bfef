"""Repositories wrapping SQLAlchemy queries."""

from .metrics_repository import MetricsRepository

__all__ = ["MetricsRepository"]
