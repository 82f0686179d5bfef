"""Metric time-series normalisation and chart configuration service."""

from .core import get_logger, get_settings
from .main import create_app
from .services import create_area_chart_config, format_metrics_data

__all__ = [
    "create_app",
    "create_area_chart_config",
    "format_metrics_data",
    "get_logger",
    "get_settings",
]
