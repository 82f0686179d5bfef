"""Service layer for the metrics dashboard."""

from .chart_generator import (
    ChartGenerator,
    create_area_chart_config,
    format_metrics_data,
    render_tooltip,
)
from .metrics_service import MetricsService
from .series import (
    DuplicateMetricRowError,
    DuplicatePolicy,
    align_series,
    group_by_metric,
    unify_axis,
)

__all__ = [
    "ChartGenerator",
    "DuplicateMetricRowError",
    "DuplicatePolicy",
    "MetricsService",
    "align_series",
    "create_area_chart_config",
    "format_metrics_data",
    "group_by_metric",
    "render_tooltip",
    "unify_axis",
]
