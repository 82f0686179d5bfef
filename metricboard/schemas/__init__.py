"""Pydantic schemas for metric rows and chart payloads."""

from .metrics import (
    AlignedSeries,
    MetricDataset,
    MetricRow,
    MetricsData,
    coerce_metric_date,
)

__all__ = [
    "AlignedSeries",
    "MetricDataset",
    "MetricRow",
    "MetricsData",
    "coerce_metric_date",
]
