"""
Metric Chart Configuration Generator
Turns sparse metric rows into aligned, chart-ready payloads
"""
from __future__ import annotations

import json
import logging
from copy import deepcopy
from html import escape
from typing import Any, Dict, Iterable, List, Optional, Sequence

from metricboard.core.config import ChartSettings, get_settings
from metricboard.core.formatting import DateFormat, NumberFormat, format_date, format_number
from metricboard.core.logger import get_logger, timeit
from metricboard.schemas.metrics import AlignedSeries, MetricRow, MetricsData

from .series import DuplicatePolicy, align_series, group_by_metric, unify_axis

LOGGER = get_logger(__name__)

AXIS_LABEL_PLACEHOLDER = "##AXIS_LABEL_FORMATTER##"
TOOLTIP_PLACEHOLDER = "##TOOLTIP_FORMATTER##"

# Static presentation settings shared by every area chart.
TITLE_TEXT_STYLE = {"fontSize": 18, "fontWeight": "bold"}
TOOLTIP_STYLE = {
    "trigger": "axis",
    "backgroundColor": "rgba(255, 255, 255, 0.9)",
    "borderColor": "#ddd",
    "borderWidth": 1,
    "textStyle": {"color": "#333"},
}
LEGEND_STYLE = {"bottom": 10, "textStyle": {"fontSize": 12}}
GRID = {
    "left": "3%",
    "right": "4%",
    "bottom": "15%",
    "top": "15%",
    "containLabel": True,
}
X_AXIS_STYLE = {
    "type": "category",
    "boundaryGap": False,
    "axisLine": {"lineStyle": {"color": "#e0e0e0"}},
    "axisLabel": {"color": "#666", "fontSize": 11},
}
Y_AXIS_STYLE = {
    "type": "value",
    "axisLine": {"show": False},
    "axisTick": {"show": False},
    "axisLabel": {"color": "#666", "fontSize": 11},
    "splitLine": {"lineStyle": {"color": "#f0f0f0", "type": "dashed"}},
}
SERIES_STYLE = {
    "type": "line",
    "smooth": True,
    "symbol": "circle",
    "symbolSize": 6,
    "areaStyle": {"opacity": 0.3},
    "lineStyle": {"width": 3},
}
ANIMATION = {
    "animation": True,
    "animationDuration": 1000,
    "animationEasing": "cubicOut",
}

TOOLTIP_HEADER = '<div style="font-weight: bold; margin-bottom: 4px;">{label}</div>'
TOOLTIP_ROW = (
    '<div style="display: flex; align-items: center; margin: 2px 0;">'
    '<span style="display: inline-block; width: 10px; height: 10px; '
    'background-color: {color}; border-radius: 50%; margin-right: 8px;"></span>'
    '<span style="margin-right: 8px;">{name}:</span>'
    '<span style="font-weight: bold;">{value}</span>'
    "</div>"
)

AXIS_LABEL_JS = """function(value) {
    if (value >= 1000000) {
        return (value / 1000000).toFixed(1) + 'M';
    } else if (value >= 1000) {
        return (value / 1000).toFixed(1) + 'K';
    }
    return value.toString();
}"""

TOOLTIP_JS = """function(params) {
    let tooltip = '<div style="font-weight: bold; margin-bottom: 4px;">' + params[0].axisValue + '</div>';
    params.forEach(function(param) {
        tooltip += '<div style="display: flex; align-items: center; margin: 2px 0;">'
            + '<span style="display: inline-block; width: 10px; height: 10px; background-color: ' + param.color + '; border-radius: 50%; margin-right: 8px;"></span>'
            + '<span style="margin-right: 8px;">' + param.seriesName + ':</span>'
            + '<span style="font-weight: bold;">' + param.value.toLocaleString('en-US') + '</span>'
            + '</div>';
    });
    return tooltip;
}"""


def render_tooltip(axis_label: str, entries: Iterable[tuple[str, str, float]]) -> str:
    """Render tooltip markup for one axis position.

    Args:
        axis_label: Display label of the hovered date
        entries: ``(series name, swatch color, raw value)`` in legend order
    """
    parts = [TOOLTIP_HEADER.format(label=escape(axis_label))]
    for name, color, value in entries:
        parts.append(
            TOOLTIP_ROW.format(
                color=escape(color),
                name=escape(name),
                value=format_number(value, NumberFormat.GROUPED),
            )
        )
    return "".join(parts)


class ChartGenerator:
    """Generates aligned metric datasets and area chart configurations"""

    def __init__(
        self,
        color_palette: Optional[Sequence[str]] = None,
        *,
        settings: Optional[ChartSettings] = None,
        date_format: DateFormat = DateFormat.SHORT,
    ):
        """
        Initialize chart generator

        Args:
            color_palette: Custom color palette (uses config default if None)
            settings: Chart settings (uses application settings if None)
            date_format: Display format for axis date labels
        """
        self.settings = settings or get_settings().charts
        self.colors: tuple[str, ...] = tuple(color_palette or self.settings.color_palette)
        if not self.colors:
            raise ValueError("color_palette must contain at least one color")
        self.date_format = date_format
        self.duplicate_policy = DuplicatePolicy(self.settings.duplicate_policy)

    def color_for_index(self, index: int) -> str:
        """Return the palette color for the series at ``index``."""
        return self.colors[index % len(self.colors)]

    def _labels(self, axis: Sequence[Any]) -> List[str]:
        return [format_date(day, self.date_format) for day in axis]

    def _align(
        self,
        rows: List[MetricRow],
        metric_names: Sequence[str],
        axis: Sequence[Any],
    ) -> List[AlignedSeries]:
        return [
            AlignedSeries(
                name=name,
                color=self.color_for_index(index),
                data=align_series(rows, name, axis, duplicates=self.duplicate_policy),
            )
            for index, name in enumerate(metric_names)
        ]

    def format_metrics_data(self, metrics: Iterable[Any] | None) -> MetricsData:
        """
        Build the generic ``{labels, datasets}`` payload.

        Metric names are discovered from the rows themselves, in order of
        first appearance, and colored by that discovery order.

        Args:
            metrics: Metric rows (``MetricRow``, mappings or ORM objects)

        Returns:
            MetricsData with one dataset per discovered metric
        """
        rows = MetricRow.coerce_many(metrics)
        with timeit(
            "Metrics dataset build",
            logger=LOGGER,
            level=logging.DEBUG,
            unit="rows",
            total=len(rows),
        ):
            axis = unify_axis(rows)
            metric_names = list(group_by_metric(rows))
            series = self._align(rows, metric_names, axis)

        return MetricsData(
            labels=self._labels(axis),
            datasets=[item.to_dataset() for item in series],
        )

    def create_area_chart_config(
        self,
        metrics: Iterable[Any] | None,
        metric_names: Optional[Sequence[str]] = None,
    ) -> Dict[str, Any]:
        """
        Generate an area chart configuration for the requested metrics.

        Every requested name gets a series, in the requested order; a name
        with no rows becomes an all-zero series.

        Args:
            metrics: Metric rows (``MetricRow``, mappings or ORM objects)
            metric_names: Metrics to plot (configured defaults if None)

        Returns:
            Chart configuration dict for the rendering engine
        """
        names = list(metric_names) if metric_names is not None else list(
            self.settings.default_metric_names
        )
        rows = MetricRow.coerce_many(metrics)
        with timeit(
            "Area chart build",
            logger=LOGGER,
            level=logging.DEBUG,
            unit="rows",
            total=len(rows),
        ):
            axis = unify_axis(rows)
            series = self._align(rows, names, axis)

        unknown = [item.name for item in series if not any(item.data)]
        if rows and unknown:
            LOGGER.debug("Metrics without data in chart request: %s", ", ".join(unknown))

        config: Dict[str, Any] = {
            "title": {
                "text": self.settings.title,
                "left": "center",
                "textStyle": deepcopy(TITLE_TEXT_STYLE),
            },
            "tooltip": {**deepcopy(TOOLTIP_STYLE), "formatter": TOOLTIP_PLACEHOLDER},
            "legend": {"data": list(names), **deepcopy(LEGEND_STYLE)},
            "grid": deepcopy(GRID),
            "xAxis": {**deepcopy(X_AXIS_STYLE), "data": self._labels(axis)},
            "yAxis": self._build_y_axis(),
            "series": [self._build_series(item) for item in series],
        }
        config.update(ANIMATION)
        return config

    def _build_y_axis(self) -> Dict[str, Any]:
        y_axis = deepcopy(Y_AXIS_STYLE)
        y_axis["axisLabel"]["formatter"] = AXIS_LABEL_PLACEHOLDER
        return y_axis

    def _build_series(self, series: AlignedSeries) -> Dict[str, Any]:
        return {
            "name": series.name,
            **deepcopy(SERIES_STYLE),
            "data": list(series.data),
            "itemStyle": {"color": series.color},
        }

    def tooltip_for(self, config: Dict[str, Any], index: int) -> str:
        """
        Render the tooltip shown when hovering axis position ``index``.

        Raises IndexError when ``index`` is outside the chart's axis.
        """
        labels = config["xAxis"]["data"]
        label = labels[index]
        entries = [
            (item["name"], item["itemStyle"]["color"], item["data"][index])
            for item in config["series"]
        ]
        return render_tooltip(label, entries)

    def format_for_frontend(self, config: Dict[str, Any]) -> str:
        """
        Format chart config for frontend with JS function callbacks

        Args:
            config: Chart configuration dict

        Returns:
            JSON string with function callbacks preserved
        """
        json_str = json.dumps(config, indent=2)
        json_str = json_str.replace(f'"{AXIS_LABEL_PLACEHOLDER}"', AXIS_LABEL_JS)
        json_str = json_str.replace(f'"{TOOLTIP_PLACEHOLDER}"', TOOLTIP_JS)
        return json_str


def format_metrics_data(metrics: Iterable[Any] | None) -> MetricsData:
    """Build the generic payload with the configured palette."""
    return ChartGenerator().format_metrics_data(metrics)


def create_area_chart_config(
    metrics: Iterable[Any] | None,
    metric_names: Optional[Sequence[str]] = None,
) -> Dict[str, Any]:
    """Build the area chart configuration with the configured defaults."""
    return ChartGenerator().create_area_chart_config(metrics, metric_names)
