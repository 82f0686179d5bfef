"""Schemas for metric rows and chart-ready metric payloads."""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def coerce_metric_date(value: Any) -> date:
    """Normalise a date-like value to a calendar day.

    Accepts ``date``/``datetime`` instances and ISO-8601 strings in either date
    (``2024-01-03``, ``20240103``) or date-time form
    (``2024-01-03T09:30:00Z``). Date-times are truncated to their day.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None:
        raise ValueError("metric_date is required")
    text_value = str(value).strip()
    try:
        return date.fromisoformat(text_value)
    except ValueError:
        return datetime.fromisoformat(text_value).date()


class MetricRow(BaseModel):
    """One observation of a named metric on a given day.

    Both the database column names (``metric_name``) and the camel-cased
    client names (``metricName``) are accepted. Ownership columns such as
    ``tenant_id`` are ignored; rows arrive already scoped to one tenant.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True, extra="ignore")

    metric_name: str = Field(validation_alias=AliasChoices("metric_name", "metricName"))
    metric_date: date = Field(validation_alias=AliasChoices("metric_date", "metricDate"))
    metric_value: float = Field(validation_alias=AliasChoices("metric_value", "metricValue"))

    @field_validator("metric_date", mode="before")
    @classmethod
    def _normalise_date(cls, value: Any) -> date:
        return coerce_metric_date(value)

    @classmethod
    def coerce(cls, row: "MetricRow | Mapping[str, Any] | Any") -> "MetricRow":
        """Return ``row`` as a ``MetricRow``, validating mappings and ORM objects."""

        if isinstance(row, cls):
            return row
        if isinstance(row, Mapping):
            return cls.model_validate(dict(row))
        return cls.model_validate(row, from_attributes=True)

    @classmethod
    def coerce_many(cls, rows: Iterable[Any] | None) -> list["MetricRow"]:
        if not rows:
            return []
        return [cls.coerce(row) for row in rows]


class MetricDataset(BaseModel):
    """One metric's values aligned to the shared label axis."""

    name: str
    data: list[float]
    color: str


class MetricsData(BaseModel):
    """Generic ``{labels, datasets}`` chart payload."""

    labels: list[str] = Field(default_factory=list)
    datasets: list[MetricDataset] = Field(default_factory=list)


@dataclass(frozen=True, slots=True)
class AlignedSeries:
    """A metric's values remapped onto the unified date axis."""

    name: str
    color: str
    data: list[float] = field(default_factory=list)

    def to_dataset(self) -> MetricDataset:
        return MetricDataset(name=self.name, data=list(self.data), color=self.color)
