"""ORM model for the tenant-scoped metrics table."""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import BigInteger, Date, DateTime, Index, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Metric(Base):
    """Daily observation of a named metric owned by one tenant."""

    __tablename__ = "metrics"
    __table_args__ = (Index("ix_metrics_tenant_date", "tenant_id", "metric_date"),)

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False)
    metric_name: Mapped[str] = mapped_column(String(128), nullable=False)
    metric_date: Mapped[date] = mapped_column(Date, nullable=False)
    metric_value: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return (
            f"Metric(tenant_id={self.tenant_id!r}, metric_name={self.metric_name!r}, "
            f"metric_date={self.metric_date!r}, metric_value={self.metric_value!r})"
        )
