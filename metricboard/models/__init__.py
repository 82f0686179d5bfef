"""SQLAlchemy ORM models."""

from .base import Base
from .metrics import Metric

__all__ = ["Base", "Metric"]
