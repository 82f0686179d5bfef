"""Shared pytest configuration."""
from __future__ import annotations

import os

os.environ.setdefault("LOG_DIR", "")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-metricboard-suite")

import pytest

from metricboard.core.config import get_settings


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Make environment overrides made by a test visible to ``get_settings``."""

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def session():
    """Provide an in-memory database session shared across threads."""

    from sqlalchemy import create_engine
    from sqlalchemy.orm import sessionmaker
    from sqlalchemy.pool import StaticPool

    from metricboard.models import Base

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    with SessionLocal() as db_session:
        yield db_session
    engine.dispose()


@pytest.fixture(autouse=True, scope="session")
def _stop_logging():
    yield
    from metricboard.core.logger import shutdown_logging

    shutdown_logging()
