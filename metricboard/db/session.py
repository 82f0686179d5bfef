"""SQLAlchemy session helpers for the metrics database."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session, sessionmaker

from .engine import create_sync_engine


def get_sessionmaker(url: str | None = None, **kwargs) -> sessionmaker:
    """Return a ``sessionmaker`` bound to a new engine for ``url``."""

    return sessionmaker(
        bind=create_sync_engine(url, **kwargs), autoflush=False, expire_on_commit=False
    )


@contextmanager
def session_scope(url: str | None = None, **kwargs) -> Iterator[Session]:
    """Yield a session whose work is committed on exit and rolled back on error."""

    factory = get_sessionmaker(url, **kwargs)
    with factory() as session, session.begin():
        yield session
