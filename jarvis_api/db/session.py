"""Engine/session helpers for the SQL backend."""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from jarvis_api.core.config import get_settings

Base = declarative_base()


@lru_cache
def get_engine() -> Engine:
    settings = get_settings()
    url = (settings.database_url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
    kwargs = {"future": True, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": settings.db_connect_timeout_seconds,
        }
    else:
        kwargs["pool_timeout"] = settings.db_connect_timeout_seconds
    return create_engine(url, **kwargs)


@lru_cache
def _get_sessionmaker():
    return sessionmaker(bind=get_engine(), autoflush=False, autocommit=False, expire_on_commit=False, future=True)


@contextmanager
def get_session() -> Iterator[Session]:
    session: Session = _get_sessionmaker()()
    try:
        yield session
    finally:
        session.close()
