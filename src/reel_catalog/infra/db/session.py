from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from reel_catalog.infra.db.config import database_url, store_timeout_seconds

# Lazy initialization - only create engine/session when needed
_engine: Engine | None = None
_session_local: sessionmaker[Session] | None = None


def _connect_args(url: str) -> dict[str, Any]:
    """
    Push the store deadline down to the server where the driver supports it.

    PostgreSQL cancels any statement running longer than statement_timeout
    (SQLSTATE 57014), which the repository maps to StoreTimeoutError. This is
    the session-wide ceiling; the repository lowers it per statement to the
    time left on the current call.
    """
    if make_url(url).get_backend_name() == "postgresql":
        timeout_ms = int(store_timeout_seconds() * 1000)
        return {"options": f"-c statement_timeout={timeout_ms}"}
    return {}


def get_engine() -> Engine:
    """
    Get or create the database engine (lazy initialization).

    The engine (and its pool) is shared by every request; sessions are not.

    Connection Pool Configuration:
    - pool_size: Number of connections to keep open (base pool)
    - max_overflow: Additional connections allowed beyond pool_size
    - pool_pre_ping: Verify connection health before use
    - pool_recycle: Recycle connections after N seconds (prevent stale connections)
    - pool_timeout: Give up waiting for a free connection after the store deadline
    """
    global _engine
    if _engine is None:
        url = database_url()
        _engine = create_engine(
            url,
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,
            pool_recycle=3600,
            pool_timeout=store_timeout_seconds(),
            connect_args=_connect_args(url),
        )
    return _engine


def get_session_local() -> sessionmaker[Session]:
    """Get or create the session factory (lazy initialization)."""
    global _session_local
    if _session_local is None:
        _session_local = sessionmaker(
            bind=get_engine(),
            class_=Session,
            expire_on_commit=False,
        )
    return _session_local


@contextmanager
def get_session() -> Iterator[Session]:
    """Get a database session with automatic commit/rollback."""
    session = get_session_local()()

    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
