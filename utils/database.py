"""
Database utilities and engine management.

This module provides the core database engine that can be used by any layer:
- API routes
- Services
- Repositories
- Scripts

The engine (and its connection pool) is process-wide: created once at startup
and handed to the schema reconciler and content repository explicitly.

No dependencies on higher-level modules (api, services).
"""

from functools import lru_cache
from typing import Generator, Optional

from sqlalchemy import pool
from sqlalchemy.engine import Engine, make_url
from sqlmodel import create_engine, Session

from config.settings import settings


def build_engine(
    url: str,
    pool_size: Optional[int] = None,
    pool_timeout: Optional[int] = None,
) -> Engine:
    """
    Create an engine for the given URL.

    Args:
        url: SQLAlchemy database URL
        pool_size: Maximum pooled connections (defaults to DB_POOL_SIZE)
        pool_timeout: Seconds to wait for a free connection

    Returns:
        SQLAlchemy engine

    Note:
        SQLite URLs (tests, local runs) keep SQLAlchemy's default pool; the
        pool settings only apply to server databases.
    """
    if make_url(url).get_backend_name() == "sqlite":
        return create_engine(url, connect_args={"check_same_thread": False})

    return create_engine(
        url,
        pool_pre_ping=True,  # Verify connection before use
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_size=pool_size or settings.DB_POOL_SIZE,
        max_overflow=0,      # The pool size is the hard cap on connections
        pool_timeout=pool_timeout or settings.DB_POOL_TIMEOUT,
    )


def build_server_engine(url: str) -> Engine:
    """
    Create a short-lived engine connected to the server, not a database.

    Pooled connections are bound to an already-selected database, so
    database-creation DDL goes through this one instead.
    """
    server_url = make_url(url).set(database=None)
    return create_engine(server_url, poolclass=pool.NullPool)


@lru_cache()
def get_engine() -> Engine:
    """
    Get cached database engine.

    Returns:
        SQLAlchemy engine singleton
    """
    return build_engine(settings.database_url())


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Yields:
        SQLModel Session that auto-closes after request

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            ...
    """
    engine = get_engine()
    with Session(engine) as session:
        yield session
