"""
Songbook Backend - Database Session Management
===============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine with connection pooling, provides a session
       dependency that rolls back on error and always closes the session.
Who:   Used by the song store (via dependencies.py) and the health check.
When:  Engine is created at module import; sessions are created per-request.

Transaction Ownership:
    The session dependency does NOT commit. The song store commits inside
    each write operation, so the outcome of a write is known before the
    route builds its response.

Connection Pooling:
    pool_size / max_overflow:  From settings (server databases only)
    pool_pre_ping:             Validates connections before use
    pool_recycle=3600:         Recycles connections every hour
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from songbook.config import settings


def _engine_options() -> Dict[str, Any]:
    """Pool options for the configured backend; SQLite uses its dialect defaults."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after the store commits,
# so rows can be converted to records without another round trip
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object; Alembic reads it for migrations and the
    test suite uses it to create tables in SQLite.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the store built for this request
        3. On error: rolls back anything left uncommitted
        4. Always: closes the session (returns connection to pool)
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Closes all pooled connections. Called during application shutdown."""
    await engine.dispose()
