"""
Alembic Migration Environment
===============================

What:  Applies the songbook migrations to the database in DATABASE_URL.
How:   The URL comes from songbook.config.settings, so the app and the
       migrations always target the same database. Online runs open a
       throwaway async engine and hand its connection to Alembic.
Who:   `alembic upgrade head` and friends, run from the backend/ directory.

SQLite URLs migrate in batch mode, since SQLite cannot ALTER most
constraints in place.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from songbook.config import settings
from songbook.database import Base
from songbook.models.song import Song  # noqa: F401

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)

MIGRATION_OPTIONS = {
    "target_metadata": Base.metadata,
    "compare_type": True,
    "render_as_batch": settings.is_sqlite,
}


def run_offline(url: str) -> None:
    """Print the migration SQL instead of executing it (`alembic upgrade --sql`)."""
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **MIGRATION_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    context.configure(connection=connection, **MIGRATION_OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


async def run_online(url: str) -> None:
    engine = create_async_engine(url, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_offline(settings.database_url)
else:
    asyncio.run(run_online(settings.database_url))
