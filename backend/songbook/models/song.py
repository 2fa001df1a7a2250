"""
Songbook Backend - Song SQLAlchemy Model
=========================================

What:  ORM model representing the `songs` table (the stored song document).
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used only by SqlAlchemySongStore; nothing above the store sees ORM rows.
When:  Instantiated on create; loaded on get, update and delete.

Table Design:
    - id:          UUID primary key, generated on insert, never updated
    - title/artist: required text, checked non-empty before reaching the store
    - genre:       optional text
    - created_at:  insert time from the database clock; list order is
                   created_at ascending, then id

Portable column types (`Uuid`, `DateTime(timezone=True)`) keep the model
usable on PostgreSQL in production and on SQLite in the test suite.
`created_at` is filled by the database, so app instances with skewed clocks
still agree on insertion order.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Index, Text, Uuid
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql.expression import FunctionElement

from songbook.database import Base


class insert_timestamp(FunctionElement):
    """Current time with sub-second precision, rendered per dialect."""

    type = DateTime(timezone=True)
    name = "insert_timestamp"
    inherit_cache = True


@compiles(insert_timestamp)
def _default_insert_timestamp(element, compiler, **kw):
    return "CURRENT_TIMESTAMP"


# now() is frozen at transaction start; clock_timestamp() is the actual insert time
@compiles(insert_timestamp, "postgresql")
def _pg_insert_timestamp(element, compiler, **kw):
    return "clock_timestamp()"


# SQLite CURRENT_TIMESTAMP only has whole seconds
@compiles(insert_timestamp, "sqlite")
def _sqlite_insert_timestamp(element, compiler, **kw):
    return "strftime('%Y-%m-%d %H:%M:%f', 'now')"


class Song(Base):
    """
    A stored song.

    Lifecycle:
        1. Inserted by SongStore.create (id assigned here, created_at by the database)
        2. title/artist/genre replaced in place by SongStore.update
        3. Removed permanently by SongStore.delete (no soft delete)
    """

    __tablename__ = "songs"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Store-assigned identifier, immutable after insert",
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Song title, never empty",
    )

    artist: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Performing artist, never empty",
    )

    genre: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
        comment="Optional free-text genre",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=insert_timestamp(),
        comment="When this song was inserted (UTC)",
    )

    # Supports the insertion-ordered list query
    __table_args__ = (
        Index("idx_songs_created_at", created_at),
    )

    def __repr__(self) -> str:
        return f"<Song(id={self.id}, title='{self.title}', artist='{self.artist}')>"
