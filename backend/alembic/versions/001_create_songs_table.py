"""Create songs table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `songs` table backing the song store.
How:   PostgreSQL UUID primary key generated server-side, TIMESTAMP WITH TIME ZONE
       insert time, and an index supporting the insertion-ordered list query.

Rollback: downgrade() drops the table entirely (destructive, all songs lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the songs table. Column docs live in songbook/models/song.py."""
    op.create_table(
        "songs",

        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
            comment="Store-assigned identifier, immutable after insert",
        ),

        sa.Column(
            "title",
            sa.Text(),
            nullable=False,
            comment="Song title, never empty",
        ),

        sa.Column(
            "artist",
            sa.Text(),
            nullable=False,
            comment="Performing artist, never empty",
        ),

        sa.Column(
            "genre",
            sa.Text(),
            nullable=True,
            comment="Optional free-text genre",
        ),

        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("clock_timestamp()"),
            nullable=False,
            comment="When this song was inserted (UTC)",
        ),

        sa.PrimaryKeyConstraint("id"),
        # Empty strings are rejected by the API; the constraint keeps direct
        # writes honest too
        sa.CheckConstraint("length(btrim(title)) > 0", name="ck_songs_title_not_empty"),
        sa.CheckConstraint("length(btrim(artist)) > 0", name="ck_songs_artist_not_empty"),
    )

    op.create_index(
        "idx_songs_created_at",
        "songs",
        ["created_at"],
    )


def downgrade() -> None:
    """Drop the songs table. WARNING: destructive."""
    op.drop_index("idx_songs_created_at", table_name="songs")
    op.drop_table("songs")
