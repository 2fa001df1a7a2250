"""
Songbook Backend - Song Controller (CRUD Orchestrator)
=======================================================

What:  Implements list, get, create, update and delete for songs.
How:   Each call walks the same steps against an injected SongStore:

    ┌──────────┐    ┌────────────┐    ┌────────────┐    ┌────────────┐
    │  Parse   │───▶│  Validate  │───▶│  Execute   │───▶│  Completed │
    │  (Route) │    │            │    │ (SongStore)│    │  (result)  │
    └──────────┘    └─────┬──────┘    └─────┬──────┘    └────────────┘
                          │                 │
                          ▼                 ▼
                   Rejected(error)     Failed(error)
                   ValidationError     NotFoundError
                   InvalidIdError      StoreUnavailableError

    Rejected requests never reach the store. Terminal errors propagate as
    exceptions and are encoded by the handlers in encoders.py.
Who:   Called by route handlers in routes/songs.py.

State:
    The controller holds only its store reference. Nothing is cached between
    calls; concurrent update/delete races are settled by the store.
"""

import logging
from typing import Any, List

from songbook.schemas.song import SongRecord
from songbook.services.song_store import SongStore
from songbook.services.validation import Operation, validate

logger = logging.getLogger(__name__)


class SongController:
    """
    Business logic layer for song operations.

    Args:
        store: The SongStore every operation executes against
    """

    def __init__(self, store: SongStore):
        self.store = store

    async def list_songs(self) -> List[SongRecord]:
        """Return all songs in insertion order."""
        validate(Operation.LIST)
        return await self.store.list()

    async def get_song(self, song_id: Any) -> SongRecord:
        """
        Retrieve a single song.

        Raises:
            InvalidIdError: song_id is not a canonical UUID (→ 400)
            NotFoundError: No song has that id (→ 404)
            StoreUnavailableError: Store failed or timed out (→ 500)
        """
        request = validate(Operation.GET, song_id=song_id)
        return await self.store.get_by_id(request.song_id)

    async def create_song(self, fields: Any) -> SongRecord:
        """
        Create a song from submitted fields.

        A client-supplied id is ignored; the store assigns one.

        Raises:
            ValidationError: title/artist empty or genre not text (→ 400)
            StoreUnavailableError: Store failed or timed out (→ 500)
        """
        request = validate(Operation.CREATE, fields=fields)
        song = await self.store.create(request.fields)
        logger.info("Song created: %s (%s - %s)", song.id, song.artist, song.title)
        return song

    async def update_song(self, song_id: Any, fields: Any) -> SongRecord:
        """
        Replace title, artist and genre of an existing song.

        This is a full replacement: a genre left out of `fields` is cleared.

        Raises:
            InvalidIdError, ValidationError, NotFoundError, StoreUnavailableError
        """
        request = validate(Operation.UPDATE, song_id=song_id, fields=fields)
        song = await self.store.update(request.song_id, request.fields)
        logger.info("Song updated: %s", song.id)
        return song

    async def delete_song(self, song_id: Any) -> None:
        """
        Delete a song permanently.

        Not idempotent in reporting: deleting an id twice raises NotFoundError
        the second time.
        """
        request = validate(Operation.DELETE, song_id=song_id)
        await self.store.delete(request.song_id)
        logger.info("Song deleted: %s", request.song_id)
