"""
Songbook Backend - Song Store Adapter
======================================

What:  The persistence contract for songs and its SQLAlchemy implementation.
How:   SongStore declares the five id-keyed operations; SqlAlchemySongStore
       runs them on an AsyncSession, converts rows to SongRecord, and turns
       every driver failure into a typed exception.
Who:   Constructed per request by dependencies.get_song_store and injected
       into SongController. Tests substitute an in-memory SongStore.
When:  Exactly one store operation per request.

Failure Translation:
    row missing                  → NotFoundError
    id not a canonical UUID      → InvalidIdError (before touching the session)
    SQLAlchemyError / OSError    → StoreUnavailableError
    call exceeds store timeout   → StoreUnavailableError

    No retries. On failure the session is rolled back and the typed error
    propagates to the controller.

Write Semantics:
    create / update / delete commit before returning, so callers only see
    success once the store has accepted the change.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, List, TypeVar, Union
from uuid import UUID

from sqlalchemy import asc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from songbook.exceptions import NotFoundError, StoreUnavailableError
from songbook.models.song import Song
from songbook.schemas.song import SongFields, SongRecord
from songbook.services.validation import parse_song_id

logger = logging.getLogger(__name__)

T = TypeVar("T")

SongId = Union[str, UUID]


class SongStore(ABC):
    """Persistence interface for song records."""

    @abstractmethod
    async def list(self) -> List[SongRecord]:
        """Return every stored song in insertion order. All or nothing."""

    @abstractmethod
    async def get_by_id(self, song_id: SongId) -> SongRecord:
        """Return the song with `song_id` or raise NotFoundError."""

    @abstractmethod
    async def create(self, fields: SongFields) -> SongRecord:
        """Persist a new song and return it with its assigned id."""

    @abstractmethod
    async def update(self, song_id: SongId, fields: SongFields) -> SongRecord:
        """Replace title, artist and genre of an existing song."""

    @abstractmethod
    async def delete(self, song_id: SongId) -> None:
        """Remove a song permanently or raise NotFoundError."""


class SqlAlchemySongStore(SongStore):
    """
    SongStore backed by an async SQLAlchemy session.

    Args:
        session:  Request-scoped AsyncSession (not shared between requests)
        timeout:  Seconds a single operation may take before it is abandoned
    """

    def __init__(self, session: AsyncSession, timeout: float = 5.0):
        self._session = session
        self._timeout = timeout

    async def list(self) -> List[SongRecord]:
        async def _list() -> List[SongRecord]:
            result = await self._session.execute(
                select(Song).order_by(asc(Song.created_at), asc(Song.id))
            )
            return [SongRecord.model_validate(row) for row in result.scalars().all()]

        return await self._run("list", _list)

    async def get_by_id(self, song_id: SongId) -> SongRecord:
        key = parse_song_id(song_id)

        async def _get() -> SongRecord:
            return SongRecord.model_validate(await self._load(key))

        return await self._run("get", _get, song_id=key)

    async def create(self, fields: SongFields) -> SongRecord:
        async def _create() -> SongRecord:
            song = Song(title=fields.title, artist=fields.artist, genre=fields.genre)
            self._session.add(song)
            await self._session.flush()  # Assigns id and created_at
            record = SongRecord.model_validate(song)
            await self._session.commit()
            return record

        return await self._run("create", _create)

    async def update(self, song_id: SongId, fields: SongFields) -> SongRecord:
        key = parse_song_id(song_id)

        async def _update() -> SongRecord:
            song = await self._load(key)
            song.title = fields.title
            song.artist = fields.artist
            song.genre = fields.genre
            await self._session.flush()
            record = SongRecord.model_validate(song)
            await self._session.commit()
            return record

        return await self._run("update", _update, song_id=key)

    async def delete(self, song_id: SongId) -> None:
        key = parse_song_id(song_id)

        async def _delete() -> None:
            song = await self._load(key)
            await self._session.delete(song)
            await self._session.commit()

        await self._run("delete", _delete, song_id=key)

    # ── Internals ─────────────────────────────────────────────────────────

    async def _load(self, key: UUID) -> Song:
        song = await self._session.get(Song, key)
        if song is None:
            raise NotFoundError(resource="song", resource_id=str(key))
        return song

    async def _run(
        self,
        action: str,
        operation: Callable[[], Awaitable[T]],
        **context: Any,
    ) -> T:
        """
        Run one store operation under the timeout, translating failures.

        NotFoundError raised by the operation passes through untouched.
        """
        ctx = {"action": action, **{k: str(v) for k, v in context.items()}}
        try:
            return await asyncio.wait_for(operation(), timeout=self._timeout)
        except asyncio.TimeoutError:
            await self._rollback(action)
            logger.error("Song store %s timed out after %.1fs", action, self._timeout)
            raise StoreUnavailableError(
                context={**ctx, "timeout_seconds": self._timeout},
            )
        except (SQLAlchemyError, OSError) as e:
            await self._rollback(action)
            logger.error("Song store %s failed: %s", action, str(e))
            raise StoreUnavailableError(
                context={**ctx, "error_type": type(e).__name__, "error": str(e)},
            ) from e

    async def _rollback(self, action: str) -> None:
        try:
            await self._session.rollback()
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Rollback after failed %s also failed: %s", action, str(e))
