"""
Songbook Backend - Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── song_store: InMemorySongStore test double with per-operation call counts
    ├── controller: SongController wired to song_store
    ├── test_client: HTTPX AsyncClient against the app, store overridden
    ├── sqlite_session: AsyncSession on a fresh in-memory SQLite schema
    ├── mock_db_session: AsyncMock session for failure-path store tests
    └── imagine: the fields of a sample song
"""

import os

# Settings are read at import time, so the environment is prepared before
# any songbook module is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["STORE_TIMEOUT_SECONDS"] = "2"

from collections import Counter
from typing import Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from songbook.database import Base
from songbook.exceptions import NotFoundError
from songbook.models.song import Song  # noqa: F401
from songbook.schemas.song import SongFields, SongRecord
from songbook.services.song_controller import SongController
from songbook.services.song_store import SongId, SongStore
from songbook.services.validation import parse_song_id


# ══════════════════════════════════════════════════════════════════════════
# Test Double
# ══════════════════════════════════════════════════════════════════════════

class InMemorySongStore(SongStore):
    """
    Dict-backed SongStore that counts every call.

    Set `failure` to an exception to make every operation raise it.
    """

    def __init__(self):
        self.documents: Dict[UUID, SongRecord] = {}
        self.calls: Counter = Counter()
        self.failure: Optional[Exception] = None

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())

    def _enter(self, operation: str) -> None:
        self.calls[operation] += 1
        if self.failure is not None:
            raise self.failure

    def _require(self, song_id: SongId) -> UUID:
        key = parse_song_id(song_id)
        if key not in self.documents:
            raise NotFoundError(resource="song", resource_id=str(key))
        return key

    async def list(self) -> List[SongRecord]:
        self._enter("list")
        return list(self.documents.values())

    async def get_by_id(self, song_id: SongId) -> SongRecord:
        self._enter("get_by_id")
        return self.documents[self._require(song_id)]

    async def create(self, fields: SongFields) -> SongRecord:
        self._enter("create")
        record = SongRecord(id=uuid4(), **fields.model_dump())
        self.documents[record.id] = record
        return record

    async def update(self, song_id: SongId, fields: SongFields) -> SongRecord:
        self._enter("update")
        key = self._require(song_id)
        record = SongRecord(id=key, **fields.model_dump())
        self.documents[key] = record
        return record

    async def delete(self, song_id: SongId) -> None:
        self._enter("delete")
        del self.documents[self._require(song_id)]


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def song_store():
    return InMemorySongStore()


@pytest.fixture
def controller(song_store):
    return SongController(song_store)


@pytest.fixture
def imagine():
    return {"title": "Imagine", "artist": "John Lennon", "genre": "Rock"}


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
        await SqlAlchemySongStore(mock_db_session).list()
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def sqlite_session():
    """
    Provides an AsyncSession on a private in-memory SQLite database.

    StaticPool keeps the single connection alive so the schema created here
    is the one the session sees.
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(song_store):
    """
    Provides an async HTTP test client for endpoint testing.

    The app's store dependency is replaced by `song_store`, so no database
    is touched and tests can assert on store call counts.
    """
    from songbook.dependencies import get_song_store
    from songbook.main import app

    app.dependency_overrides[get_song_store] = lambda: song_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
