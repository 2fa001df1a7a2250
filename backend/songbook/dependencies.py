"""
Songbook Backend - Dependency Wiring
=====================================

What:  FastAPI dependencies that build the store and controller per request.
How:   get_db_session → get_song_store → get_song_controller. Tests replace
       get_song_store through app.dependency_overrides to inject a test double.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from songbook.config import settings
from songbook.database import get_db_session
from songbook.services.song_controller import SongController
from songbook.services.song_store import SongStore, SqlAlchemySongStore


async def get_song_store(db: AsyncSession = Depends(get_db_session)) -> SongStore:
    return SqlAlchemySongStore(db, timeout=settings.store_timeout_seconds)


async def get_song_controller(store: SongStore = Depends(get_song_store)) -> SongController:
    return SongController(store)
