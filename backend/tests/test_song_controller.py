"""
Songbook Backend - Song Controller Unit Tests
==============================================

What:  Tests for SongController semantics over the in-memory store double.
How:   The double counts store calls, so rejected requests can be shown to
       stop before the store.

What we test:
    ✅ Full lifecycle: create → list → get → update → delete → get
    ✅ Malformed ids and invalid fields never reach the store
    ✅ Unknown ids raise NotFoundError on get/update/delete
    ✅ Update is a full replacement; delete is not idempotent
    ✅ Store failures propagate typed
"""

from uuid import uuid4

import pytest

from songbook.exceptions import (
    InvalidIdError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)


class TestSongLifecycle:
    """The create → list → get → update → delete → get scenario."""

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, controller, imagine):
        created = await controller.create_song(imagine)
        assert created.id is not None
        assert created.genre == "Rock"

        assert await controller.list_songs() == [created]
        assert await controller.get_song(str(created.id)) == created

        updated = await controller.update_song(
            str(created.id),
            {"title": "Imagine", "artist": "John Lennon", "genre": "Soft Rock"},
        )
        assert updated.genre == "Soft Rock"
        assert updated.id == created.id

        await controller.delete_song(str(created.id))
        with pytest.raises(NotFoundError):
            await controller.get_song(str(created.id))

    @pytest.mark.asyncio
    async def test_create_then_get_matches_fields(self, controller):
        fields = {"title": "Blackbird", "artist": "The Beatles"}
        created = await controller.create_song(fields)

        fetched = await controller.get_song(str(created.id))

        assert fetched.model_dump(exclude={"id"}) == {**fields, "genre": None}

    @pytest.mark.asyncio
    async def test_update_only_genre_keeps_title_and_artist(self, controller, imagine):
        created = await controller.create_song(imagine)

        updated = await controller.update_song(created.id, {**imagine, "genre": "Pop"})

        assert updated.title == imagine["title"]
        assert updated.artist == imagine["artist"]
        assert updated.genre == "Pop"

    @pytest.mark.asyncio
    async def test_update_without_genre_clears_it(self, controller, imagine):
        created = await controller.create_song(imagine)

        updated = await controller.update_song(
            created.id, {"title": "Imagine", "artist": "John Lennon"}
        )

        assert updated.genre is None

    @pytest.mark.asyncio
    async def test_create_ignores_client_id(self, controller, imagine):
        client_id = str(uuid4())
        created = await controller.create_song({**imagine, "id": client_id})
        assert str(created.id) != client_id

    @pytest.mark.asyncio
    async def test_delete_twice_reports_not_found(self, controller, imagine):
        created = await controller.create_song(imagine)

        await controller.delete_song(created.id)
        with pytest.raises(NotFoundError):
            await controller.delete_song(created.id)


class TestSongRejections:
    """Rejected requests stop before the store."""

    @pytest.mark.asyncio
    async def test_empty_title_rejected_without_store_call(self, controller, song_store):
        with pytest.raises(ValidationError) as exc_info:
            await controller.create_song({"title": "", "artist": "X"})
        assert exc_info.value.field == "title"
        assert song_store.total_calls == 0

    @pytest.mark.asyncio
    async def test_update_invalid_fields_rejected_without_store_call(
        self, controller, song_store, imagine
    ):
        created = await controller.create_song(imagine)
        song_store.calls.clear()

        with pytest.raises(ValidationError) as exc_info:
            await controller.update_song(created.id, {"title": "Imagine", "artist": ""})
        assert exc_info.value.field == "artist"
        assert song_store.total_calls == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_id", ["abc", "123", "507f1f77bcf86cd799439011"])
    async def test_malformed_ids_rejected_without_store_call(
        self, controller, song_store, imagine, bad_id
    ):
        with pytest.raises(InvalidIdError):
            await controller.get_song(bad_id)
        with pytest.raises(InvalidIdError):
            await controller.update_song(bad_id, imagine)
        with pytest.raises(InvalidIdError):
            await controller.delete_song(bad_id)
        assert song_store.total_calls == 0

    @pytest.mark.asyncio
    async def test_unknown_ids_not_found(self, controller, imagine):
        missing = str(uuid4())
        with pytest.raises(NotFoundError):
            await controller.get_song(missing)
        with pytest.raises(NotFoundError):
            await controller.update_song(missing, imagine)
        with pytest.raises(NotFoundError):
            await controller.delete_song(missing)


class TestSongStoreFailures:
    """Typed store failures propagate unchanged."""

    @pytest.mark.asyncio
    async def test_list_store_unavailable(self, controller, song_store):
        song_store.failure = StoreUnavailableError()
        with pytest.raises(StoreUnavailableError):
            await controller.list_songs()
        assert song_store.calls["list"] == 1

    @pytest.mark.asyncio
    async def test_create_store_unavailable(self, controller, song_store, imagine):
        song_store.failure = StoreUnavailableError()
        with pytest.raises(StoreUnavailableError):
            await controller.create_song(imagine)
