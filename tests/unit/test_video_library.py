"""Tests for VideoLibrary."""

import pytest

from services.kv_store import MemoryKVStore
from services.video_library import VideoLibrary


@pytest.fixture
def store():
    return MemoryKVStore()


@pytest.fixture
def library(store):
    return VideoLibrary(store, max_videos=50)


class TestAddVideo:
    @pytest.mark.asyncio
    async def test_assigns_id_and_added_at(self, library, store):
        video = await library.add_video({"title": "demo", "id": "client-id", "addedAt": "yesterday"})

        assert video.id != "client-id"
        assert video.added_at != "yesterday"
        assert video.fields == {"title": "demo"}

        stored = await store.get("videos", "json")
        assert stored == [video.to_dict()]

    @pytest.mark.asyncio
    async def test_newest_first(self, library, store):
        first = await library.add_video({"title": "first"})
        second = await library.add_video({"title": "second"})

        stored = await store.get("videos", "json")
        assert [entry["id"] for entry in stored] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_cap_keeps_most_recent(self, store):
        library = VideoLibrary(store, max_videos=50)
        added = [await library.add_video({"n": n}) for n in range(55)]

        stored = await store.get("videos", "json")
        assert len(stored) == 50
        assert [entry["id"] for entry in stored] == [video.id for video in reversed(added[5:])]


class TestListVideos:
    @pytest.mark.asyncio
    async def test_empty(self, library):
        assert await library.list_videos() == []

    @pytest.mark.asyncio
    async def test_progress_merged_without_touching_stored_list(self, library, store):
        older = await library.add_video({"title": "older"})
        newer = await library.add_video({"title": "newer"})
        await library.update_progress(older.id, 10, 100)

        videos = await library.list_videos()

        assert [video.id for video in videos] == [newer.id, older.id]
        assert videos[0].progress is None
        assert videos[1].progress.current_time == 10
        assert videos[1].progress.duration == 100
        assert all("progress" not in entry for entry in await store.get("videos", "json"))


class TestUpdateProgress:
    @pytest.mark.asyncio
    async def test_overwrites(self, library, store):
        await library.update_progress("x", 10, 100)
        await library.update_progress("x", 42, 100)

        data = await store.get("video:x:progress", "json")
        assert data["currentTime"] == 42
        assert set(data) == {"currentTime", "duration", "updatedAt"}

    @pytest.mark.asyncio
    async def test_unknown_video_accepted(self, library, store):
        await library.update_progress("ghost", 1, 2)
        assert await store.get("videos", "json") is None
        assert await store.get("video:ghost:progress", "json") is not None


class TestDeleteVideo:
    @pytest.mark.asyncio
    async def test_removes_entry_and_progress(self, library, store):
        keep = await library.add_video({"title": "keep"})
        drop = await library.add_video({"title": "drop"})
        await library.update_progress(drop.id, 5, 50)

        assert await library.delete_video(drop.id) is True

        assert [entry["id"] for entry in await store.get("videos", "json")] == [keep.id]
        assert f"video:{drop.id}:progress" not in store.data

    @pytest.mark.asyncio
    async def test_unknown_id_still_writes_and_deletes_progress(self, library, store):
        await library.update_progress("orphan", 1, 2)

        assert await library.delete_video("orphan") is False

        assert await store.get("videos", "json") == []
        assert "video:orphan:progress" not in store.data


class TestClearVideos:
    @pytest.mark.asyncio
    async def test_removes_list_key_and_all_progress(self, library, store):
        videos = [await library.add_video({"n": n}) for n in range(3)]
        for video in videos:
            await library.update_progress(video.id, 1, 2)

        assert await library.clear_videos() == 3

        assert "videos" not in store.data
        assert not any(key.startswith("video:") for key in store.data)

    @pytest.mark.asyncio
    async def test_clear_empty(self, library, store):
        assert await library.clear_videos() == 0
        assert store.data == {}
