"""Saved videos and their playback progress.

The whole video list lives under a single store key and is rewritten on
every change. Progress records live under one key per video so that progress
updates never touch the list.
"""

import asyncio
import logging
from typing import Any

from models.video import DEFAULT_MAX_VIDEOS, VIDEOS_KEY, Video, VideoProgress, progress_key
from services.kv_store import KVStore
from utils.records import new_record_id, prepend_capped, utc_timestamp

logger = logging.getLogger(__name__)


class VideoLibrary:
    """Read-modify-write operations over the stored video list.

    Concurrent writers are not serialized: two simultaneous adds may both
    read the same list and the later put wins.
    """

    def __init__(self, store: KVStore, max_videos: int = DEFAULT_MAX_VIDEOS):
        """Initialize the library.

        Args:
            store: Key-value store holding the list and progress records
            max_videos: Maximum number of videos kept, oldest dropped first
        """
        self.store = store
        self.max_videos = max_videos

    async def _load_entries(self) -> list[dict[str, Any]]:
        return await self.store.get(VIDEOS_KEY, "json") or []

    async def get_progress(self, video_id: str) -> VideoProgress | None:
        """Return the stored progress for ``video_id``, if any."""
        data = await self.store.get(progress_key(video_id), "json")
        if data is None:
            return None
        return VideoProgress.from_dict(data)

    async def list_videos(self) -> list[Video]:
        """Return all videos newest-first with their progress attached.

        Progress lookups run concurrently; results keep list order.
        """
        videos = [Video.from_dict(entry) for entry in await self._load_entries()]
        progresses = await asyncio.gather(*(self.get_progress(video.id) for video in videos))
        for video, progress in zip(videos, progresses):
            if progress is not None:
                video.progress = progress
        return videos

    async def add_video(self, fields: dict[str, Any]) -> Video:
        """Store a new video at the head of the list.

        Args:
            fields: Client-supplied video fields. ``id`` and ``addedAt`` are
                    replaced by server-generated values.

        Returns:
            The created video
        """
        video = Video(id=new_record_id(), added_at=utc_timestamp(), fields=dict(fields))
        video.fields.pop("id", None)
        video.fields.pop("addedAt", None)

        entries = await self._load_entries()
        updated = prepend_capped(entries, video.to_dict(), self.max_videos)
        if len(updated) <= len(entries):
            logger.info(f"Video list at capacity ({self.max_videos}), dropped oldest entry")
        await self.store.put(VIDEOS_KEY, updated)

        logger.info(f"Added video {video.id}")
        return video

    async def update_progress(self, video_id: str, current_time: float, duration: float) -> VideoProgress:
        """Create or overwrite the progress record for ``video_id``.

        The video does not have to exist.
        """
        progress = VideoProgress(current_time=current_time, duration=duration, updated_at=utc_timestamp())
        await self.store.put(progress_key(video_id), progress.to_dict())
        logger.debug(f"Updated progress for video {video_id}: {current_time}/{duration}")
        return progress

    async def delete_video(self, video_id: str) -> bool:
        """Remove a video and its progress record.

        The list is written back and the progress key deleted even when no
        video matched.

        Returns:
            True if a video with this id was in the list
        """
        entries = await self._load_entries()
        updated = [entry for entry in entries if entry.get("id") != video_id]
        await self.store.put(VIDEOS_KEY, updated)
        await self.store.delete(progress_key(video_id))

        removed = len(updated) != len(entries)
        if removed:
            logger.info(f"Deleted video {video_id}")
        else:
            logger.info(f"Delete requested for unknown video {video_id}")
        return removed

    async def clear_videos(self) -> int:
        """Delete every video's progress record, then the list key itself.

        Returns:
            Number of videos removed
        """
        entries = await self._load_entries()
        for entry in entries:
            await self.store.delete(progress_key(entry.get("id", "")))
        await self.store.delete(VIDEOS_KEY)

        logger.info(f"Cleared {len(entries)} videos")
        return len(entries)
