"""Video-related data models."""

from dataclasses import dataclass, field
from typing import Any, Optional

# Store key holding the newest-first list of videos
VIDEOS_KEY = "videos"

DEFAULT_MAX_VIDEOS = 50


def progress_key(video_id: str) -> str:
    """Store key of the progress record belonging to ``video_id``."""
    return f"video:{video_id}:progress"


@dataclass
class VideoProgress:
    """Playback position of a single video. Overwritten on every update."""

    current_time: float
    duration: float
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "currentTime": self.current_time,
            "duration": self.duration,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VideoProgress":
        return cls(
            current_time=data.get("currentTime"),
            duration=data.get("duration"),
            updated_at=data.get("updatedAt", ""),
        )


@dataclass
class Video:
    """A saved video.

    Everything the client sent on creation lives in ``fields`` untouched;
    only ``id`` and ``addedAt`` are assigned by the server. ``progress`` is
    never persisted with the video, it is attached when listing.
    """

    id: str
    added_at: str
    fields: dict[str, Any] = field(default_factory=dict)
    progress: Optional[VideoProgress] = None

    def to_dict(self) -> dict[str, Any]:
        data = dict(self.fields)
        data["id"] = self.id
        data["addedAt"] = self.added_at
        if self.progress is not None:
            data["progress"] = self.progress.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Video":
        fields = {k: v for k, v in data.items() if k not in ("id", "addedAt")}
        return cls(id=data.get("id", ""), added_at=data.get("addedAt", ""), fields=fields)
