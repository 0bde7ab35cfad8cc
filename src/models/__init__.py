# Data models for the webtool API
from .submission import Submission
from .video import Video, VideoProgress

__all__ = [
    "Submission",
    "Video",
    "VideoProgress",
]
