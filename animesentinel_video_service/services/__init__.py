"""Services module."""
from .queue_service import QueueService  # type: ignore
from .video_service import VideoService  # type: ignore

__all__ = [
    "QueueService",
    "VideoService"
]
