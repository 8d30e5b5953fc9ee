"""Dead video link detection and recovery."""
import logging
from dataclasses import dataclass, replace, fields
from typing import Any, Callable

from animesentinel_video_service.config import PROBE_MAX_ATTEMPTS
from animesentinel_video_service.services.prober import (
    ENCODING_BROKEN, ENCODING_EMBED, Prober, is_alive, player_support, probe_video_metadata
)

STALE_ENCODINGS = (ENCODING_BROKEN, ENCODING_EMBED, None)


@dataclass(frozen=True)
class VideoSnapshot:
    """The fields of a video that a refresh reads and writes."""
    id: int | None
    show_id: int
    translation_type: str
    episode_num: int
    streamer_id: str
    mirror: int
    link_episode: str | None = None
    link_stream: str | None = None
    link_video: str | None = None
    resolution: str | None = None
    duration: float | None = None
    encoding: str | None = None

    @classmethod
    def from_video(cls, video: Any) -> "VideoSnapshot":
        return cls(**{field.name: getattr(video, field.name) for field in fields(cls)})

    def apply_to(self, video: Any) -> None:
        """Copy the mutable fields back onto a video row."""
        for name in ("link_video", "resolution", "duration", "encoding"):
            setattr(video, name, getattr(self, name))

    def reprocess_request(self) -> dict[str, Any]:
        return {
            "show_id": self.show_id,
            "translation_types": [self.translation_type],
            "episode_num": self.episode_num,
            "streamer_id": self.streamer_id,
        }


def _with_metadata(snapshot: VideoSnapshot, prober: Prober, max_attempts: int) -> VideoSnapshot:
    result = probe_video_metadata(prober, snapshot.link_video, max_attempts)
    if not result.ok:
        return replace(snapshot, encoding=result.encoding)
    return replace(snapshot, encoding=result.encoding, resolution=result.resolution, duration=result.duration)


def refresh(snapshot: VideoSnapshot,
            prober: Prober,
            resolve_link: Callable[[VideoSnapshot], str | None],
            enqueue_reprocess: Callable[[dict[str, Any]], None],
            max_attempts: int = PROBE_MAX_ATTEMPTS) -> VideoSnapshot:
    """Refresh the video link of a mirror when it is needed

    A dead link is replaced through resolve_link and re-probed. A live link with a broken,
    embed or missing encoding is re-probed. A mirror that ends up broken is handed to
    enqueue_reprocess. Embed mirrors are left alone.

    Args:
        snapshot (VideoSnapshot): Current state of the mirror
        prober (Prober): Media inspection capability
        resolve_link (Callable): Finds a fresh video link for a mirror
        enqueue_reprocess (Callable): Queues the episode for re-processing
        max_attempts (int): Total number of full probes allowed

    Returns:
        VideoSnapshot: Updated state for the caller to persist
    """
    if not player_support(snapshot.link_video):
        return snapshot

    if not is_alive(prober, snapshot.link_video):
        logging.info(f"refresh: Video link of video {snapshot.id} is dead, resolving a new one")
        snapshot = replace(snapshot, link_video=resolve_link(snapshot))
        snapshot = _with_metadata(snapshot, prober, max_attempts)
    elif snapshot.encoding in STALE_ENCODINGS:
        logging.info(f"refresh: Video {snapshot.id} has encoding {snapshot.encoding!r}, probing again")
        snapshot = _with_metadata(snapshot, prober, max_attempts)

    if snapshot.encoding == ENCODING_BROKEN:
        logging.warning(f"refresh: Video {snapshot.id} is broken, queuing episode for re-processing")
        enqueue_reprocess(snapshot.reprocess_request())

    return snapshot
