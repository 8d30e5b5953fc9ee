"""Service for video and episode page operations."""
import logging
from datetime import datetime
from typing import Any, Callable

import azure.functions as func

from animesentinel_video_service.config import REFRESH_QUEUE, REPROCESS_QUEUE, PROBE_MAX_ATTEMPTS
from animesentinel_video_service.models.show import Show
from animesentinel_video_service.models.video import Video
from animesentinel_video_service.repos.show_repo import ShowRepository
from animesentinel_video_service.repos.video_repo import VideoRepository
from animesentinel_video_service.services.episode_navigator import (
    episode_id, episode_url, stream_url, previous_episode, next_episode
)
from animesentinel_video_service.services.link_refresher import VideoSnapshot, refresh
from animesentinel_video_service.services.link_resolver import PlayerPageLinkResolver
from animesentinel_video_service.services.mirror_selector import best_mirror, video_surface, video_aspect
from animesentinel_video_service.services.prober import Prober, FFProbe, player_support, probe_video_metadata
from animesentinel_video_service.services.queue_service import QueueService
from animesentinel_video_service.utils import db_session_manager

REQUIRED_VIDEO_FIELDS = ("show_id", "translation_type", "episode_num", "streamer_id")


class VideoService:
    """Service for video and episode page operations."""
    def __init__(self,
                 video_repository: VideoRepository | None = None,
                 show_repository: ShowRepository | None = None,
                 queue_service: QueueService | None = None,
                 prober: Prober | None = None,
                 link_resolver: Callable[[VideoSnapshot], str | None] | None = None) -> None:
        self.video_repository = video_repository or VideoRepository()
        self.show_repository = show_repository or ShowRepository()
        self.queue_service = queue_service or QueueService()
        self.prober = prober or FFProbe()
        self.link_resolver = link_resolver or PlayerPageLinkResolver()

    def get_show(self, show_id: int, count_hit: bool = True) -> dict[str, Any] | None:
        """Get a show's details, counting a page hit

        Args:
            show_id (int): Show ID
            count_hit (bool): Increment the show's hit counter. Defaults to True.

        Returns:
            dict[str, Any] | None: Show details, None if the show does not exist
        """
        with db_session_manager() as db:
            show: Show | None = self.show_repository.get_show(db, show_id)
            if show is None:
                logging.info(f"VideoService.get_show: show_id {show_id} not found")
                return None
            if count_hit:
                self.show_repository.increment_hits(db, show_id)
                db.refresh(show)
            return {"id": show.id, "title": show.title, "hits": show.hits}

    def get_episode(self, show_id: int, translation_type: str, episode_num: int,
                    streamer_id: str | None = None, mirror: int | None = None) -> dict[str, Any] | None:
        """Get everything an episode page shows

        Args:
            show_id (int): Show ID
            translation_type (str): Translation type
            episode_num (int): Episode number
            streamer_id (str | None): Streamer of the requested mirror
            mirror (int | None): Requested mirror ordinal; the best mirror is selected without one

        Returns:
            dict[str, Any] | None: Episode data, None if the show, episode or requested mirror does not exist
        """
        with db_session_manager() as db:
            show: Show | None = self.show_repository.get_show(db, show_id)
            if show is None:
                return None

            mirrors = self.video_repository.get_episode_mirrors(db, show_id, translation_type, episode_num)
            if not mirrors:
                logging.info(
                    f"VideoService.get_episode: No mirrors for show_id {show_id} {translation_type} "
                    f"episode {episode_num}"
                )
                return None

            if streamer_id is not None and mirror is not None:
                selected = self.video_repository.find(db, show_id, translation_type, episode_num, streamer_id, mirror)
                if selected is None:
                    return None
            else:
                selected = best_mirror(mirrors)

            episode_nums = self.video_repository.get_episode_numbers(db, show_id, translation_type)
            streamers = self.video_repository.get_streamer_ids(db, show_id, translation_type, episode_num)

            prev_num = previous_episode(episode_nums, episode_num)
            next_num = next_episode(episode_nums, episode_num)

            return {
                "show": {"id": show.id, "title": show.title},
                "episode_id": episode_id(show_id, translation_type, episode_num, show.mal_id),
                "translation_type": translation_type,
                "episode_num": episode_num,
                "episode_url": episode_url(show_id, show.title, translation_type, episode_num),
                "episode_url_static": episode_url(show_id, show.title, translation_type, episode_num, static=True),
                "previous_episode_url": (
                    episode_url(show_id, show.title, translation_type, prev_num) if prev_num is not None else None
                ),
                "next_episode_url": (
                    episode_url(show_id, show.title, translation_type, next_num) if next_num is not None else None
                ),
                "streamers": streamers,
                "selected": self._video_details(selected, show) if selected else None,
                "mirrors": [self._video_details(video, show) for video in mirrors],
            }

    def add_video(self, video_data: dict[str, Any]) -> dict[str, Any]:
        """Add a mirror for an episode

        The mirror ordinal is allocated on insert. Empty and embed links are classified straight away;
        a direct link is stored without an encoding and queued for a refresh, which probes it.

        Args:
            video_data (dict[str, Any]): Video attributes

        Returns:
            dict[str, Any]: Stored video

        Raises:
            ValueError: If a key field is missing or the show does not exist
        """
        missing = [name for name in REQUIRED_VIDEO_FIELDS if video_data.get(name) in (None, "")]
        if missing:
            raise ValueError(f"Missing required video fields: {', '.join(missing)}")

        values = dict(video_data)
        values["show_id"] = int(values["show_id"])
        values["episode_num"] = int(values["episode_num"])
        values["streamer_id"] = str(values["streamer_id"])
        if isinstance(values.get("uploadtime"), str):
            values["uploadtime"] = datetime.fromisoformat(values["uploadtime"])

        link_video = values.get("link_video")
        needs_probe = bool(link_video) and player_support(link_video)
        if needs_probe:
            values["encoding"] = None
        else:
            values["encoding"] = probe_video_metadata(self.prober, link_video).encoding

        with db_session_manager() as db:
            if self.show_repository.get_show(db, values["show_id"]) is None:
                raise ValueError(f"Unknown show_id {values['show_id']}")
            video = self.video_repository.add_video(db, values)
            logging.info(
                f"VideoService.add_video: Added mirror {video.mirror} of {video.streamer_id} for show_id "
                f"{video.show_id} {video.translation_type} episode {video.episode_num} ({video.encoding})"
            )
            stored = video.to_dict()

        if needs_probe:
            self.queue_refresh(stored["id"])
        return stored

    def queue_refresh(self, video_id: int) -> None:
        """Queue a video link refresh for a video"""
        self.queue_service.upload_queue_message(queue_name=REFRESH_QUEUE, message={"video_id": video_id})

    def enqueue_reprocess(self, request: dict[str, Any]) -> None:
        """Queue an episode for re-processing by the scraper"""
        self.queue_service.upload_queue_message(queue_name=REPROCESS_QUEUE, message=request)

    def refresh_video_link(self, refresh_msg: func.QueueMessage) -> None:
        """Refresh the video link of the video named in a queue message

        The message carries either "video_id" or the compound key of the video.

        Args:
            refresh_msg (func.QueueMessage): Refresh request message
        """
        try:
            msg_data: Any = refresh_msg.get_json()
        except ValueError:
            logging.error(f"VideoService.refresh_video_link: Refresh message {refresh_msg.id} is not JSON")
            return
        if not isinstance(msg_data, dict):
            logging.error(f"VideoService.refresh_video_link: Malformed refresh message {msg_data}")
            return

        with db_session_manager() as db:
            video = self._find_video(db, msg_data)
            if video is None:
                logging.error(f"VideoService.refresh_video_link: No video found for message {msg_data}")
                return
            snapshot = VideoSnapshot.from_video(video)

        updated = refresh(snapshot, self.prober, self.link_resolver, self.enqueue_reprocess, PROBE_MAX_ATTEMPTS)
        if updated == snapshot:
            logging.info(f"VideoService.refresh_video_link: Video {snapshot.id} needs no refresh")
            return

        with db_session_manager() as db:
            video = self.video_repository.find_by_id(db, snapshot.id)
            if video is None:
                logging.error(f"VideoService.refresh_video_link: Video {snapshot.id} disappeared during refresh")
                return
            updated.apply_to(video)
            self.video_repository.save(db, video)
        logging.info(f"VideoService.refresh_video_link: Video {snapshot.id} refreshed, encoding {updated.encoding}")

    def _find_video(self, db, msg_data: dict[str, Any]) -> Video | None:
        try:
            if msg_data.get("video_id") is not None:
                return self.video_repository.find_by_id(db, int(msg_data["video_id"]))
            return self.video_repository.find(
                db,
                int(msg_data["show_id"]),
                msg_data["translation_type"],
                int(msg_data["episode_num"]),
                str(msg_data["streamer_id"]),
                int(msg_data["mirror"]),
            )
        except (KeyError, TypeError, ValueError):
            logging.error(f"VideoService.refresh_video_link: Malformed refresh message {msg_data}")
            return None

    def _video_details(self, video: Video, show: Show) -> dict[str, Any]:
        details = video.to_dict()
        details.update({
            "stream_url": stream_url(
                show.id, show.title, video.translation_type, video.episode_num, video.streamer_id, video.mirror
            ),
            "stream_url_static": stream_url(
                show.id, show.title, video.translation_type, video.episode_num, video.streamer_id, video.mirror,
                static=True
            ),
            "video_surface": video_surface(video.resolution),
            "video_aspect": video_aspect(video.resolution),
            "player_support": player_support(video.link_video),
        })
        return details
