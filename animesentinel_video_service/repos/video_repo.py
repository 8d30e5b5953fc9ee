"""Repository for videos"""
import logging
from typing import Any

from sqlalchemy import select, func, distinct, inspect
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, Mapper, ColumnProperty

from animesentinel_video_service.models.video import Video

MAX_ORDINAL_ATTEMPTS = 3


# noinspection PyMethodMayBeStatic
class VideoRepository:
    """Repository for videos"""
    def find(self, db: Session, show_id: int, translation_type: str, episode_num: int,
             streamer_id: str, mirror: int) -> Video | None:
        """Find a video by its compound key

        Args:
            db (Session): Database session
            show_id (int): Show ID
            translation_type (str): Translation type, e.g. "sub" or "dub"
            episode_num (int): Episode number
            streamer_id (str): Streamer ID
            mirror (int): Mirror ordinal

        Returns:
            Video | None: Matching video, if any
        """
        stmt = select(Video).where(
            Video.show_id == show_id,
            Video.translation_type == translation_type,
            Video.episode_num == episode_num,
            Video.streamer_id == streamer_id,
            Video.mirror == mirror,
        )
        return db.scalars(stmt).first()

    def find_by_id(self, db: Session, video_id: int) -> Video | None:
        """Find a video by its surrogate ID"""
        return db.get(Video, video_id)

    def get_episode_mirrors(self, db: Session, show_id: int, translation_type: str,
                            episode_num: int) -> list[Video]:
        """Get all mirrors of one episode in store order

        Args:
            db (Session): Database session
            show_id (int): Show ID
            translation_type (str): Translation type
            episode_num (int): Episode number

        Returns:
            list[Video]: Mirrors ordered by ID
        """
        stmt = select(Video).where(
            Video.show_id == show_id,
            Video.translation_type == translation_type,
            Video.episode_num == episode_num,
        ).order_by(Video.id)
        return list(db.scalars(stmt).all())

    def get_episode_numbers(self, db: Session, show_id: int, translation_type: str) -> list[int]:
        """Get the distinct episode numbers of a show in one translation type"""
        stmt = select(distinct(Video.episode_num)).where(
            Video.show_id == show_id,
            Video.translation_type == translation_type,
        ).order_by(Video.episode_num)
        return list(db.scalars(stmt).all())

    def get_streamer_ids(self, db: Session, show_id: int, translation_type: str, episode_num: int) -> list[str]:
        """Get the distinct streamers that stream one episode"""
        stmt = select(distinct(Video.streamer_id)).where(
            Video.show_id == show_id,
            Video.translation_type == translation_type,
            Video.episode_num == episode_num,
        ).order_by(Video.streamer_id)
        return list(db.scalars(stmt).all())

    def next_mirror(self, db: Session, show_id: int, translation_type: str, episode_num: int,
                    streamer_id: str) -> int:
        """Get the next free mirror ordinal for a (show, type, episode, streamer) key

        A locking read, so a retry after a conflicting insert sees the other transaction's ordinal.
        """
        stmt = select(func.max(Video.mirror)).where(
            Video.show_id == show_id,
            Video.translation_type == translation_type,
            Video.episode_num == episode_num,
            Video.streamer_id == streamer_id,
        ).with_for_update()
        max_mirror: int | None = db.scalar(stmt)
        return (max_mirror or 0) + 1

    def add_video(self, db: Session, video_data: dict[str, Any]) -> Video:
        """Add a video, allocating its mirror ordinal

        The ordinal is max+1 for the key. A concurrent insert of the same ordinal trips the
        unique constraint, in which case the savepoint is rolled back and a new ordinal allocated.

        Args:
            db (Session): Database session
            video_data (dict[str, Any]): Video attributes; unknown keys are ignored

        Returns:
            Video: Stored video

        Raises:
            IntegrityError: If no ordinal could be allocated after MAX_ORDINAL_ATTEMPTS
        """
        mapper: Mapper = inspect(Video)  # get video mapper
        video_columns: set[str] = {  # get video columns
            prop.key for prop in mapper.attrs.values() if isinstance(prop, ColumnProperty)
        }
        values: dict[str, Any] = {  # keep known columns, never trust a supplied id or mirror
            key: value for key, value in video_data.items() if key in video_columns and key not in ("id", "mirror")
        }

        last_error: IntegrityError | None = None
        for attempt in range(1, MAX_ORDINAL_ATTEMPTS + 1):
            mirror = self.next_mirror(
                db, values["show_id"], values["translation_type"], values["episode_num"], values["streamer_id"]
            )
            video = Video(**values, mirror=mirror)
            try:
                with db.begin_nested():
                    db.add(video)
                    db.flush()
                logging.debug(f"VideoRepository.add_video: Stored video {video.id} as mirror {mirror}")
                return video
            except IntegrityError as e:
                last_error = e
                logging.warning(
                    f"VideoRepository.add_video: Mirror {mirror} already taken "
                    f"(attempt {attempt}/{MAX_ORDINAL_ATTEMPTS}), allocating again"
                )

        logging.error("VideoRepository.add_video: Could not allocate a mirror ordinal")
        assert last_error is not None
        raise last_error

    def save(self, db: Session, video: Video) -> None:
        """Persist changes to a video

        Args:
            video (Video): Video to save
            db (Session): Database session
        """
        try:
            db.add(video)
            db.flush()
        except SQLAlchemyError as e:
            logging.error(f"video_repository.save: Database error while saving video {video.id}: {e}")
            raise
