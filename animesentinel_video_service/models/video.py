"""SQLAlchemy model for a video, one mirror of an episode."""
from datetime import datetime

from sqlalchemy import String, Integer, Text, Float, DateTime, Index, UniqueConstraint, ForeignKey, func
from sqlalchemy.orm import mapped_column, Mapped

from animesentinel_video_service.models.base import Base


class Video(Base):
    """SQLAlchemy model for a video.

    A video is identified by (show_id, translation_type, episode_num, streamer_id, mirror).
    The mirror ordinal is allocated by the repository when the video is added.
    """
    __tablename__ = "videos"

    # Attributes
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    show_id: Mapped[int] = mapped_column(Integer, ForeignKey("shows.id"), nullable=False)
    translation_type: Mapped[str] = mapped_column(String(32), nullable=False)
    episode_num: Mapped[int] = mapped_column(Integer, nullable=False)
    streamer_id: Mapped[str] = mapped_column(String(64), nullable=False)
    mirror: Mapped[int] = mapped_column(Integer, nullable=False)
    link_episode: Mapped[str | None] = mapped_column(Text)
    link_stream: Mapped[str | None] = mapped_column(Text)
    link_video: Mapped[str | None] = mapped_column(Text)
    resolution: Mapped[str | None] = mapped_column(String(32))
    duration: Mapped[float | None] = mapped_column(Float)
    encoding: Mapped[str | None] = mapped_column(String(64))
    notes: Mapped[str | None] = mapped_column(Text)
    uploadtime: Mapped[datetime | None] = mapped_column(DateTime)
    created_at: Mapped[datetime | None] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint(
            'show_id', 'translation_type', 'episode_num', 'streamer_id', 'mirror',
            name='uq_videos_compound_key'
        ),
        Index('idx_videos_show_type_episode', 'show_id', 'translation_type', 'episode_num'),
    )

    def to_dict(self) -> dict:
        """Serialize the video for JSON responses."""
        return {
            "id": self.id,
            "show_id": self.show_id,
            "translation_type": self.translation_type,
            "episode_num": self.episode_num,
            "streamer_id": self.streamer_id,
            "mirror": self.mirror,
            "link_episode": self.link_episode,
            "link_stream": self.link_stream,
            "link_video": self.link_video,
            "resolution": self.resolution,
            "duration": self.duration,
            "encoding": self.encoding,
            "notes": self.notes,
            "uploadtime": self.uploadtime.isoformat() if self.uploadtime else None,
        }
