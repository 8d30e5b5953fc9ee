"""SQLAlchemy model for a show."""
from datetime import datetime

from sqlalchemy import Integer, Text, DateTime, func
from sqlalchemy.orm import mapped_column, Mapped

from animesentinel_video_service.models.base import Base


class Show(Base):
    """SQLAlchemy model for a show."""
    __tablename__ = "shows"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    mal_id: Mapped[int | None] = mapped_column(Integer, nullable=True, unique=True)
    hits: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime | None] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())
