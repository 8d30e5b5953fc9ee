"""Repository for shows"""
import logging

from sqlalchemy import update
from sqlalchemy.orm import Session

from animesentinel_video_service.models.show import Show


# noinspection PyMethodMayBeStatic
class ShowRepository:
    """Repository for shows"""
    def get_show(self, db: Session, show_id: int) -> Show | None:
        """Get a show by ID"""
        return db.get(Show, show_id)

    def increment_hits(self, db: Session, show_id: int) -> None:
        """Increment a show's hit counter in the database

        Args:
            db (Session): Database session
            show_id (int): Show ID
        """
        db.execute(update(Show).where(Show.id == show_id).values(hits=Show.hits + 1))
        db.flush()
        logging.debug(f"ShowRepository.increment_hits: Counted a hit for show_id {show_id}")
