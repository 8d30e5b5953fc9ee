"""Shared helpers: database sessions and URL building."""
import logging
import re
import unicodedata
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, Engine
from sqlalchemy.orm import sessionmaker, Session

from animesentinel_video_service.config import SQLALCHEMY_CONNECTION_STRING, SITE_BASE_URL

_engine: Engine | None = None
_session_factory: sessionmaker | None = None


def get_engine() -> Engine:
    """Get the shared SQLAlchemy engine, creating it on first use."""
    global _engine, _session_factory
    if _engine is None:
        if not SQLALCHEMY_CONNECTION_STRING:
            raise ValueError("Missing required setting: 'SQLALCHEMY_CONNECTION_STRING'")
        _engine = create_engine(SQLALCHEMY_CONNECTION_STRING, pool_pre_ping=True, pool_recycle=3600)
        _session_factory = sessionmaker(bind=_engine, autoflush=False, expire_on_commit=False)
    return _engine


@contextmanager
def db_session_manager() -> Iterator[Session]:
    """Provide a transactional database session

    Commits when the block exits cleanly, rolls back and re-raises otherwise.

    Yields:
        Session: Database session
    """
    get_engine()
    db: Session = _session_factory()  # type: ignore[misc]
    try:
        yield db
        db.commit()
    except Exception as e:
        logging.error(f"db_session_manager: Rolling back transaction: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def slugify(text: str | None) -> str:
    """Turn a show title into a URL slug."""
    if not text:
        return ""
    text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"[^\w\s-]", "", text.lower())
    return re.sub(r"[\s_-]+", "-", text).strip("-")


def full_url(path: str) -> str:
    """Prefix a site path with the configured base URL."""
    return SITE_BASE_URL.rstrip("/") + "/" + path.lstrip("/")
