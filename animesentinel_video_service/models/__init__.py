"""Models module."""
from .base import Base  # type: ignore
from .show import Show  # type: ignore
from .video import Video  # type: ignore

__all__ = [
    "Base",
    "Show",
    "Video"
]
