"""Best mirror selection for an episode."""
from typing import Iterable, Protocol, TypeVar

from animesentinel_video_service.services.prober import ENCODING_BROKEN, player_support


class MirrorLike(Protocol):
    resolution: str | None
    encoding: str | None
    link_video: str | None


M = TypeVar("M", bound=MirrorLike)


def _dimensions(resolution: str | None) -> tuple[int, int]:
    parts = (resolution or "").split("x")
    if len(parts) != 2:
        return 0, 0
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return 0, 0


def video_surface(resolution: str | None) -> int:
    """Surface area of a "WIDTHxHEIGHT" resolution, 0 when missing or malformed."""
    width, height = _dimensions(resolution)
    return width * height


def video_aspect(resolution: str | None) -> float | None:
    """Height over width of a "WIDTHxHEIGHT" resolution."""
    width, height = _dimensions(resolution)
    if width <= 0:
        return None
    return height / width


def _largest(mirrors: list[M], accept) -> M | None:
    best: M | None = None
    for mirror in mirrors:
        if accept(mirror) and (best is None or video_surface(mirror.resolution) > video_surface(best.resolution)):
            best = mirror
    return best


def best_mirror(mirrors: Iterable[M]) -> M | None:
    """Pick the best of all mirrors of one episode

    Prefers directly playable, working mirrors, then any working mirror, then any mirror at all.
    Within a tier the largest resolution wins; on equal surface the first mirror wins.

    Args:
        mirrors (Iterable[M]): Mirrors of one episode, in store order

    Returns:
        M | None: Best mirror, None when there are no mirrors
    """
    mirrors = list(mirrors)
    tiers = (
        lambda m: player_support(m.link_video) and m.encoding != ENCODING_BROKEN,
        lambda m: m.encoding != ENCODING_BROKEN,
        lambda m: True,
    )
    for accept in tiers:
        best = _largest(mirrors, accept)
        if best is not None:
            return best
    return None
