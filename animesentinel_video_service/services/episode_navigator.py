"""Episode ordering, neighbours and page URLs."""
import json
import logging
from typing import Iterable

from animesentinel_video_service.utils import slugify, full_url


def episode_sequence(episode_nums: Iterable[int]) -> list[int]:
    """Deduplicate and sort episode numbers."""
    return sorted(set(episode_nums))


def adjacent_episode(episode_nums: Iterable[int], episode_num: int, step: int) -> int | None:
    """Find the episode `step` positions away from episode_num

    Args:
        episode_nums (Iterable[int]): Episode numbers of a show in one translation type, duplicates allowed
        episode_num (int): Current episode number
        step (int): -1 for the previous episode, 1 for the next one

    Returns:
        int | None: Neighbouring episode number, None at a boundary or when episode_num is unknown
    """
    sequence = episode_sequence(episode_nums)
    try:
        position = sequence.index(episode_num)
    except ValueError:
        logging.warning(f"adjacent_episode: Episode {episode_num} not in {sequence}")
        return None

    target = position + step
    if 0 <= target < len(sequence):
        return sequence[target]
    return None


def previous_episode(episode_nums: Iterable[int], episode_num: int) -> int | None:
    return adjacent_episode(episode_nums, episode_num, -1)


def next_episode(episode_nums: Iterable[int], episode_num: int) -> int | None:
    return adjacent_episode(episode_nums, episode_num, 1)


def episode_path(show_id: int, title: str | None, translation_type: str, episode_num: int,
                 static: bool = False) -> str:
    show_part = "-" if static else str(show_id)
    return f"/anime/{show_part}/{slugify(title)}/{translation_type}/episode-{episode_num}"


def episode_url(show_id: int, title: str | None, translation_type: str, episode_num: int,
                static: bool = False) -> str:
    """Full URL of an episode page; the static form leaves out the show ID."""
    return full_url(episode_path(show_id, title, translation_type, episode_num, static))


def stream_url(show_id: int, title: str | None, translation_type: str, episode_num: int,
               streamer_id: str, mirror: int, static: bool = False) -> str:
    """Full URL of an episode page with one mirror selected."""
    path = episode_path(show_id, title, translation_type, episode_num, static)
    return full_url(f"{path}/{streamer_id}/{mirror}")


def episode_id(show_id: int, translation_type: str, episode_num: int, mal_id: int | None = None) -> str:
    """JSON string that identifies an episode, by MAL ID when it is known."""
    if mal_id is not None:
        return json.dumps({"mal_id": mal_id, "translation_type": translation_type, "episode_num": episode_num})
    return json.dumps({"show_id": show_id, "translation_type": translation_type, "episode_num": episode_num})
