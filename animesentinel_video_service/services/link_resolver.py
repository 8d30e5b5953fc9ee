"""Find a fresh direct video link on a streamer's player page."""
import logging
import re
from urllib.parse import urljoin

import requests

from animesentinel_video_service.config import LINK_RESOLVER_TIMEOUT_SECONDS
from animesentinel_video_service.services.link_refresher import VideoSnapshot

HEADERS = {"User-Agent": "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko)"}

VIDEO_LINK_PATTERNS = (
    re.compile(r"<source[^>]+src=[\"']([^\"']+)[\"']", re.IGNORECASE),
    re.compile(r"<video[^>]+src=[\"']([^\"']+)[\"']", re.IGNORECASE),
    re.compile(r"file\s*:\s*[\"']([^\"']+\.(?:mp4|m3u8|webm|mkv)[^\"']*)[\"']", re.IGNORECASE),
)


# noinspection PyMethodMayBeStatic
class PlayerPageLinkResolver:
    """Resolves a video link by scraping the mirror's player page."""
    def __init__(self, session: requests.Session | None = None,
                 timeout: float = LINK_RESOLVER_TIMEOUT_SECONDS) -> None:
        self.session = session or requests.Session()
        self.timeout = timeout

    def __call__(self, snapshot: VideoSnapshot) -> str | None:
        """Find a direct video link for a mirror

        Args:
            snapshot (VideoSnapshot): Mirror whose link is dead

        Returns:
            str | None: Direct video link, None when none could be found
        """
        page_url = snapshot.link_stream or snapshot.link_episode
        if not page_url:
            logging.warning(f"PlayerPageLinkResolver: Video {snapshot.id} has no player page to resolve from")
            return None

        try:
            response = self.session.get(page_url, headers=HEADERS, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logging.warning(f"PlayerPageLinkResolver: Could not fetch {page_url}: {e}")
            return None

        link = self.extract_video_link(response.text, page_url)
        if link is None:
            logging.info(f"PlayerPageLinkResolver: No video link found on {page_url}")
        return link

    def extract_video_link(self, html: str, page_url: str) -> str | None:
        """First video link on a player page, resolved against the page URL."""
        for pattern in VIDEO_LINK_PATTERNS:
            match = pattern.search(html)
            if match:
                return urljoin(page_url, match.group(1))
        return None
