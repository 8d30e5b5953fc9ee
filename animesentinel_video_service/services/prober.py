"""Video metadata probing with ffprobe."""
import json
import logging
import subprocess
from dataclasses import dataclass
from typing import Any, Protocol

from animesentinel_video_service.config import FFPROBE_PATH, PROBE_TIMEOUT_SECONDS, PROBE_MAX_ATTEMPTS

ENCODING_BROKEN = "broken"
ENCODING_EMBED = "embed"

PROBE_FORMAT = "format"
PROBE_FULL = "full"


class Prober(Protocol):
    """Media inspection capability."""
    def probe(self, resource: str, mode: str) -> dict[str, Any]:
        """Inspect a resource; an empty dict means nothing could be read."""
        ...


class FFProbe:
    """Prober that shells out to the ffprobe binary."""
    def __init__(self, binary: str = FFPROBE_PATH, timeout: float = PROBE_TIMEOUT_SECONDS) -> None:
        self.binary = binary
        self.timeout = timeout

    def probe(self, resource: str, mode: str) -> dict[str, Any]:
        """Run ffprobe against a URL or path

        Args:
            resource (str): URL or path of the video
            mode (str): PROBE_FORMAT for container metadata only, PROBE_FULL for streams and format

        Returns:
            dict[str, Any]: Parsed ffprobe JSON, empty when the probe failed
        """
        command = [self.binary, "-v", "quiet", "-print_format", "json", "-show_format"]
        if mode == PROBE_FULL:
            command.append("-show_streams")
        command.append(resource)

        try:
            completed = subprocess.run(command, capture_output=True, text=True, timeout=self.timeout)
        except FileNotFoundError:
            logging.error(f"FFProbe.probe: ffprobe binary not found at {self.binary}")
            return {}
        except subprocess.TimeoutExpired:
            logging.warning(f"FFProbe.probe: Timed out after {self.timeout}s probing {resource}")
            return {}

        if completed.returncode != 0:
            logging.info(f"FFProbe.probe: ffprobe exited with {completed.returncode} for {resource}")
            return {}

        try:
            data = json.loads(completed.stdout or "{}")
        except json.JSONDecodeError:
            logging.warning(f"FFProbe.probe: ffprobe returned invalid JSON for {resource}")
            return {}
        return data if isinstance(data, dict) else {}


@dataclass(frozen=True)
class ProbeResult:
    """Metadata read from a video; encoding is "broken", "embed" or "video/<container>"."""
    encoding: str
    resolution: str | None = None
    duration: float | None = None

    @property
    def ok(self) -> bool:
        return self.encoding != ENCODING_BROKEN


def player_support(link_video: str | None) -> bool:
    """Whether a video link can be played directly rather than through an embed page."""
    return not (link_video or "").endswith(".html")


def is_alive(prober: Prober, link_video: str | None) -> bool:
    """Check that a video link still answers with container metadata."""
    if not link_video:
        return False
    return bool(prober.probe(link_video, PROBE_FORMAT))


def probe_video_metadata(prober: Prober, link_video: str | None,
                         max_attempts: int = PROBE_MAX_ATTEMPTS) -> ProbeResult:
    """Read resolution, duration and container of a video

    An empty link is broken and an embed page is classified as embed, neither is probed.
    A probe missing streams or format is inconclusive and retried up to max_attempts in total,
    after which the video is classified as broken.

    Args:
        prober (Prober): Media inspection capability
        link_video (str | None): Video link
        max_attempts (int): Total number of full probes allowed

    Returns:
        ProbeResult: Probe outcome
    """
    if not link_video:
        return ProbeResult(encoding=ENCODING_BROKEN)

    if not player_support(link_video):
        return ProbeResult(encoding=ENCODING_EMBED)

    for attempt in range(1, max_attempts + 1):
        data = prober.probe(link_video, PROBE_FULL)
        if data.get("streams") is not None and data.get("format") is not None:
            return _parse_probe(data)
        logging.debug(f"probe_video_metadata: Inconclusive probe {attempt}/{max_attempts} for {link_video}")

    logging.warning(f"probe_video_metadata: Giving up on {link_video} after {max_attempts} attempts")
    return ProbeResult(encoding=ENCODING_BROKEN)


def _parse_probe(data: dict[str, Any]) -> ProbeResult:
    resolution: str | None = None
    for stream in data.get("streams") or []:
        if stream.get("codec_type") == "video":
            if stream.get("width") and stream.get("height"):
                resolution = f"{stream['width']}x{stream['height']}"
            break

    video_format: dict[str, Any] = data.get("format") or {}
    try:
        duration = float(video_format["duration"])
    except (KeyError, TypeError, ValueError):
        duration = None

    container = str(video_format.get("format_name") or "").split(",")[0]
    return ProbeResult(encoding=f"video/{container}", resolution=resolution, duration=duration)
