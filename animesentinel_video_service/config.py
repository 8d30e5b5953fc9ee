"""Configuration settings for the video service."""
import json
import os
from pathlib import Path
from typing import Any

_local_settings: dict[str, Any] = {}
_settings_path = Path(__file__).resolve().parent.parent / "local.settings.json"
if _settings_path.exists():
    with open(_settings_path, encoding="utf-8") as f:
        _local_settings = json.load(f).get("Values", {})


def _get_setting(name: str, required: bool = False, default: Any = None) -> Any:
    """Get a setting from the environment, falling back to local.settings.json

    Args:
        name (str): Setting name
        required (bool): Raise if the setting is missing. Defaults to False.
        default (Any): Value used for a missing, non-required setting

    Returns:
        Any: Setting value
    """
    value = os.getenv(name)
    if value is None:
        value = _local_settings.get(name)
    if value is None:
        if required:
            raise ValueError(f"Missing required setting: '{name}'")
        return default
    return value


SQLALCHEMY_CONNECTION_STRING: str | None = _get_setting("SQLALCHEMY_CONNECTION_STRING")

STORAGE_CONNECTION_SETTING_NAME: str = "AzureWebJobsStorage"
STORAGE_CONNECTION_STRING: str | None = _get_setting(STORAGE_CONNECTION_SETTING_NAME)

REFRESH_QUEUE: str = _get_setting("REFRESH_QUEUE", default="refresh-video-link")
REPROCESS_QUEUE: str = _get_setting("REPROCESS_QUEUE", default="reprocess-episodes")

FFPROBE_PATH: str = _get_setting("FFPROBE_PATH", default="ffprobe")
PROBE_TIMEOUT_SECONDS: float = float(_get_setting("PROBE_TIMEOUT_SECONDS", default=30))
PROBE_MAX_ATTEMPTS: int = int(_get_setting("PROBE_MAX_ATTEMPTS", default=9))
LINK_RESOLVER_TIMEOUT_SECONDS: float = float(_get_setting("LINK_RESOLVER_TIMEOUT_SECONDS", default=15))

SITE_BASE_URL: str = _get_setting("SITE_BASE_URL", default="")
