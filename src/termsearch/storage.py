from __future__ import annotations
import json
import logging
import os

from .config import SearchSettings

log = logging.getLogger(__name__)


def save_settings(settings: SearchSettings, path: str) -> None:
    """Write settings as JSON (tmp file + atomic replace)."""
    tmp = f"{path}.tmp"
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(settings.validate().to_dict(), f, indent=2, sort_keys=True)
    os.replace(tmp, path)
    log.debug("saved search settings to %s", path)


def load_settings(path: str) -> SearchSettings:
    """Read settings written by save_settings(); a missing file yields the defaults."""
    if not os.path.exists(path):
        log.debug("no settings file at %s, using defaults", path)
        return SearchSettings()
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object of search settings")
    return SearchSettings.from_dict(data)
