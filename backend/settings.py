"""Device settings kept outside the application-state document.

These values belong to the installation rather than to the user's training
data, so they survive a reset or an import.  The settings are stored as a
list of dictionaries to preserve order; each dictionary contains ``key``,
``value`` and ``type`` entries.
"""

from __future__ import annotations

from pathlib import Path
import json
import logging
from typing import Any, List, Dict

from core import SAVE_DEBOUNCE_SECONDS

# Path to the JSON file where settings are persisted.
SETTINGS_PATH = Path(__file__).resolve().parents[1] / "data" / "settings.json"

# Default settings to initialize the file on first run.
DEFAULT_SETTINGS: List[Dict[str, Any]] = [
    {"key": "sound_on", "value": True, "type": "bool"},
    {"key": "sound_level", "value": 1.0, "type": "slider"},
    {"key": "save_debounce_seconds", "value": SAVE_DEBOUNCE_SECONDS, "type": "float"},
]

# Internal cache so settings are only read from disk once.
_settings_cache: List[Dict[str, Any]] | None = None


def load_settings() -> List[Dict[str, Any]]:
    """Load settings from :data:`SETTINGS_PATH` or create defaults.

    Keys missing from an older file are filled from :data:`DEFAULT_SETTINGS`.
    """
    if SETTINGS_PATH.exists():
        try:
            with SETTINGS_PATH.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError):
            logging.warning("Unreadable settings file %s; using defaults", SETTINGS_PATH)
        else:
            if isinstance(data, list):
                known = {item.get("key") for item in data if isinstance(item, dict)}
                data = [item for item in data if isinstance(item, dict)]
                data.extend(dict(d) for d in DEFAULT_SETTINGS if d["key"] not in known)
                return data
    settings = [dict(d) for d in DEFAULT_SETTINGS]
    save_settings(settings)
    return settings


def save_settings(settings: List[Dict[str, Any]]) -> None:
    """Persist ``settings`` to :data:`SETTINGS_PATH`."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    with SETTINGS_PATH.open("w", encoding="utf-8") as fh:
        json.dump(settings, fh)


def get_settings() -> List[Dict[str, Any]]:
    """Return the cached settings list, loading from disk if needed."""
    global _settings_cache
    if _settings_cache is None:
        _settings_cache = load_settings()
    return _settings_cache


def clear_cache() -> None:
    """Forget cached settings so the next access re-reads the file."""
    global _settings_cache
    _settings_cache = None


def get_value(key: str, default: Any = None) -> Any:
    """Fetch the value associated with ``key``."""
    for item in get_settings():
        if item.get("key") == key:
            return item.get("value")
    return default


def set_value(key: str, value: Any) -> None:
    """Update ``key`` with ``value`` and persist the change."""
    settings = get_settings()
    for item in settings:
        if item.get("key") == key:
            item["value"] = value
            break
    else:
        settings.append({"key": key, "value": value, "type": type(value).__name__})
    save_settings(settings)
