from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
import time

# Rest between sets when neither the template nor the catalog provides one
DEFAULT_REST_DURATION = 90

# Length of a newly created program in weeks
DEFAULT_WEEKS = 4

# Default path to the local state database
DEFAULT_DB_PATH = Path(__file__).resolve().parent / "data" / "fitness.db"

# Directory holding copies of the state taken before an import replaces it
BACKUP_DIR = Path(__file__).resolve().parent / "data" / "backups"

# Key of the single application-state document inside the store
STATE_KEY = "currentState"

# Keystroke-driven saves are coalesced into at most one write per interval
SAVE_DEBOUNCE_SECONDS = 1.0

QUICK_WORKOUT_NAME = "Quick Workout"
UNKNOWN_EXERCISE_NAME = "Unknown Exercise"
DEFAULT_CATEGORY = "Other"
DEFAULT_WEIGHT_UNIT = "lbs"
WEIGHT_UNITS = ("lbs", "kg")


def now_ms() -> int:
    """Return the current wall-clock time in whole milliseconds."""

    return int(time.time() * 1000)


def iso_now() -> str:
    """Return the current UTC time as an ISO-8601 string ending in ``Z``."""

    stamp = datetime.fromtimestamp(time.time(), tz=timezone.utc)
    return stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp, returning ``None`` when unreadable.

    Naive values are treated as UTC.
    """

    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def new_id(existing: set[int] | None = None) -> int:
    """Return a timestamp based id that does not collide with ``existing``."""

    candidate = now_ms()
    if existing:
        while candidate in existing:
            candidate += 1
    return candidate


__all__ = [
    "DEFAULT_REST_DURATION",
    "DEFAULT_WEEKS",
    "DEFAULT_DB_PATH",
    "BACKUP_DIR",
    "STATE_KEY",
    "SAVE_DEBOUNCE_SECONDS",
    "QUICK_WORKOUT_NAME",
    "UNKNOWN_EXERCISE_NAME",
    "DEFAULT_CATEGORY",
    "DEFAULT_WEIGHT_UNIT",
    "WEIGHT_UNITS",
    "now_ms",
    "iso_now",
    "parse_iso",
    "new_id",
]
