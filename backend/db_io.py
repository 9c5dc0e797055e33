"""Import and export helpers for the application-state document."""
from __future__ import annotations

from datetime import date
from pathlib import Path
import json
import logging
import time
from typing import Any, Dict, List, Tuple

from core import BACKUP_DIR
from backend.errors import InvalidImportError

# Top-level keys an importable document must contain.
REQUIRED_KEYS = ["exercises"]


def make_export_name(day: date | None = None) -> str:
    """Return the export filename, e.g. ``workouts_backup_2024-05-01.json``."""
    return f"workouts_backup_{(day or date.today()).isoformat()}.json"


def export_state_json(document: Dict[str, Any], dest_dir: Path) -> Path:
    """Write ``document`` to ``dest_dir`` as a JSON file.

    Returns the absolute path to the exported file. File-system problems are
    logged and re-raised so the caller can tell the user what went wrong.
    """

    dest = (Path(dest_dir) / make_export_name()).resolve()
    try:
        with dest.open("w", encoding="utf-8") as fh:
            json.dump(document, fh)
    except FileNotFoundError:
        logging.exception("Destination not found for JSON export: %s", dest)
        raise
    except PermissionError:
        logging.exception("Permission denied writing JSON export to %s", dest)
        raise
    except OSError:
        logging.exception("OS error exporting state to %s", dest)
        raise
    logging.info("Exported state JSON to %s", dest)
    return dest


def validate_document(data: Any) -> Tuple[bool, List[str]]:
    """Check that ``data`` has the top-level shape of an exported document.

    Only the top level is inspected; nested records are accepted as they are
    and repaired field by field when the state is loaded.
    """
    errors: List[str] = []
    if not isinstance(data, dict):
        errors.append("document is not a JSON object")
    else:
        for key in REQUIRED_KEYS:
            if data.get(key) is None:
                errors.append(f"missing field: {key}")
    return (len(errors) == 0, errors)


def read_import_file(src_path: Path) -> Dict[str, Any]:
    """Parse and validate ``src_path``; raise :class:`InvalidImportError` if unusable."""

    try:
        with Path(src_path).open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except FileNotFoundError:
        logging.exception("Import failed, file not found")
        raise
    except PermissionError:
        logging.exception("Import failed, permission denied")
        raise
    except ValueError as exc:
        logging.error("Import failed, could not parse %s: %s", src_path, exc)
        raise InvalidImportError("Error parsing file.") from exc

    valid, errors = validate_document(data)
    if not valid:
        logging.error("Import failed validation: %s", "; ".join(errors))
        raise InvalidImportError("Invalid file format.")
    return data


def backup_state(document: Dict[str, Any], backup_dir: Path = BACKUP_DIR) -> Path:
    """Save ``document`` into ``backup_dir`` before it gets replaced."""

    backup_dir = Path(backup_dir)
    backup_dir.mkdir(parents=True, exist_ok=True)
    backup_path = backup_dir / f"state_{int(time.time())}.json.bak"
    with backup_path.open("w", encoding="utf-8") as fh:
        json.dump(document, fh)
    logging.info("Backed up current state to %s", backup_path)
    return backup_path
