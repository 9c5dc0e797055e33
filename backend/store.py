"""Local persistent store for the application-state document.

The store keeps exactly one JSON document in a small key/value table of a
SQLite database.  Every save replaces the whole document; there are no
partial updates.  The public methods are coroutines so callers on the event
loop never block on disk I/O; the SQLite work itself runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sqlite3
from pathlib import Path

from core import DEFAULT_DB_PATH, STATE_KEY
from backend.errors import StoreUnavailableError

_SCHEMA = """
CREATE TABLE IF NOT EXISTS app_state (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
)
"""


class LocalStore:
    """Async load/save/clear of a single state document."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH, key: str = STATE_KEY) -> None:
        self.db_path = Path(db_path)
        self.key = key

    # ------------------------------------------------------------------
    # Blocking helpers, executed via ``asyncio.to_thread``
    # ------------------------------------------------------------------
    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.db_path))
        conn.execute(_SCHEMA)
        return conn

    def _load_sync(self) -> dict | None:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT value FROM app_state WHERE key = ?", (self.key,)
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            return None
        return json.loads(row[0])

    def _save_sync(self, payload: str) -> None:
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    "INSERT OR REPLACE INTO app_state (key, value) VALUES (?, ?)",
                    (self.key, payload),
                )
        finally:
            conn.close()

    def _clear_sync(self) -> None:
        conn = self._connect()
        try:
            with conn:
                conn.execute("DELETE FROM app_state")
        finally:
            conn.close()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    async def load(self) -> dict | None:
        """Return the stored document or ``None`` if nothing was saved yet."""

        try:
            return await asyncio.to_thread(self._load_sync)
        except (sqlite3.Error, OSError, ValueError) as exc:
            logging.exception("Loading state from %s failed", self.db_path)
            raise StoreUnavailableError(str(exc)) from exc

    async def save(self, document: dict | str) -> None:
        """Replace the stored document with ``document``.

        ``document`` may be a mapping or an already serialised JSON string;
        callers that snapshot state before scheduling a write pass the string.
        """

        payload = document if isinstance(document, str) else json.dumps(document)
        try:
            await asyncio.to_thread(self._save_sync, payload)
        except (sqlite3.Error, OSError) as exc:
            logging.exception("Saving state to %s failed", self.db_path)
            raise StoreUnavailableError(str(exc)) from exc

    async def clear(self) -> None:
        """Remove everything from the store."""

        try:
            await asyncio.to_thread(self._clear_sync)
        except (sqlite3.Error, OSError) as exc:
            logging.exception("Clearing state in %s failed", self.db_path)
            raise StoreUnavailableError(str(exc)) from exc
        logging.info("Cleared stored state in %s", self.db_path)
