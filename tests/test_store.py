import asyncio
import sqlite3

import pytest

from backend.errors import StoreUnavailableError
from backend.store import LocalStore


def test_load_empty_store(tmp_path):
    store = LocalStore(tmp_path / "state.db")
    assert asyncio.run(store.load()) is None


def test_save_replaces_whole_document(tmp_path):
    store = LocalStore(tmp_path / "nested" / "state.db")
    asyncio.run(store.save({"exercises": [], "currentWeek": 2}))
    asyncio.run(store.save('{"exercises": [{"id": 1}]}'))

    assert asyncio.run(store.load()) == {"exercises": [{"id": 1}]}

    conn = sqlite3.connect(tmp_path / "nested" / "state.db")
    rows = conn.execute("SELECT key FROM app_state").fetchall()
    conn.close()
    assert rows == [("currentState",)]


def test_clear(tmp_path):
    store = LocalStore(tmp_path / "state.db")
    asyncio.run(store.save({"exercises": []}))
    asyncio.run(store.clear())
    assert asyncio.run(store.load()) is None


def test_unreadable_database_raises(tmp_path):
    path = tmp_path / "state.db"
    path.write_text("this is not a database")
    store = LocalStore(path)
    with pytest.raises(StoreUnavailableError):
        asyncio.run(store.load())
    with pytest.raises(StoreUnavailableError):
        asyncio.run(store.save({"exercises": []}))


def test_corrupt_document_raises(tmp_path):
    path = tmp_path / "state.db"
    store = LocalStore(path)
    asyncio.run(store.save("{not json"))
    with pytest.raises(StoreUnavailableError):
        asyncio.run(store.load())
