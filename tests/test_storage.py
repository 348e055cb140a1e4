"""
Unit tests for saved-poem storage.
"""

import sqlite3

import pytest

from core.config import AppConfig
from core.storage import (
    SAVED_POEMS_KEY,
    PostgresStorage,
    SQLiteStorage,
    get_storage,
)


class TestSQLiteStorage:
    """Test the local SQLite backend."""

    def test_empty_on_fresh_database(self, sqlite_storage):
        assert sqlite_storage.load_poems() == []

    def test_init_is_repeatable(self, sqlite_storage):
        sqlite_storage.init()
        assert sqlite_storage.load_poems() == []

    def test_save_then_load_keeps_order(self, sqlite_storage, sample_poem):
        newer = sample_poem.model_copy(update={"text": "newer", "style": "Ode"})
        sqlite_storage.save_poems([newer, sample_poem])

        loaded = sqlite_storage.load_poems()
        assert loaded == [newer, sample_poem]

    def test_save_replaces_list(self, sqlite_storage, sample_poem):
        sqlite_storage.save_poems([sample_poem, sample_poem])
        sqlite_storage.save_poems([sample_poem])
        assert len(sqlite_storage.load_poems()) == 1

    def test_malformed_data(self, sqlite_storage):
        with sqlite3.connect(sqlite_storage.path) as conn:
            conn.execute(
                "INSERT INTO kv_store(key, value) VALUES(?,?)",
                (SAVED_POEMS_KEY, '[{"text": "no other fields"}]'),
            )
        with pytest.raises(ValueError, match="malformed"):
            sqlite_storage.load_poems()

    def test_backend_name(self, sqlite_storage):
        assert sqlite_storage.backend_name().startswith("sqlite:")


class TestGetStorage:
    """Test backend selection."""

    def test_default_is_sqlite(self):
        assert isinstance(get_storage(), SQLiteStorage)

    def test_sqlite_path_from_config(self, tmp_path):
        storage = get_storage(AppConfig(sqlite_path=tmp_path / "poems.db"))
        assert isinstance(storage, SQLiteStorage)
        assert storage.path == tmp_path / "poems.db"

    def test_database_url_selects_postgres(self):
        storage = get_storage(AppConfig(database_url="postgresql://u:p@localhost/poems"))
        assert isinstance(storage, PostgresStorage)
        assert storage.backend_name() == "postgres:DATABASE_URL"
