from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from core.config import AppConfig, DEFAULT_SQLITE_PATH
from core.logging_setup import setup_logger
from verse.schemas import Poem

SAVED_POEMS_KEY = "savedPoems"

_POEM_LIST = TypeAdapter(List[Poem])

# --------- Public API (what app.py uses) ---------


class Storage:
    def init(self) -> None: ...
    def backend_name(self) -> str: ...

    def load_poems(self) -> List[Poem]: ...

    def save_poems(self, poems: Sequence[Poem]) -> None: ...


def get_storage(cfg: Optional[AppConfig] = None) -> Storage:
    if cfg is not None and cfg.database_url:
        return PostgresStorage(cfg.database_url)
    return SQLiteStorage(cfg.sqlite_path if cfg is not None else DEFAULT_SQLITE_PATH)


def _encode(poems: Sequence[Poem]) -> str:
    return _POEM_LIST.dump_json(list(poems)).decode("utf-8")


def _decode(raw: Optional[str]) -> List[Poem]:
    if raw is None:
        return []
    try:
        return _POEM_LIST.validate_json(raw)
    except ValidationError as e:
        raise ValueError(f"Stored '{SAVED_POEMS_KEY}' is malformed: {e}") from e


# --------- SQLite implementation (local fallback) ---------


@dataclass
class SQLiteStorage(Storage):
    path: Path

    def _connect(self) -> sqlite3.Connection:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    def backend_name(self) -> str:
        return f"sqlite:{self.path}"

    def init(self) -> None:
        logger = setup_logger()
        with self._connect() as conn:
            conn.execute(
                """
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT DEFAULT (datetime('now'))
            );
            """
            )
        logger.info(f"Storage initialized ({self.backend_name()})")

    def load_poems(self) -> List[Poem]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key=?",
                (SAVED_POEMS_KEY,),
            ).fetchone()
        return _decode(row["value"] if row else None)

    def save_poems(self, poems: Sequence[Poem]) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO kv_store(key, value) VALUES(?,?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=datetime('now')
                """,
                (SAVED_POEMS_KEY, _encode(poems)),
            )


# --------- Postgres implementation ---------


@dataclass
class PostgresStorage(Storage):
    database_url: str

    def backend_name(self) -> str:
        return "postgres:DATABASE_URL"

    def _connect(self):
        try:
            import psycopg
        except ImportError as e:
            raise RuntimeError(
                "DATABASE_URL is set but psycopg is not installed. Install the 'postgres' extra."
            ) from e
        return psycopg.connect(self.database_url)

    def init(self) -> None:
        logger = setup_logger()
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMPTZ DEFAULT now()
                );
                """
                )
            conn.commit()
        logger.info(f"Storage initialized ({self.backend_name()})")

    def load_poems(self) -> List[Poem]:
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT value FROM kv_store WHERE key=%s",
                    (SAVED_POEMS_KEY,),
                )
                row = cur.fetchone()
        return _decode(row[0] if row else None)

    def save_poems(self, poems: Sequence[Poem]) -> None:
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO kv_store(key, value) VALUES(%s,%s)
                    ON CONFLICT (key) DO UPDATE SET value=EXCLUDED.value, updated_at=now()
                    """,
                    (SAVED_POEMS_KEY, _encode(poems)),
                )
            conn.commit()
