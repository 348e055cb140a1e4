"""
Pytest configuration and fixtures.
"""

from datetime import datetime, timezone

import pytest

from core import prompt_loader
from core.storage import SQLiteStorage
from verse.schemas import Poem

HAIKU = "An old silent pond\nA frog jumps into the pond\nsplash! Silence again."


class FailingStorage:
    """Storage double whose every call fails with a non-transient error."""

    def __init__(self):
        self.calls = 0

    def init(self):
        pass

    def backend_name(self):
        return "failing"

    def load_poems(self):
        self.calls += 1
        raise RuntimeError("disk full")

    def save_poems(self, poems):
        self.calls += 1
        raise RuntimeError("disk full")


@pytest.fixture
def sqlite_storage(tmp_path):
    """Initialized SQLite storage in a temporary directory."""
    storage = SQLiteStorage(tmp_path / "data" / "app.db")
    storage.init()
    return storage


@pytest.fixture
def failing_storage():
    return FailingStorage()


@pytest.fixture
def fixed_now():
    return datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


@pytest.fixture
def sample_poem(fixed_now):
    return Poem(
        text=HAIKU,
        style="Haiku",
        prompt="Write a haiku about nature.",
        doom=0,
        date=fixed_now,
    )


@pytest.fixture(autouse=True)
def fresh_catalog_cache():
    prompt_loader.clear_cache()
    yield
    prompt_loader.clear_cache()
