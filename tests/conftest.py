"""
Pytest fixtures for the companion tests.
"""

import pytest

from wazir.config.game_config import GameConfig
from wazir.session import GameSession
from wazir.storage import GameStorage, MemoryStore, JsonFileStore


@pytest.fixture
def memory_store():
    """Empty in-memory key-value store."""
    return MemoryStore()


@pytest.fixture
def storage(memory_store):
    """Game storage backed by memory."""
    return GameStorage(memory_store)


@pytest.fixture
def file_storage(tmp_path):
    """Game storage backed by JSON files in a temp directory."""
    return GameStorage(JsonFileStore(str(tmp_path / "data")))


@pytest.fixture
def game_config(tmp_path):
    """Test app configuration."""
    return GameConfig(data_dir=str(tmp_path / "data"), log_level="DEBUG")


@pytest.fixture
def session(storage):
    """Player 4 of a fresh four-player room GAME123."""
    return GameSession.join(storage, "GAME123", 4, 4, display_name="Asha")


class FailingStore:
    """Store whose disk is always unavailable."""

    def get(self, key):
        raise OSError("storage unavailable")

    def set(self, key, value):
        raise OSError("storage unavailable")

    def delete(self, key):
        raise OSError("storage unavailable")


@pytest.fixture
def failing_storage():
    return GameStorage(FailingStore())


class RecordingStore(MemoryStore):
    """In-memory store that remembers which keys were written."""

    def __init__(self):
        super().__init__()
        self.writes = []

    def set(self, key, value):
        self.writes.append(key)
        super().set(key, value)


@pytest.fixture
def recording_store():
    return RecordingStore()
