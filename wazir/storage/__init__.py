"""
Persistence for scoreboards, room state and player settings.
"""

from .backends import KeyValueStore, MemoryStore, JsonFileStore
from .room_store import GameStorage, RoomState, PlayerIdentity, ImportResult

__all__ = [
    'KeyValueStore',
    'MemoryStore',
    'JsonFileStore',
    'GameStorage',
    'RoomState',
    'PlayerIdentity',
    'ImportResult',
]
