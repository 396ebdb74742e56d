"""
Key-value stores used to persist scoreboards and settings.
"""

from pathlib import Path
from threading import Lock
from typing import Dict, Optional, Protocol
from urllib.parse import quote


class KeyValueStore(Protocol):
    """Minimal string store the game data is written through."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class MemoryStore:
    """Store that lives only as long as the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self):
        return list(self._data.keys())


class JsonFileStore:
    """Stores each key as a JSON file inside a data directory."""

    def __init__(self, data_dir: str = "data"):
        self.data_dir = Path(data_dir).expanduser()
        self._lock = Lock()

    def _path_for(self, key: str) -> Path:
        # Room codes are free text; keep them from escaping the directory.
        return self.data_dir / f"{quote(key, safe='')}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        with self._lock:
            if not path.exists():
                return None
            with open(path, 'r', encoding='utf-8') as f:
                return f.read()

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        with self._lock:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                f.write(value)

    def delete(self, key: str) -> None:
        path = self._path_for(key)
        with self._lock:
            if path.exists():
                path.unlink()
