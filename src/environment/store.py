"""
Small persisted records.

Games only need an opaque key-value store for a few values such as the
best completion time per level. MemoryStore keeps them for the lifetime of
the process; JsonFileStore keeps them in a JSON file on disk.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Protocol


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, value: Any) -> None:
        ...


class MemoryStore:
    """Dict-backed store."""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self.data: Dict[str, Any] = dict(data or {})

    def get(self, key: str) -> Optional[Any]:
        return self.data.get(key)

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value


class JsonFileStore:
    """
    Store backed by a JSON object in a file.

    A missing file is treated as an empty store. Every set() rewrites the
    whole file through a temporary file so a crash never leaves it half
    written.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.data: Dict[str, Any] = self._load()

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}

        with open(self.path) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Corrupt store file {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Store file {self.path} must contain a JSON object")
        return data

    def get(self, key: str) -> Optional[Any]:
        return self.data.get(key)

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)

        tmp = tempfile.NamedTemporaryFile(
            'w', dir=self.path.parent, prefix=f".{self.path.name}.", delete=False
        )
        try:
            with tmp:
                json.dump(self.data, tmp, indent=2)
            os.replace(tmp.name, self.path)
        except BaseException:
            if os.path.exists(tmp.name):
                os.unlink(tmp.name)
            raise


def best_time_key(game: str, level: str) -> str:
    """Key under which the best time for a game level is stored."""
    return f"{game}:best_time:{level}"


class BestTimes:
    """Best completion time (milliseconds) per level of one game."""

    def __init__(self, store: KeyValueStore, game: str = "wordsearch"):
        self.store = store
        self.game = game

    def get(self, level: str) -> Optional[int]:
        value = self.store.get(best_time_key(self.game, level))
        return int(value) if value is not None else None

    def record(self, level: str, elapsed_ms: int) -> bool:
        """
        Store elapsed_ms if it beats the current best.

        Returns:
            True if a new record was written
        """
        best = self.get(level)
        if best is not None and best <= elapsed_ms:
            return False

        self.store.set(best_time_key(self.game, level), int(elapsed_ms))
        return True
