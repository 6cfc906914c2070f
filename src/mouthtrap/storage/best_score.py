from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Protocol

from mouthtrap.core.exceptions import StorageError

logger = logging.getLogger(__name__)

DEFAULT_KEY = "mouth_trap_best"


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """In-process store, used when nothing should touch the disk."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """
    String key/value pairs kept in a single JSON object on disk.

    A missing, unreadable or corrupt file reads as empty. Writes replace
    the whole file atomically and raise StorageError on failure.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable store {self._path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring store {self._path}: top level is not an object")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value

        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            try:
                if tmp.exists():
                    tmp.unlink()
            except OSError:
                pass
            raise StorageError(f"Failed to write {key} to {self._path}: {e}") from e


class BestScoreRepository:
    """Reads and writes the best score as a string-encoded integer under a fixed key."""

    def __init__(self, store: KeyValueStore, *, key: str = DEFAULT_KEY) -> None:
        self._store = store
        self._key = key

    def load(self) -> int:
        """Return the stored best score, or 0 if it is absent or not a non-negative integer."""
        raw = self._store.get(self._key)
        if raw is None:
            return 0
        try:
            value = int(raw.strip())
        except ValueError:
            logger.warning(f"Invalid best score {raw!r}, starting from 0")
            return 0
        return value if value >= 0 else 0

    def save(self, score: int) -> None:
        self._store.set(self._key, str(int(score)))
