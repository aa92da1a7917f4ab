from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence

from logger_config import setup_logger

logger = setup_logger(__name__)

# Bump the suffix if the record shape ever changes incompatibly.
STORAGE_KEY = "itinerary.trips.v1"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """Keeps values for the lifetime of the process only."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class FileStore:
    """
    One file per key under `directory` (created on first write).

    Writes land in a temp file next to the target and are swapped in with
    os.replace, so a reader sees either the old value or the new one.
    """

    def __init__(self, directory: os.PathLike | str) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp_name, self.path_for(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def save_trips(store: KeyValueStore, trips: Sequence[Any], key: str = STORAGE_KEY) -> bool:
    """
    Write the whole trip list under `key`.

    Never raises: on failure the caller keeps its in-memory list and we
    return False.
    """
    try:
        store.set(key, json.dumps(list(trips)))
    except (OSError, TypeError, ValueError) as e:
        logger.warning("Failed to save trips to %r: %s", key, e)
        return False
    return True


def load_trips(store: KeyValueStore, key: str = STORAGE_KEY) -> Optional[List[Any]]:
    """
    Read the trip list stored under `key`.

    Returns None when there is nothing usable: key missing, unreadable,
    not JSON, or JSON whose top level isn't a list. Individual records are
    passed through untouched.
    """
    try:
        raw = store.get(key)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to load trips from %r: %s", key, e)
        return None

    if not raw:
        return None

    try:
        parsed = json.loads(raw)
    except (ValueError, RecursionError) as e:
        logger.warning("Failed to load trips from %r: %s", key, e)
        return None

    if not isinstance(parsed, list):
        logger.warning(
            "Ignoring stored trips under %r: expected a list, got %s",
            key,
            type(parsed).__name__,
        )
        return None

    return parsed
