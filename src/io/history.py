from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Protocol
from uuid import uuid4

HISTORY_KEY = "dhf_watchlist"
HISTORY_LIMIT = 10
logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileStore:
    """String key-value store kept as a single JSON object on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except ValueError:
            logger.warning("Ignoring unreadable store file at %s", self.path)
            return {}
        if not isinstance(payload, dict):
            return {}
        return {str(key): str(value) for key, value in payload.items()}

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        payload = self._read_all()
        payload[key] = value
        write_json_atomic(payload, self.path)


def write_json_atomic(payload: dict[str, str], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = output_path.parent / f"{output_path.name}.{uuid4().hex}.tmp"
    try:
        temp_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        temp_path.replace(output_path)
    finally:
        if temp_path.exists():
            temp_path.unlink()


class HistoryManager:
    """Most-recent-first list of looked-up regions, persisted after each change.

    A region already present keeps its position; new regions go to the front
    and the list is cut to ``limit`` entries.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        key: str = HISTORY_KEY,
        limit: int = HISTORY_LIMIT,
    ) -> None:
        if limit <= 0:
            raise ValueError("History limit must be positive.")
        self._store = store
        self._key = key
        self._limit = limit
        self._entries: list[str] = []
        self._lock = threading.Lock()

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    def load(self) -> list[str]:
        raw = self._store.get(self._key)
        self._entries = _decode_history(raw)[: self._limit]
        return self.entries

    def save(self, entries: list[str]) -> None:
        self._store.set(self._key, json.dumps(entries))

    def record(self, region: str) -> bool:
        with self._lock:
            if region in self._entries:
                return False
            updated = [region, *self._entries][: self._limit]
            self._entries = updated
            self.save(updated)
            return True


def _decode_history(raw: str | None) -> list[str]:
    if not raw:
        return []
    try:
        loaded = json.loads(raw)
    except ValueError:
        logger.warning("Discarding corrupt history payload.")
        return []
    if not isinstance(loaded, list):
        logger.warning("Discarding history payload of type %s.", type(loaded).__name__)
        return []
    return [item for item in loaded if isinstance(item, str)]
