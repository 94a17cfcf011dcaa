from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Callable, Iterable

from src.normalize.schema import HackathonRecord


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True, slots=True)
class CacheEntry:
    records: tuple[HackathonRecord, ...]
    cached_at: datetime


class ResultCache:
    """Session cache of validated record sets keyed by normalized region.

    Entries live as long as the cache object; there is no eviction.
    """

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> list[HackathonRecord] | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        return list(entry.records)

    def get_entry(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    def put(self, key: str, records: Iterable[HackathonRecord]) -> None:
        self._entries[key] = CacheEntry(records=tuple(records), cached_at=self._clock())
