from __future__ import annotations

import json
from pathlib import Path

from src.io.history import HISTORY_KEY, HistoryManager, JsonFileStore, MemoryStore


def test_record_prepends_new_and_ignores_repeats() -> None:
    history = HistoryManager(MemoryStore())

    for region in ["A", "B", "A", "C"]:
        history.record(region)

    assert history.entries == ["C", "B", "A"]


def test_record_is_case_sensitive() -> None:
    history = HistoryManager(MemoryStore())

    assert history.record("Pune") is True
    assert history.record("pune") is True
    assert history.record("Pune") is False
    assert history.entries == ["pune", "Pune"]


def test_history_is_capped_at_ten_most_recent() -> None:
    history = HistoryManager(MemoryStore())
    regions = [f"Region {index}" for index in range(11)]

    for region in regions:
        history.record(region)

    assert len(history.entries) == 10
    assert history.entries == list(reversed(regions))[:10]
    assert "Region 0" not in history.entries


def test_every_change_is_persisted_and_rehydrated() -> None:
    store = MemoryStore()
    history = HistoryManager(store)
    history.record("Goa")
    history.record("Pune")

    assert json.loads(store.get(HISTORY_KEY) or "[]") == ["Pune", "Goa"]

    restored = HistoryManager(store)
    assert restored.load() == ["Pune", "Goa"]


def test_repeat_does_not_write_to_store() -> None:
    class _CountingStore(MemoryStore):
        writes = 0

        def set(self, key: str, value: str) -> None:
            type(self).writes += 1
            super().set(key, value)

    store = _CountingStore()
    history = HistoryManager(store)
    history.record("Goa")
    history.record("Goa")

    assert _CountingStore.writes == 1


def test_load_discards_corrupt_payloads() -> None:
    assert HistoryManager(MemoryStore({HISTORY_KEY: "{not json"})).load() == []
    assert HistoryManager(MemoryStore({HISTORY_KEY: '{"a": 1}'})).load() == []
    assert HistoryManager(MemoryStore({HISTORY_KEY: '["Goa", 3, "Pune"]'})).load() == ["Goa", "Pune"]
    assert HistoryManager(MemoryStore()).load() == []


def test_json_file_store_survives_restart(tmp_path: Path) -> None:
    path = tmp_path / "state" / "history.json"
    history = HistoryManager(JsonFileStore(path))
    history.load()
    history.record("Bangalore")
    history.record("Hyderabad")

    assert path.exists()
    assert list(path.parent.glob("*.tmp")) == []

    restored = HistoryManager(JsonFileStore(path))
    assert restored.load() == ["Hyderabad", "Bangalore"]


def test_json_file_store_keeps_other_keys(tmp_path: Path) -> None:
    store = JsonFileStore(tmp_path / "store.json")
    store.set("other", "value")
    store.set(HISTORY_KEY, "[]")

    assert store.get("other") == "value"
    assert store.get(HISTORY_KEY) == "[]"
    assert store.get("missing") is None
