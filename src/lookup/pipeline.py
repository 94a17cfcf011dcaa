from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime

from src.config import Settings
from src.ingest.base import RetrievalClient
from src.ingest.errors import LookupInProgressError, RetrievalError
from src.ingest.http import GeminiClient
from src.ingest.query import DEFAULT_MODEL, build_request
from src.ingest.validate import validate
from src.io.cache import ResultCache
from src.io.history import HistoryManager, JsonFileStore
from src.normalize.region import display_region, normalize_region
from src.normalize.schema import HackathonRecord

FAILURE_MESSAGE = (
    "High-speed lookup failed. No verified 2024-2025 events found for this specific district."
)
IN_PROGRESS_MESSAGE = "A lookup is already running. Wait for it to finish before starting another."
logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PipelineState:
    input_text: str = ""
    loading: bool = False
    viewing_region: str | None = None
    records: list[HackathonRecord] = field(default_factory=list)
    error: str | None = None


class LookupPipeline:
    """Region lookup entry point for one user session.

    State and the in-flight guard belong to this object; the cache, history and
    client may be shared with other sessions.
    """

    def __init__(
        self,
        client: RetrievalClient,
        *,
        cache: ResultCache | None = None,
        history: HistoryManager,
        model: str = DEFAULT_MODEL,
    ) -> None:
        self.client = client
        self.cache = cache if cache is not None else ResultCache()
        self.history = history
        self.model = model
        self.state = PipelineState()
        self._in_flight = threading.Lock()

    @property
    def history_entries(self) -> list[str]:
        return self.history.entries

    def is_cached(self, region: str) -> bool:
        return normalize_region(region) in self.cache

    def cached_at(self, region: str) -> datetime | None:
        entry = self.cache.get_entry(normalize_region(region))
        return entry.cached_at if entry is not None else None

    def lookup(self, region: str) -> PipelineState:
        if not region.strip():
            return self.state

        try:
            self._begin()
        except LookupInProgressError as exc:
            logger.warning("Rejected lookup for %r while another lookup is pending.", region)
            self.state.error = str(exc)
            return self.state
        try:
            self._run(region)
        finally:
            self._in_flight.release()
        return self.state

    def _run(self, region: str) -> None:
        key = normalize_region(region)
        display = display_region(region)
        self.state.input_text = region

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for region=%s", key)
            self.state.records = cached
            self.state.viewing_region = display
            self.state.error = None
            return

        logger.info("Cache miss for region=%s; querying retrieval engine.", key)
        self.state.loading = True
        self.state.error = None
        try:
            raw = self.client.retrieve(build_request(display, model=self.model))
            records = validate(raw)
        except RetrievalError:
            logger.exception("Lookup failed for region=%s", display)
            self.state.error = FAILURE_MESSAGE
            return
        finally:
            self.state.loading = False

        self.cache.put(key, records)
        self.state.records = list(records)
        self.state.viewing_region = display
        self.history.record(display)
        logger.info("Lookup for region=%s returned %d record(s).", display, len(records))

    def _begin(self) -> None:
        if not self._in_flight.acquire(blocking=False):
            raise LookupInProgressError(IN_PROGRESS_MESSAGE)


@dataclass(slots=True)
class SharedResources:
    """Process-wide collaborators reused by every session's pipeline."""

    client: RetrievalClient
    cache: ResultCache
    history: HistoryManager
    model: str = DEFAULT_MODEL


def build_resources(settings: Settings) -> SharedResources:
    history = HistoryManager(JsonFileStore(settings.history_path))
    history.load()
    client = GeminiClient(api_key=settings.api_key, timeout_seconds=settings.timeout_seconds)
    return SharedResources(client=client, cache=ResultCache(), history=history, model=settings.model)


def build_pipeline(resources: SharedResources) -> LookupPipeline:
    return LookupPipeline(
        resources.client,
        cache=resources.cache,
        history=resources.history,
        model=resources.model,
    )
