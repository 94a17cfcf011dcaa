from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import UTC, datetime

from src.ingest.query import StructuredRequest


@dataclass(slots=True)
class RawResult:
    text: str
    model: str
    fetched_at: datetime


class RetrievalClient(ABC):
    @abstractmethod
    def retrieve(self, request: StructuredRequest) -> RawResult:
        """Run one engine call; raise RetrievalError on any failure."""

    @staticmethod
    def utcnow() -> datetime:
        return datetime.now(tz=UTC)
