from __future__ import annotations

import json
import logging

from src.ingest.base import RawResult
from src.normalize.schema import HackathonRecord, sentinel_record

logger = logging.getLogger(__name__)


def parse_records(text: str | None) -> list[HackathonRecord]:
    if not text or not text.strip():
        return []
    try:
        loaded = json.loads(text)
    except (ValueError, RecursionError):
        logger.warning("Engine output is not valid JSON; using fallback record.")
        return []
    if not isinstance(loaded, list):
        logger.warning("Engine output is %s, expected a JSON array.", type(loaded).__name__)
        return []
    return [HackathonRecord.from_mapping(item) for item in loaded if isinstance(item, dict)]


def validate(raw: RawResult | str | None) -> list[HackathonRecord]:
    """Parse engine output into records, never returning an empty list.

    Phone and email formatting is requested from the engine and passed
    through as returned.
    """

    text = raw.text if isinstance(raw, RawResult) else raw
    records = parse_records(text)
    if not records:
        return [sentinel_record()]
    return records
