from __future__ import annotations

from datetime import UTC, datetime
from typing import Sequence

import pandas as pd

from src.io.export import records_frame
from src.normalize.schema import SENTINEL, HackathonRecord


def history_label(region: str, *, cached: bool) -> str:
    if cached:
        return f"{region} · Cached"
    return region


def results_caption(region: str | None, records: Sequence[HackathonRecord]) -> str:
    if region is None:
        return ""
    if len(records) == 1 and records[0].is_sentinel:
        return f"No verified 2024-2025 programs found for {region}."
    noun = "record" if len(records) == 1 else "records"
    return f"{len(records)} {noun} for {region}"


def results_table(records: Sequence[HackathonRecord]) -> pd.DataFrame:
    frame = records_frame(records)
    frame.index = pd.RangeIndex(start=1, stop=len(frame) + 1)
    return frame


def count_verified_fields(records: Sequence[HackathonRecord]) -> int:
    return sum(1 for record in records for value in record.values() if value != SENTINEL)


def cache_caption(cached_at: datetime | None) -> str:
    if cached_at is None:
        return ""
    return f"Cached result, fetched {cached_at.astimezone(UTC):%Y-%m-%d %H:%M} UTC."
