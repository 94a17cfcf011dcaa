from __future__ import annotations


def display_region(value: str) -> str:
    """Trimmed region text with its original casing, used for display and history."""

    return value.strip()


def normalize_region(value: str) -> str:
    """Canonical cache key for a region: trimmed and lowercased."""

    return value.strip().lower()
