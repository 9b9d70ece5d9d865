"""Timestamp ordering and deduplication for contract curves."""

from typing import Iterable

from .models import MarketRecord


def sort_by_time(records: Iterable[MarketRecord]) -> list[MarketRecord]:
    """Stable ascending sort on the feed timestamp."""
    return sorted(records, key=lambda record: record.timestamp)


def dedupe_by_timestamp(records: Iterable[MarketRecord]) -> list[MarketRecord]:
    """
    Drop records whose timestamp was already seen, keeping the first one.

    Relative order of the kept records is preserved, so the result of a
    sorted input is still sorted. Applying it twice changes nothing.
    """
    seen: set[int] = set()
    unique = []
    for record in records:
        if record.timestamp in seen:
            continue
        seen.add(record.timestamp)
        unique.append(record)
    return unique
