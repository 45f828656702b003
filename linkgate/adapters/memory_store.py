"""
In-Memory Link Store Adapter.

Implements LinkStorePort with a plain dict. Used for local development and
tests. Records every read so callers can assert on keys and TTL hints.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class StoreRead:
    """One recorded read."""

    key: str
    cache_ttl: int


class InMemoryLinkStore:
    """Dict-backed link store."""

    def __init__(self, records: dict[str, dict[str, Any]] | None = None) -> None:
        self._records: dict[str, dict[str, Any]] = dict(records or {})
        self.reads: list[StoreRead] = []

    def get(self, key: str, *, cache_ttl: int) -> dict[str, Any] | None:
        self.reads.append(StoreRead(key=key, cache_ttl=cache_ttl))
        value = self._records.get(key)
        return copy.deepcopy(value) if value is not None else None

    def put(self, key: str, value: dict[str, Any]) -> None:
        self._records[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self._records.pop(key, None)

    def clear(self) -> None:
        """Clear all records and recorded reads (for testing)."""
        self._records.clear()
        self.reads.clear()
