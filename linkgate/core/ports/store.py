"""
Link Store Port Interface.

Protocol-based interface for the shared key-value store that holds link
records. Implementations: in-memory (dev/tests), SQLite (local runs).

The store owns TTL caching. Callers pass a cache TTL hint on every read and
accept that a read may be up to that many seconds stale.

Invariants:
- Reads never return partially decoded data: a value is a dict or None
- Backend failures surface as LinkStoreError, never as a missing key
"""

from __future__ import annotations

from typing import Any, Protocol


class LinkStorePort(Protocol):
    """Read side of the link key-value store."""

    def get(self, key: str, *, cache_ttl: int) -> dict[str, Any] | None:
        """
        Read the JSON value stored under key.

        Args:
            key: Namespaced store key, e.g. "link:promo"
            cache_ttl: Seconds the backend may serve this read from cache

        Returns:
            Decoded JSON object, or None if the key is absent

        Raises:
            LinkStoreError: If the backend cannot be read
        """
        ...


class LinkStoreError(Exception):
    """Base class for link store failures."""


class LinkStoreUnavailableError(LinkStoreError):
    """Raised when the backend cannot be reached or queried."""

    def __init__(self, key: str, cause: Exception | None = None) -> None:
        self.key = key
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Link store unavailable while reading {key!r}{detail}")


class LinkStoreDecodeError(LinkStoreError):
    """Raised when a stored value is not a JSON object."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Stored value for {key!r} is not a JSON object")
