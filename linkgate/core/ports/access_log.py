"""
Access Log Port Interface.

Protocol-based interface for recording successful link resolutions.
Implementations: SQLite table, structured log line.

Privacy:
- No IP address and no raw User-Agent are part of an entry
- Referers are reduced to their host
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True)
class AccessLogEntry:
    """One successful resolution."""

    slug: str
    matched_key: str
    destination: str
    client_class: str
    recorded_at: datetime
    locale: str | None = None
    referer_host: str | None = None
    diverted: bool = False
    utm: dict[str, str] = field(default_factory=dict)


class AccessLogPort(Protocol):
    """Access log writer."""

    def record(self, entry: AccessLogEntry) -> None:
        """
        Persist an access log entry.

        Implementations may raise; callers wrap them in a best-effort logger.
        """
        ...
