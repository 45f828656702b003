"""
AccessLogger - best-effort recording of successful resolutions.

Key behaviors:
- record() never raises and returns nothing
- Writer failures are logged with a traceback and dropped
- Entries carry no IP address and no raw User-Agent
- Only UTM parameters are copied from the request query
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from urllib.parse import urlsplit

from linkgate.core.ports.access_log import AccessLogEntry, AccessLogPort

logger = logging.getLogger(__name__)

UTM_PARAMS = frozenset(
    {
        "utm_source",
        "utm_medium",
        "utm_campaign",
        "utm_content",
        "utm_term",
    }
)


# --- Entry Helpers ---


def referer_host(referer: str | None) -> str | None:
    """Reduce a Referer header to its host."""
    if not referer:
        return None
    host = urlsplit(referer).hostname
    return host or None


def extract_utm(query: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Keep the first value of each UTM parameter."""
    utm: dict[str, str] = {}
    for key, value in query:
        name = key.lower()
        if name in UTM_PARAMS and name not in utm:
            utm[name] = value
    return utm


def build_entry(
    *,
    slug: str,
    matched_key: str,
    destination: str,
    client_class: str,
    locale: str | None = None,
    referer: str | None = None,
    query: Iterable[tuple[str, str]] = (),
    diverted: bool = False,
    now: datetime | None = None,
) -> AccessLogEntry:
    """Build a privacy-safe access log entry."""
    return AccessLogEntry(
        slug=slug,
        matched_key=matched_key,
        destination=destination,
        client_class=client_class,
        recorded_at=now or datetime.now(UTC),
        locale=locale,
        referer_host=referer_host(referer),
        diverted=diverted,
        utm=extract_utm(query),
    )


# --- Writers ---


class NullAccessLog:
    """Access log writer used when logging is disabled."""

    def record(self, entry: AccessLogEntry) -> None:
        return None


class BestEffortAccessLogger:
    """
    Wraps an AccessLogPort so that it never blocks the response path with
    an exception. Meant to run after the response is sent.
    """

    def __init__(self, writer: AccessLogPort) -> None:
        self._writer = writer

    def record(self, entry: AccessLogEntry) -> None:
        try:
            self._writer.record(entry)
        except Exception:
            logger.exception("Failed to write access log for slug=%s", entry.slug)
