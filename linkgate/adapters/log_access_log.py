"""
Logging Access Log Adapter.

Implements AccessLogPort by emitting one structured INFO line per entry.
Used when no database is wanted, and in development.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from linkgate.core.ports.access_log import AccessLogEntry

logger = logging.getLogger("linkgate.access")


@dataclass
class LoggingAccessLog:
    """Access log writer backed by the logging module."""

    log_level: int = logging.INFO

    def record(self, entry: AccessLogEntry) -> None:
        logger.log(
            self.log_level,
            "access slug=%s key=%s client=%s locale=%s referer=%s diverted=%s dest=%s",
            entry.slug,
            entry.matched_key,
            entry.client_class,
            entry.locale or "-",
            entry.referer_host or "-",
            entry.diverted,
            entry.destination,
        )
