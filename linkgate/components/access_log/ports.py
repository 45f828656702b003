"""
Access log component port definitions.
"""

from __future__ import annotations

from linkgate.core.ports.access_log import AccessLogEntry, AccessLogPort

__all__ = ["AccessLogEntry", "AccessLogPort"]
