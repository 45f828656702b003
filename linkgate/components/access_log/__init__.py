"""
Access log component - best-effort resolution logging.
"""

from ._impl import (
    UTM_PARAMS,
    BestEffortAccessLogger,
    NullAccessLog,
    build_entry,
    extract_utm,
    referer_host,
)
from .component import run, run_record
from .models import RecordAccessInput
from .ports import AccessLogEntry, AccessLogPort

__all__ = [
    # Entry points
    "run",
    "run_record",
    # Input models
    "RecordAccessInput",
    # Ports
    "AccessLogEntry",
    "AccessLogPort",
    # _impl re-exports
    "UTM_PARAMS",
    "BestEffortAccessLogger",
    "NullAccessLog",
    "build_entry",
    "extract_utm",
    "referer_host",
]
