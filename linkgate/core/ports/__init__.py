# linkgate: Ports (Protocol Interfaces)
# Abstract interfaces for adapters; no implementations here

from linkgate.core.ports.access_log import AccessLogEntry, AccessLogPort
from linkgate.core.ports.store import (
    LinkStoreDecodeError,
    LinkStoreError,
    LinkStorePort,
    LinkStoreUnavailableError,
)

__all__ = [
    # Access log
    "AccessLogEntry",
    "AccessLogPort",
    # Link store
    "LinkStoreDecodeError",
    "LinkStoreError",
    "LinkStorePort",
    "LinkStoreUnavailableError",
]
