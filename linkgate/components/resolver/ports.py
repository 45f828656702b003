"""
Resolver component port definitions.
"""

from __future__ import annotations

from linkgate.core.ports.store import LinkStoreError, LinkStorePort

__all__ = ["LinkStoreError", "LinkStorePort"]
