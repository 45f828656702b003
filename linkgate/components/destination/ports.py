"""
Destination component port definitions.
"""

from __future__ import annotations

from ._impl import RandomPort

__all__ = ["RandomPort"]
