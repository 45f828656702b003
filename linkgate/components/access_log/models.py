"""
Access log component input models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RecordAccessInput:
    """Input for recording a resolution."""

    slug: str
    matched_key: str
    destination: str
    client_class: str
    locale: str | None = None
    referer: str | None = None
    query: tuple[tuple[str, str], ...] = ()
    diverted: bool = False
