"""
Destination component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass

from linkgate.domain.entities import Link

from ._impl import SelectionReason


@dataclass(frozen=True)
class SelectDestinationInput:
    """Input for selecting the human-branch destination."""

    link: Link
    locale: str | None = None


@dataclass(frozen=True)
class SelectDestinationOutput:
    """Chosen destination URL."""

    url: str
    reason: SelectionReason
    diverted: bool = False
