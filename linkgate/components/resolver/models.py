"""
Resolver component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass

from linkgate.domain.entities import Link

# --- Input Models ---


@dataclass(frozen=True)
class ResolveLinkInput:
    """Input for resolving an eligible slug."""

    slug: str


# --- Output Models ---


@dataclass(frozen=True)
class ResolveLinkOutput:
    """Output of a link lookup."""

    link: Link | None
    key: str | None = None

    @property
    def found(self) -> bool:
        return self.link is not None
