"""
Compose component input models.

Outputs are ComposedResponse values from _impl.
"""

from __future__ import annotations

from dataclasses import dataclass

from linkgate.domain.entities import Link


@dataclass(frozen=True)
class ComposePreviewInput:
    """Input for the crawler preview document."""

    link: Link
    canonical_url: str = ""


@dataclass(frozen=True)
class ComposeRedirectInput:
    """Input for the human redirect."""

    link: Link
    destination: str
    query: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class ComposeHomeInput:
    """Input for the root path redirect."""

    home_url: str
