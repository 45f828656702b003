"""
Slugs component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ._impl import SkipReason, SlugDecisionKind

# --- Validation Error ---


@dataclass(frozen=True)
class SlugValidationError:
    """Slug validation error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class NormalizePathInput:
    """Input for normalizing a request path."""

    path: str


# --- Output Models ---


@dataclass(frozen=True)
class NormalizePathOutput:
    """Output of path normalization."""

    kind: SlugDecisionKind
    slug: str = ""
    reason: SkipReason | None = None
    home_url: str | None = None
    errors: list[SlugValidationError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors
