"""
SlugNormalizer - request path to slug decision.

Key behaviors:
- Strips one leading and one trailing "/" and keeps the first path segment
- Reserved names are compared case-insensitively unless lookups are case-sensitive
- Exact root path "/" with a configured home URL short-circuits to HOME
- A slug is eligible only if non-empty, not reserved, and matching the pattern
- Pure function of (path, config): no I/O, no logging
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from linkgate.rules.models import LinksRules

# --- Decision Kinds ---


class SlugDecisionKind(str, Enum):
    """What the engine should do with a request path."""

    HOME = "home"
    RESOLVE = "resolve"
    SKIP = "skip"


class SkipReason(str, Enum):
    """Why a path was not eligible for resolution."""

    EMPTY = "empty"
    RESERVED = "reserved"
    PATTERN_MISMATCH = "pattern_mismatch"


# --- Configuration ---


@dataclass(frozen=True)
class SlugConfig:
    """Slug validation settings."""

    pattern: re.Pattern[str] = field(
        default_factory=lambda: re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", re.IGNORECASE)
    )
    reserved: frozenset[str] = frozenset({"dashboard"})
    home_url: str | None = None
    case_sensitive: bool = False

    @classmethod
    def from_rules(cls, rules: LinksRules) -> SlugConfig:
        flags = re.IGNORECASE if rules.slug_pattern_ignore_case else 0
        reserved = rules.reserved_slugs
        if not rules.case_sensitive:
            reserved = [name.lower() for name in reserved]
        return cls(
            pattern=re.compile(rules.slug_pattern, flags),
            reserved=frozenset(reserved),
            home_url=rules.home_url or None,
            case_sensitive=rules.case_sensitive,
        )


DEFAULT_CONFIG = SlugConfig()


# --- Decision ---


@dataclass(frozen=True)
class SlugDecision:
    """Result of normalizing a request path."""

    kind: SlugDecisionKind
    slug: str = ""
    reason: SkipReason | None = None
    home_url: str | None = None

    @property
    def should_resolve(self) -> bool:
        return self.kind == SlugDecisionKind.RESOLVE


# --- Functions ---


def strip_delimiters(path: str) -> str:
    """Remove the query/fragment, then a single leading and trailing '/'."""
    path = path.split("?", 1)[0].split("#", 1)[0]
    if path.startswith("/"):
        path = path[1:]
    if path.endswith("/"):
        path = path[:-1]
    return path


def extract_slug(path: str) -> str:
    """Return the first path segment of a request path."""
    return strip_delimiters(path).split("/", 1)[0]


def is_eligible(slug: str, config: SlugConfig = DEFAULT_CONFIG) -> SkipReason | None:
    """Return None if the slug may be resolved, otherwise the reason it may not."""
    if not slug:
        return SkipReason.EMPTY
    # Lookups lowercase the slug unless case-sensitive, so reserved names must too
    candidate = slug if config.case_sensitive else slug.lower()
    if candidate in config.reserved:
        return SkipReason.RESERVED
    if not config.pattern.fullmatch(slug):
        return SkipReason.PATTERN_MISMATCH
    return None


def normalize(path: str, config: SlugConfig = DEFAULT_CONFIG) -> SlugDecision:
    """
    Decide how a request path is handled.

    Returns HOME for the bare root when a home URL is configured,
    RESOLVE with the candidate slug when it is eligible, SKIP otherwise.
    """
    if path == "/" and config.home_url:
        return SlugDecision(kind=SlugDecisionKind.HOME, home_url=config.home_url)

    slug = extract_slug(path)
    reason = is_eligible(slug, config)
    if reason is not None:
        return SlugDecision(kind=SlugDecisionKind.SKIP, slug=slug, reason=reason)

    return SlugDecision(kind=SlugDecisionKind.RESOLVE, slug=slug)
