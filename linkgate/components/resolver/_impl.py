"""
LinkResolver - slug to Link lookup against the cached key-value store.

Key behaviors:
- Keys are namespaced with a prefix ("link:<slug>")
- Case-sensitive mode: one lookup with the verbatim slug
- Case-insensitive mode: lowercased slug first, then the original slug
  only if nothing was found and the two forms differ
- Every lookup carries the configured cache TTL hint
- Store failures propagate; malformed records count as not found
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pydantic import ValidationError

from linkgate.core.ports.store import (
    LinkStoreDecodeError,
    LinkStoreError,
    LinkStorePort,
    LinkStoreUnavailableError,
)
from linkgate.domain.entities import Link
from linkgate.rules.models import LinksRules

logger = logging.getLogger(__name__)

# --- Configuration ---


@dataclass(frozen=True)
class ResolverConfig:
    """Lookup settings."""

    key_prefix: str = "link:"
    cache_ttl_seconds: int = 60
    case_sensitive: bool = False

    @classmethod
    def from_rules(cls, rules: LinksRules) -> ResolverConfig:
        return cls(
            key_prefix=rules.key_prefix,
            cache_ttl_seconds=rules.cache_ttl_seconds,
            case_sensitive=rules.case_sensitive,
        )


DEFAULT_CONFIG = ResolverConfig()


# --- Result ---


@dataclass(frozen=True)
class ResolvedLink:
    """A link together with the store key that produced it."""

    link: Link
    key: str


# --- Key Helpers ---


def build_key(slug: str, config: ResolverConfig = DEFAULT_CONFIG) -> str:
    """Build the namespaced store key for a slug."""
    return f"{config.key_prefix}{slug}"


def candidate_slugs(slug: str, case_sensitive: bool) -> list[str]:
    """
    Slugs to try, in order.

    At most two entries, so resolution is always bounded.
    """
    if case_sensitive:
        return [slug]

    lowered = slug.lower()
    if lowered == slug:
        return [lowered]
    return [lowered, slug]


# --- Resolver ---


class LinkResolver:
    """
    Link resolver.

    Looks up eligible slugs in the store. Does no caching of its own.
    """

    def __init__(
        self,
        store: LinkStorePort,
        config: ResolverConfig | None = None,
    ) -> None:
        """Initialize resolver."""
        self._store = store
        self._config = config or DEFAULT_CONFIG

    @property
    def config(self) -> ResolverConfig:
        return self._config

    def _lookup(self, slug: str) -> ResolvedLink | None:
        key = build_key(slug, self._config)
        try:
            raw = self._store.get(key, cache_ttl=self._config.cache_ttl_seconds)
        except LinkStoreDecodeError:
            logger.warning("Ignoring undecodable link record at %s", key)
            return None
        except LinkStoreError:
            raise
        except Exception as e:
            raise LinkStoreUnavailableError(key, e) from e

        if raw is None:
            return None

        try:
            link = Link.model_validate({"slug": slug, **raw})
        except ValidationError as e:
            logger.warning("Ignoring malformed link record at %s: %s", key, e)
            return None

        return ResolvedLink(link=link, key=key)

    def resolve(self, slug: str) -> ResolvedLink | None:
        """
        Resolve a slug to its stored link.

        Returns:
            ResolvedLink, or None if no candidate key holds a record.

        Raises:
            LinkStoreError: If the store fails on any lookup.
        """
        for candidate in candidate_slugs(slug, self._config.case_sensitive):
            found = self._lookup(candidate)
            if found is not None:
                return found
        return None


# --- Factory ---


def create_link_resolver(
    store: LinkStorePort,
    rules: LinksRules | None = None,
) -> LinkResolver:
    """Create a LinkResolver."""
    config = ResolverConfig.from_rules(rules) if rules is not None else None
    return LinkResolver(store=store, config=config)
