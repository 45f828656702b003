"""
DestinationSelector - final destination URL for the human branch.

Key behaviors:
- Default destination is the link's own URL
- Traffic split (opt-in): when the request locale is not the exempt locale,
  pick uniformly at random between the link URL and a fixed alternate URL
- Missing locale is treated as exempt unless configured otherwise
- Every diversion is logged as an audit line
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, TypeVar

from linkgate.domain.entities import Link
from linkgate.rules.models import TrafficSplitRules

logger = logging.getLogger(__name__)

T = TypeVar("T")


# --- Random Port Protocol ---


class RandomPort(Protocol):
    """Random choice provider interface."""

    def choice(self, options: Sequence[T]) -> T:
        """Pick one option uniformly at random."""
        ...


# --- Configuration ---


@dataclass(frozen=True)
class TrafficSplitConfig:
    """Traffic-split policy settings."""

    enabled: bool = False
    exempt_locale: str = "ID"
    alternate_url: str | None = None
    treat_missing_locale_as_exempt: bool = True

    @classmethod
    def from_rules(cls, rules: TrafficSplitRules) -> TrafficSplitConfig:
        return cls(
            enabled=rules.enabled,
            exempt_locale=rules.exempt_locale,
            alternate_url=rules.alternate_url,
            treat_missing_locale_as_exempt=rules.treat_missing_locale_as_exempt,
        )


DEFAULT_CONFIG = TrafficSplitConfig()


# --- Selection ---


class SelectionReason(str, Enum):
    """Why a destination was chosen."""

    SPLIT_DISABLED = "split_disabled"
    EXEMPT_LOCALE = "exempt_locale"
    MISSING_LOCALE = "missing_locale"
    SPLIT_CANONICAL = "split_canonical"
    SPLIT_ALTERNATE = "split_alternate"


@dataclass(frozen=True)
class DestinationSelection:
    """Chosen destination and the policy decision behind it."""

    url: str
    reason: SelectionReason

    @property
    def diverted(self) -> bool:
        return self.reason == SelectionReason.SPLIT_ALTERNATE


def is_exempt(locale: str | None, config: TrafficSplitConfig = DEFAULT_CONFIG) -> bool:
    """Check if a locale is exempt from the traffic split."""
    if not locale:
        return config.treat_missing_locale_as_exempt
    return locale.upper() == config.exempt_locale.upper()


class DestinationSelector:
    """Destination selector with an explicit traffic-split policy."""

    def __init__(
        self,
        random_port: RandomPort,
        config: TrafficSplitConfig | None = None,
    ) -> None:
        self._random = random_port
        self._config = config or DEFAULT_CONFIG

    def select(self, link: Link, locale: str | None) -> DestinationSelection:
        """Choose the destination URL for a human visitor."""
        config = self._config
        alternate = config.alternate_url

        if not config.enabled or not alternate:
            return DestinationSelection(url=link.url, reason=SelectionReason.SPLIT_DISABLED)

        if is_exempt(locale, config):
            reason = SelectionReason.EXEMPT_LOCALE if locale else SelectionReason.MISSING_LOCALE
            return DestinationSelection(url=link.url, reason=reason)

        chosen = self._random.choice([link.url, alternate])
        if chosen == link.url:
            return DestinationSelection(url=chosen, reason=SelectionReason.SPLIT_CANONICAL)

        logger.info(
            "Traffic split diverted slug=%s locale=%s to alternate destination",
            link.slug,
            locale or "-",
        )
        return DestinationSelection(url=chosen, reason=SelectionReason.SPLIT_ALTERNATE)
