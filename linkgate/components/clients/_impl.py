"""
ClientClassifier - bot/human classification from the User-Agent string.

Key behaviors:
- Case-insensitive regex search against known crawler signatures
- Empty or missing identity classifies as human
- Stateless and deterministic
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from linkgate.rules.models import DEFAULT_BOT_PATTERN, ClientsRules

# --- Enums ---


class ClientClass(str, Enum):
    """Client classification."""

    BOT = "bot"
    HUMAN = "human"


# --- Configuration ---


@dataclass(frozen=True)
class ClientConfig:
    """Bot detection settings."""

    bot_pattern: re.Pattern[str] = field(
        default_factory=lambda: re.compile(DEFAULT_BOT_PATTERN, re.IGNORECASE)
    )

    @classmethod
    def from_rules(cls, rules: ClientsRules) -> ClientConfig:
        return cls(bot_pattern=re.compile(rules.bot_pattern, re.IGNORECASE))


DEFAULT_CONFIG = ClientConfig()


# --- Classification ---


def classify_client(
    user_agent: str | None,
    config: ClientConfig = DEFAULT_CONFIG,
) -> ClientClass:
    """Classify a User-Agent string as BOT or HUMAN."""
    if not user_agent:
        return ClientClass.HUMAN

    if config.bot_pattern.search(user_agent):
        return ClientClass.BOT

    return ClientClass.HUMAN


def is_bot(user_agent: str | None, config: ClientConfig = DEFAULT_CONFIG) -> bool:
    """Check if a User-Agent belongs to a crawler or link unfurler."""
    return classify_client(user_agent, config) == ClientClass.BOT
