"""
Clients component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass

from ._impl import ClientClass


@dataclass(frozen=True)
class ClassifyClientInput:
    """Input for classifying a client."""

    user_agent: str | None = None


@dataclass(frozen=True)
class ClassifyClientOutput:
    """Output of client classification."""

    client_class: ClientClass

    @property
    def is_bot(self) -> bool:
        return self.client_class == ClientClass.BOT
