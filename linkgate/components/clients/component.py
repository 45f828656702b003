"""
Clients component - bot/human classification.
"""

from __future__ import annotations

from linkgate.rules.models import ClientsRules

from ._impl import ClientConfig, classify_client
from .models import ClassifyClientInput, ClassifyClientOutput


def run_classify(
    inp: ClassifyClientInput,
    *,
    rules: ClientsRules | None = None,
) -> ClassifyClientOutput:
    """Classify the declared client identity of a request."""
    config = ClientConfig.from_rules(rules) if rules is not None else ClientConfig()
    return ClassifyClientOutput(client_class=classify_client(inp.user_agent, config))


def run(inp: ClassifyClientInput, *, rules: ClientsRules | None = None) -> ClassifyClientOutput:
    """Main entry point for the clients component."""
    if isinstance(inp, ClassifyClientInput):
        return run_classify(inp, rules=rules)
    raise ValueError(f"Unknown input type: {type(inp)}")
