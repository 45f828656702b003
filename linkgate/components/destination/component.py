"""
Destination component - human-branch destination selection.

Invariants:
- I1: Exempt-locale requests always get the link's own URL
- I2: The alternate URL is only ever chosen when the split is enabled
- I3: Crawlers never reach this component
"""

from __future__ import annotations

from linkgate.rules.models import TrafficSplitRules

from ._impl import DestinationSelector, TrafficSplitConfig
from .models import SelectDestinationInput, SelectDestinationOutput
from .ports import RandomPort


def run_select(
    inp: SelectDestinationInput,
    *,
    random_port: RandomPort,
    rules: TrafficSplitRules | None = None,
) -> SelectDestinationOutput:
    """
    Select the final destination for a resolved link.

    Args:
        inp: Input containing the link and the request locale.
        random_port: Random source used by the traffic split.
        rules: Optional traffic-split rules; the split is off without them.

    Returns:
        SelectDestinationOutput with the URL and the policy reason.
    """
    config = TrafficSplitConfig.from_rules(rules) if rules is not None else None
    selection = DestinationSelector(random_port, config).select(inp.link, inp.locale)
    return SelectDestinationOutput(
        url=selection.url,
        reason=selection.reason,
        diverted=selection.diverted,
    )


def run(
    inp: SelectDestinationInput,
    *,
    random_port: RandomPort,
    rules: TrafficSplitRules | None = None,
) -> SelectDestinationOutput:
    """Main entry point for the destination component."""
    if isinstance(inp, SelectDestinationInput):
        return run_select(inp, random_port=random_port, rules=rules)
    raise ValueError(f"Unknown input type: {type(inp)}")
