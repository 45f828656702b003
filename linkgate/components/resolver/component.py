"""
Resolver component - slug lookup with case-sensitivity fallback.

Invariants:
- I1: At most two store reads per resolution, issued sequentially
- I2: Every read passes the configured cache TTL
- I3: Store failures are raised, never reported as "not found"
"""

from __future__ import annotations

from linkgate.rules.models import LinksRules

from ._impl import create_link_resolver
from .models import ResolveLinkInput, ResolveLinkOutput
from .ports import LinkStorePort

# --- Component Entry Points ---


def run_resolve(
    inp: ResolveLinkInput,
    *,
    store: LinkStorePort,
    rules: LinksRules | None = None,
) -> ResolveLinkOutput:
    """
    Resolve a slug to its stored link.

    Args:
        inp: Input containing an eligible slug.
        store: Link store port.
        rules: Optional links rules for key prefix, TTL and case policy.

    Returns:
        ResolveLinkOutput with the link and matched key, or an empty output.

    Raises:
        LinkStoreError: If the store cannot be read.
    """
    resolved = create_link_resolver(store, rules).resolve(inp.slug)
    if resolved is None:
        return ResolveLinkOutput(link=None)
    return ResolveLinkOutput(link=resolved.link, key=resolved.key)


def run(
    inp: ResolveLinkInput,
    *,
    store: LinkStorePort,
    rules: LinksRules | None = None,
) -> ResolveLinkOutput:
    """Main entry point for the resolver component."""
    if isinstance(inp, ResolveLinkInput):
        return run_resolve(inp, store=store, rules=rules)
    raise ValueError(f"Unknown input type: {type(inp)}")
