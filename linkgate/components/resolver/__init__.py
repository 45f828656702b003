"""
Resolver component - slug lookup against the link store.
"""

from ._impl import (
    LinkResolver,
    ResolvedLink,
    ResolverConfig,
    build_key,
    candidate_slugs,
    create_link_resolver,
)
from .component import run, run_resolve
from .models import ResolveLinkInput, ResolveLinkOutput
from .ports import LinkStoreError, LinkStorePort

__all__ = [
    # Entry points
    "run",
    "run_resolve",
    # Input models
    "ResolveLinkInput",
    # Output models
    "ResolveLinkOutput",
    # Ports
    "LinkStoreError",
    "LinkStorePort",
    # _impl re-exports
    "LinkResolver",
    "ResolvedLink",
    "ResolverConfig",
    "build_key",
    "candidate_slugs",
    "create_link_resolver",
]
