"""
Access log component - fire-and-forget resolution logging.

Invariants:
- I1: Recording never raises into the caller
- I2: Entries contain no IP address or raw User-Agent
"""

from __future__ import annotations

from ._impl import BestEffortAccessLogger, build_entry
from .models import RecordAccessInput
from .ports import AccessLogPort


def run_record(inp: RecordAccessInput, *, writer: AccessLogPort) -> None:
    """Record one successful resolution, swallowing writer failures."""
    entry = build_entry(
        slug=inp.slug,
        matched_key=inp.matched_key,
        destination=inp.destination,
        client_class=inp.client_class,
        locale=inp.locale,
        referer=inp.referer,
        query=inp.query,
        diverted=inp.diverted,
    )
    BestEffortAccessLogger(writer).record(entry)


def run(inp: RecordAccessInput, *, writer: AccessLogPort) -> None:
    """Main entry point for the access log component."""
    if isinstance(inp, RecordAccessInput):
        return run_record(inp, writer=writer)
    raise ValueError(f"Unknown input type: {type(inp)}")
