"""
Compose component - response rendering for both client branches.

Invariants:
- I1: Preview responses are HTTP 200 HTML, never redirects
- I2: With query propagation off, the target is exactly the destination
- I3: Script redirects suppress the Referer
"""

from __future__ import annotations

from linkgate.rules.models import Rules

from ._impl import (
    ComposedResponse,
    ComposerConfig,
    compose_home,
    compose_preview,
    compose_redirect,
)
from .models import ComposeHomeInput, ComposePreviewInput, ComposeRedirectInput


def _build_config(rules: Rules | None) -> ComposerConfig:
    if rules is None:
        return ComposerConfig()
    return ComposerConfig.from_rules(rules)


# --- Component Entry Points ---


def run_preview(inp: ComposePreviewInput, *, rules: Rules | None = None) -> ComposedResponse:
    """Render the crawler preview document for a link."""
    return compose_preview(inp.link, inp.canonical_url, _build_config(rules))


def run_redirect(inp: ComposeRedirectInput, *, rules: Rules | None = None) -> ComposedResponse:
    """Render the human redirect for a selected destination."""
    return compose_redirect(inp.link, inp.destination, inp.query, _build_config(rules))


def run_home(inp: ComposeHomeInput, *, rules: Rules | None = None) -> ComposedResponse:
    """Render the root path redirect."""
    return compose_home(inp.home_url, _build_config(rules))


def run(
    inp: ComposePreviewInput | ComposeRedirectInput | ComposeHomeInput,
    *,
    rules: Rules | None = None,
) -> ComposedResponse:
    """
    Main entry point for the compose component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, ComposePreviewInput):
        return run_preview(inp, rules=rules)
    elif isinstance(inp, ComposeRedirectInput):
        return run_redirect(inp, rules=rules)
    elif isinstance(inp, ComposeHomeInput):
        return run_home(inp, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
