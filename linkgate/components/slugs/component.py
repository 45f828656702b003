"""
Slugs component - request path normalization and slug validation.

Invariants:
- I1: Reserved slugs never reach the resolver
- I2: Slugs not matching the configured pattern never reach the resolver
- I3: Output depends only on the path and configuration
"""

from __future__ import annotations

from linkgate.rules.models import LinksRules

from ._impl import SkipReason, SlugConfig, normalize
from .models import NormalizePathInput, NormalizePathOutput, SlugValidationError


_SKIP_MESSAGES = {
    SkipReason.EMPTY: "Path has no slug",
    SkipReason.RESERVED: "Slug is reserved",
    SkipReason.PATTERN_MISMATCH: "Slug does not match the allowed pattern",
}


def _build_config(rules: LinksRules | None) -> SlugConfig:
    """Build slug config from rules."""
    if rules is None:
        return SlugConfig()
    return SlugConfig.from_rules(rules)


# --- Component Entry Points ---


def run_normalize(
    inp: NormalizePathInput,
    *,
    rules: LinksRules | None = None,
) -> NormalizePathOutput:
    """
    Normalize a request path into a slug decision.

    Args:
        inp: Input containing the raw request path.
        rules: Optional links rules; defaults apply when omitted.

    Returns:
        NormalizePathOutput describing HOME, RESOLVE or SKIP.
    """
    decision = normalize(inp.path, _build_config(rules))

    errors: list[SlugValidationError] = []
    if decision.reason is not None:
        errors.append(
            SlugValidationError(
                code=decision.reason.value,
                message=_SKIP_MESSAGES[decision.reason],
                field="slug",
            )
        )

    return NormalizePathOutput(
        kind=decision.kind,
        slug=decision.slug,
        reason=decision.reason,
        home_url=decision.home_url,
        errors=errors,
    )


def run(inp: NormalizePathInput, *, rules: LinksRules | None = None) -> NormalizePathOutput:
    """Main entry point for the slugs component."""
    if isinstance(inp, NormalizePathInput):
        return run_normalize(inp, rules=rules)
    raise ValueError(f"Unknown input type: {type(inp)}")
