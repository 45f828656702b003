"""
Slugs component - request path normalization and slug validation.
"""

from ._impl import (
    SkipReason,
    SlugConfig,
    SlugDecision,
    SlugDecisionKind,
    extract_slug,
    is_eligible,
    normalize,
    strip_delimiters,
)
from .component import run, run_normalize
from .models import NormalizePathInput, NormalizePathOutput, SlugValidationError

__all__ = [
    # Entry points
    "run",
    "run_normalize",
    # Input models
    "NormalizePathInput",
    # Output models
    "NormalizePathOutput",
    "SlugValidationError",
    # _impl re-exports
    "SkipReason",
    "SlugConfig",
    "SlugDecision",
    "SlugDecisionKind",
    "extract_slug",
    "is_eligible",
    "normalize",
    "strip_delimiters",
]
