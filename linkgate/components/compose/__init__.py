"""
Compose component - preview documents, redirects and query propagation.
"""

from ._impl import (
    ComposedResponse,
    ComposerConfig,
    MetaTag,
    PreviewMetadata,
    ResponseKind,
    build_preview_metadata,
    build_target,
    compose_home,
    compose_preview,
    compose_redirect,
    render_preview_document,
    render_script_redirect,
    with_query,
)
from .component import run, run_home, run_preview, run_redirect
from .models import ComposeHomeInput, ComposePreviewInput, ComposeRedirectInput

__all__ = [
    # Entry points
    "run",
    "run_home",
    "run_preview",
    "run_redirect",
    # Input models
    "ComposeHomeInput",
    "ComposePreviewInput",
    "ComposeRedirectInput",
    # Output models
    "ComposedResponse",
    "ResponseKind",
    # _impl re-exports
    "ComposerConfig",
    "MetaTag",
    "PreviewMetadata",
    "build_preview_metadata",
    "build_target",
    "compose_home",
    "compose_preview",
    "compose_redirect",
    "render_preview_document",
    "render_script_redirect",
    "with_query",
]
