"""
ResponseComposer - preview documents, redirects and query propagation.

Key behaviors:
- Crawlers get an HTTP 200 preview document with OpenGraph/Twitter metadata
- Missing link fields fall back to configured defaults
- Humans get either a Location redirect with the configured status code, or
  a script document that navigates with the referrer suppressed
- Incoming query parameters are merged into the destination when enabled
- Pure functions: same inputs always produce the same response
"""

from __future__ import annotations

import html
import json
from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import quote, unquote_plus, urlencode, urlsplit, urlunsplit

from linkgate.domain.entities import Link
from linkgate.rules.models import PreviewRules, Rules

HTML_MEDIA_TYPE = "text/html; charset=utf-8"

# --- Configuration ---


@dataclass(frozen=True)
class ComposerConfig:
    """Response composition settings."""

    status_code: int = 301
    home_status_code: int = 302
    mode: str = "http"
    with_query: bool = False
    preview_max_age: int = 60
    preview: PreviewRules = field(default_factory=PreviewRules)

    @classmethod
    def from_rules(cls, rules: Rules) -> ComposerConfig:
        return cls(
            status_code=rules.redirect.status_code,
            home_status_code=rules.redirect.home_status_code,
            mode=rules.redirect.mode,
            with_query=rules.redirect.with_query,
            preview_max_age=rules.links.cache_ttl_seconds,
            preview=rules.preview,
        )


DEFAULT_CONFIG = ComposerConfig()


# --- Response Model ---


class ResponseKind(str, Enum):
    """Composed response variants."""

    PREVIEW = "preview"
    REDIRECT = "redirect"
    SCRIPT_REDIRECT = "script_redirect"
    HOME = "home"


@dataclass(frozen=True)
class ComposedResponse:
    """Framework-neutral response."""

    kind: ResponseKind
    status_code: int
    body: str = ""
    media_type: str | None = None
    location: str | None = None
    headers: dict[str, str] = field(default_factory=dict)


# --- Query Propagation ---


def _encode_pair(key: str, value: str) -> str:
    if not value:
        return quote(key, safe="")
    return urlencode([(key, value)], quote_via=quote)


def with_query(url: str, query: list[tuple[str, str]] | tuple[tuple[str, str], ...]) -> str:
    """
    Merge request query parameters into a destination URL.

    The destination's own query text is kept byte for byte, except for
    parameters the request overrides. A request parameter with the same name
    replaces all of its values at the position of the first one; new names
    are appended in order. Request values are percent-encoded and blank ones
    are written as bare keys.
    """
    if not query:
        return url

    parts = urlsplit(url)

    incoming: dict[str, list[str]] = {}
    for key, value in query:
        incoming.setdefault(key, []).append(_encode_pair(key, value))

    segments: list[str] = []
    placed: set[str] = set()
    for segment in parts.query.split("&") if parts.query else []:
        name = unquote_plus(segment.split("=", 1)[0])
        if name not in incoming:
            segments.append(segment)
        elif name not in placed:
            segments.extend(incoming[name])
            placed.add(name)

    for name, encoded in incoming.items():
        if name not in placed:
            segments.extend(encoded)

    return urlunsplit(parts._replace(query="&".join(segments)))


def build_target(
    destination: str,
    query: list[tuple[str, str]] | tuple[tuple[str, str], ...],
    config: ComposerConfig = DEFAULT_CONFIG,
) -> str:
    """Apply the query propagation policy to a destination."""
    if config.with_query:
        return with_query(destination, query)
    return destination


# --- Preview Metadata ---


@dataclass(frozen=True)
class MetaTag:
    """HTML meta tag representation."""

    name: str | None = None
    property: str | None = None  # For OG tags
    content: str = ""


@dataclass(frozen=True)
class PreviewMetadata:
    """
    Everything a crawler needs to unfurl a link.

    Built from the stored link with configured fallbacks.
    """

    title: str
    description: str
    image: str
    canonical_url: str
    site_name: str
    twitter_card: str = "summary_large_image"
    robots: str = "index, follow"
    og_type: str = "website"
    keywords: str = ""
    fb_app_id: str | None = None

    def to_meta_tags(self) -> list[MetaTag]:
        """Convert to list of MetaTag objects for rendering."""
        tags = [
            MetaTag(name="description", content=self.description),
            MetaTag(name="robots", content=self.robots),
            MetaTag(property="og:type", content=self.og_type),
            MetaTag(property="og:title", content=self.title),
            MetaTag(property="og:description", content=self.description),
            MetaTag(property="og:url", content=self.canonical_url),
            MetaTag(property="og:image", content=self.image),
            MetaTag(property="og:site_name", content=self.site_name),
            MetaTag(name="twitter:card", content=self.twitter_card),
            MetaTag(name="twitter:title", content=self.title),
            MetaTag(name="twitter:description", content=self.description),
            MetaTag(name="twitter:image", content=self.image),
        ]

        if self.keywords:
            tags.append(MetaTag(name="keywords", content=self.keywords))
        if self.fb_app_id:
            tags.append(MetaTag(property="fb:app_id", content=self.fb_app_id))

        return tags


def build_preview_metadata(
    link: Link,
    canonical_url: str,
    preview: PreviewRules | None = None,
) -> PreviewMetadata:
    """Build preview metadata, falling back to configured defaults."""
    preview = preview or PreviewRules()
    return PreviewMetadata(
        title=link.title or preview.default_title,
        description=link.description or preview.default_description,
        image=link.image or preview.default_image,
        canonical_url=canonical_url,
        site_name=preview.site_name,
        twitter_card=preview.twitter_card,
        keywords=preview.keywords,
        fb_app_id=preview.fb_app_id,
    )


# --- HTML Rendering ---


def _escape(text: str) -> str:
    return html.escape(text, quote=True)


def render_meta_tags_html(metadata: PreviewMetadata) -> str:
    """Render PreviewMetadata to HTML head markup."""
    parts = [f"<title>{_escape(metadata.title)}</title>"]

    for tag in metadata.to_meta_tags():
        if tag.property:
            parts.append(
                f'<meta property="{_escape(tag.property)}" content="{_escape(tag.content)}" />'
            )
        elif tag.name:
            parts.append(f'<meta name="{_escape(tag.name)}" content="{_escape(tag.content)}" />')

    if metadata.canonical_url:
        parts.append(f'<link rel="canonical" href="{_escape(metadata.canonical_url)}" />')

    return "\n    ".join(parts)


def render_preview_document(metadata: PreviewMetadata) -> str:
    """Render the crawler preview page."""
    image_html = ""
    if metadata.image:
        image_html = f'<img src="{_escape(metadata.image)}" alt="{_escape(metadata.title)}" />'

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    {render_meta_tags_html(metadata)}
</head>
<body>
    <main>
        {image_html}
        <h1>{_escape(metadata.title)}</h1>
        <p>{_escape(metadata.description)}</p>
    </main>
</body>
</html>"""


def _script_literal(value: str) -> str:
    """Encode a string as a JS literal that cannot close its <script> tag."""
    return json.dumps(value).replace("</", "<\\/")


def render_script_redirect(target: str, title: str) -> str:
    """
    Render a document that navigates to target without sending a Referer.

    A transient anchor with rel="noreferrer" is clicked from script; the
    referrer meta covers browsers that ignore the anchor attribute.
    """
    escaped_target = _escape(target)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8" />
    <meta name="referrer" content="no-referrer" />
    <meta name="robots" content="noindex" />
    <title>{_escape(title)}</title>
    <script>
        (function (targetUrl) {{
            var link = document.createElement('a');
            link.href = targetUrl;
            link.rel = 'noreferrer';
            link.target = '_self';
            link.click();
        }})({_script_literal(target)});
    </script>
</head>
<body>
    <noscript>
        <p><a href="{escaped_target}" rel="noreferrer">Continue to {escaped_target}</a></p>
    </noscript>
</body>
</html>"""


# --- Composition ---


def _no_store_headers() -> dict[str, str]:
    return {"Cache-Control": "private, max-age=0"}


def compose_preview(
    link: Link,
    canonical_url: str,
    config: ComposerConfig = DEFAULT_CONFIG,
) -> ComposedResponse:
    """Crawler branch: always a 200 HTML document, never a redirect."""
    metadata = build_preview_metadata(link, canonical_url, config.preview)
    return ComposedResponse(
        kind=ResponseKind.PREVIEW,
        status_code=200,
        body=render_preview_document(metadata),
        media_type=HTML_MEDIA_TYPE,
        headers={"Cache-Control": f"public, max-age={config.preview_max_age}"},
    )


def compose_redirect(
    link: Link,
    destination: str,
    query: list[tuple[str, str]] | tuple[tuple[str, str], ...],
    config: ComposerConfig = DEFAULT_CONFIG,
) -> ComposedResponse:
    """Human branch: Location redirect or no-referrer script document."""
    target = build_target(destination, query, config)

    if config.mode == "script":
        title = link.title or config.preview.default_title
        return ComposedResponse(
            kind=ResponseKind.SCRIPT_REDIRECT,
            status_code=200,
            body=render_script_redirect(target, title),
            media_type=HTML_MEDIA_TYPE,
            location=target,
            headers={**_no_store_headers(), "Referrer-Policy": "no-referrer"},
        )

    return ComposedResponse(
        kind=ResponseKind.REDIRECT,
        status_code=config.status_code,
        location=target,
        headers=_no_store_headers(),
    )


def compose_home(home_url: str, config: ComposerConfig = DEFAULT_CONFIG) -> ComposedResponse:
    """Root path redirect to the configured home URL."""
    return ComposedResponse(
        kind=ResponseKind.HOME,
        status_code=config.home_status_code,
        location=home_url,
        headers=_no_store_headers(),
    )
