"""
LinkResolutionMiddleware - serves short links ahead of the app's routes.

Every GET/HEAD request is offered to the ResolutionEngine first. Handled
outcomes (home, preview, redirect) are answered here; everything else falls
through to the next handler unchanged.

Key behaviors:
- The engine runs in the threadpool; store reads are blocking
- A store outage answers 503 and never falls through
- The access log is written after the response via a BackgroundTask
"""

from __future__ import annotations

import logging

from fastapi.requests import Request
from fastapi.responses import Response
from starlette.background import BackgroundTask
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import HTMLResponse, JSONResponse, RedirectResponse
from starlette.types import ASGIApp

from linkgate.components.access_log import BestEffortAccessLogger
from linkgate.components.compose import ComposedResponse, ResponseKind
from linkgate.core.ports.store import LinkStoreError
from linkgate.core.services.resolution import ResolutionEngine, ResolutionOutcome
from linkgate.domain.entities import ResolutionRequest

logger = logging.getLogger(__name__)

RESOLVABLE_METHODS = frozenset({"GET", "HEAD"})


def build_resolution_request(request: Request, locale_header: str) -> ResolutionRequest:
    """Extract the engine input from a Starlette request."""
    locale = request.headers.get(locale_header) or None
    return ResolutionRequest(
        path=request.url.path,
        user_agent=request.headers.get("user-agent", ""),
        locale=locale.strip() if locale else None,
        query=tuple(request.query_params.multi_items()),
        url=str(request.url),
        referer=request.headers.get("referer"),
    )


def to_response(composed: ComposedResponse, background: BackgroundTask | None = None) -> Response:
    """Convert a framework-neutral ComposedResponse into a Starlette response."""
    if composed.kind in (ResponseKind.REDIRECT, ResponseKind.HOME) and composed.location:
        return RedirectResponse(
            url=composed.location,
            status_code=composed.status_code,
            headers=composed.headers,
            background=background,
        )

    return HTMLResponse(
        content=composed.body,
        status_code=composed.status_code,
        headers=composed.headers,
        media_type=composed.media_type,
        background=background,
    )


class LinkResolutionMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        engine: ResolutionEngine,
        access_logger: BestEffortAccessLogger,
        locale_header: str = "cf-ipcountry",
    ) -> None:
        super().__init__(app)
        self.engine = engine
        self.access_logger = access_logger
        self.locale_header = locale_header

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method not in RESOLVABLE_METHODS:
            return await call_next(request)

        resolution_request = build_resolution_request(request, self.locale_header)

        try:
            outcome: ResolutionOutcome = await run_in_threadpool(
                self.engine.resolve, resolution_request
            )
        except LinkStoreError:
            logger.exception("Link store unavailable for path %s", request.url.path)
            return JSONResponse(
                status_code=503,
                content={"detail": "Link store unavailable"},
                headers={"Cache-Control": "private, max-age=0"},
            )

        if outcome.response is None:
            return await call_next(request)

        background = None
        if outcome.access_entry is not None:
            background = BackgroundTask(self.access_logger.record, outcome.access_entry)

        return to_response(outcome.response, background)
