"""
ResolutionEngine - slug to response decision pipeline.

Wires the slug, resolver, clients, destination and compose components:

    path -> normalize -> (HOME | SKIP | RESOLVE)
         -> resolve link -> (not found: fall through)
         -> classify client -> bot: preview
                            -> human: select destination -> redirect

Key behaviors:
- The resolved Link is passed explicitly between steps
- Fall-through outcomes carry no response; the HTTP shell hands the request on
- Store errors propagate to the caller unchanged
- An access log entry is produced for every resolved link; writing it is the
  caller's job so that it never delays the response
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from linkgate.components.access_log import build_entry
from linkgate.components.clients import ClientClass, ClientConfig, classify_client
from linkgate.components.compose import (
    ComposedResponse,
    ComposerConfig,
    compose_home,
    compose_preview,
    compose_redirect,
)
from linkgate.components.destination import (
    DestinationSelector,
    RandomPort,
    TrafficSplitConfig,
)
from linkgate.components.resolver import LinkResolver, LinkStorePort, ResolverConfig
from linkgate.components.slugs import SlugConfig, SlugDecision, SlugDecisionKind, normalize
from linkgate.core.ports.access_log import AccessLogEntry
from linkgate.domain.entities import Link, ResolutionRequest
from linkgate.rules.models import Rules

logger = logging.getLogger(__name__)


class OutcomeKind(str, Enum):
    """Terminal state of one resolution."""

    HOME = "home"
    SKIPPED = "skipped"
    NOT_FOUND = "not_found"
    NOT_REDIRECTABLE = "not_redirectable"
    PREVIEW = "preview"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class ResolutionOutcome:
    """Result of running one request through the engine."""

    kind: OutcomeKind
    decision: SlugDecision
    response: ComposedResponse | None = None
    link: Link | None = None
    client_class: ClientClass | None = None
    access_entry: AccessLogEntry | None = None

    @property
    def handled(self) -> bool:
        return self.response is not None


class ResolutionEngine:
    """
    Slug resolution and response-decision engine.

    Holds only read-only configuration and ports; safe to share across
    concurrent requests.
    """

    def __init__(
        self,
        store: LinkStorePort,
        random_port: RandomPort,
        rules: Rules | None = None,
    ) -> None:
        rules = rules or Rules()
        self._slugs = SlugConfig.from_rules(rules.links)
        self._resolver = LinkResolver(store, ResolverConfig.from_rules(rules.links))
        self._clients = ClientConfig.from_rules(rules.clients)
        self._selector = DestinationSelector(
            random_port, TrafficSplitConfig.from_rules(rules.traffic_split)
        )
        self._composer = ComposerConfig.from_rules(rules)

    def resolve(self, request: ResolutionRequest) -> ResolutionOutcome:
        """
        Run one request through the pipeline.

        Raises:
            LinkStoreError: If the link store cannot be read.
        """
        decision = normalize(request.path, self._slugs)

        if decision.kind == SlugDecisionKind.HOME and decision.home_url:
            return ResolutionOutcome(
                kind=OutcomeKind.HOME,
                decision=decision,
                response=compose_home(decision.home_url, self._composer),
            )

        if decision.kind == SlugDecisionKind.SKIP:
            return ResolutionOutcome(kind=OutcomeKind.SKIPPED, decision=decision)

        resolved = self._resolver.resolve(decision.slug)
        if resolved is None:
            return ResolutionOutcome(kind=OutcomeKind.NOT_FOUND, decision=decision)

        link = resolved.link
        client_class = classify_client(request.user_agent, self._clients)

        if client_class == ClientClass.BOT:
            response = compose_preview(link, request.url, self._composer)
            entry = build_entry(
                slug=link.slug,
                matched_key=resolved.key,
                destination=link.url,
                client_class=client_class.value,
                locale=request.locale,
                referer=request.referer,
                query=request.query,
            )
            return ResolutionOutcome(
                kind=OutcomeKind.PREVIEW,
                decision=decision,
                response=response,
                link=link,
                client_class=client_class,
                access_entry=entry,
            )

        if not link.is_redirectable:
            logger.debug("Link %s has no destination; not redirecting", resolved.key)
            return ResolutionOutcome(
                kind=OutcomeKind.NOT_REDIRECTABLE,
                decision=decision,
                link=link,
                client_class=client_class,
            )

        selection = self._selector.select(link, request.locale)
        response = compose_redirect(link, selection.url, request.query, self._composer)
        entry = build_entry(
            slug=link.slug,
            matched_key=resolved.key,
            destination=response.location or selection.url,
            client_class=client_class.value,
            locale=request.locale,
            referer=request.referer,
            query=request.query,
            diverted=selection.diverted,
        )
        return ResolutionOutcome(
            kind=OutcomeKind.REDIRECT,
            decision=decision,
            response=response,
            link=link,
            client_class=client_class,
            access_entry=entry,
        )
