"""
Tests for ResolutionEngine.

Test assertions:
- Reserved and malformed slugs never reach the store
- Bots get a preview, humans get a redirect
- Every successful resolution yields an access log entry
- Store failures propagate out of the engine
"""

from __future__ import annotations

import pytest

from linkgate.adapters.memory_store import InMemoryLinkStore
from linkgate.components.clients import ClientClass
from linkgate.components.compose import ResponseKind
from linkgate.core.ports.store import LinkStoreError
from linkgate.core.services.resolution import OutcomeKind, ResolutionEngine
from linkgate.domain.entities import ResolutionRequest
from linkgate.rules.models import LinksRules, RedirectRules, Rules, TrafficSplitRules

from tests.doubles import FailingLinkStore, FixedRandom

HUMAN_UA = "Mozilla/5.0 (X11; Linux x86_64) Chrome/118.0 Safari/537.36"
BOT_UA = "facebookexternalhit/1.1"


@pytest.fixture
def engine(link_store: InMemoryLinkStore, rules: Rules) -> ResolutionEngine:
    return ResolutionEngine(store=link_store, random_port=FixedRandom(), rules=rules)


class TestSkips:
    def test_reserved_slug_never_hits_store(self, link_store: InMemoryLinkStore) -> None:
        engine = ResolutionEngine(
            store=link_store,
            random_port=FixedRandom(),
            rules=Rules(links=LinksRules(reserved_slugs=["promo"])),
        )
        outcome = engine.resolve(ResolutionRequest(path="/promo", user_agent=HUMAN_UA))

        assert outcome.kind == OutcomeKind.SKIPPED
        assert not outcome.handled
        assert link_store.reads == []

    def test_pattern_mismatch_never_hits_store(
        self, engine: ResolutionEngine, link_store: InMemoryLinkStore
    ) -> None:
        outcome = engine.resolve(ResolutionRequest(path="/favicon.ico"))

        assert outcome.kind == OutcomeKind.SKIPPED
        assert link_store.reads == []

    def test_unknown_slug_is_not_found(self, engine: ResolutionEngine) -> None:
        outcome = engine.resolve(ResolutionRequest(path="/missing"))

        assert outcome.kind == OutcomeKind.NOT_FOUND
        assert outcome.response is None
        assert outcome.access_entry is None


class TestHome:
    def test_root_redirects_home(self, link_store: InMemoryLinkStore) -> None:
        rules = Rules(links=LinksRules(home_url="https://home.example/"))
        engine = ResolutionEngine(store=link_store, random_port=FixedRandom(), rules=rules)

        outcome = engine.resolve(ResolutionRequest(path="/"))

        assert outcome.kind == OutcomeKind.HOME
        assert outcome.response is not None
        assert outcome.response.location == "https://home.example/"
        assert outcome.response.status_code == 302
        assert link_store.reads == []


class TestHumanBranch:
    def test_redirects_case_insensitively(self, engine: ResolutionEngine) -> None:
        outcome = engine.resolve(ResolutionRequest(path="/Promo", user_agent=HUMAN_UA))

        assert outcome.kind == OutcomeKind.REDIRECT
        assert outcome.client_class == ClientClass.HUMAN
        assert outcome.response is not None
        assert outcome.response.status_code == 301
        assert outcome.response.location == "https://dest.example/x"

    def test_access_entry_for_redirect(self, engine: ResolutionEngine) -> None:
        outcome = engine.resolve(
            ResolutionRequest(
                path="/promo",
                user_agent=HUMAN_UA,
                locale="US",
                referer="https://social.example/post",
                query=(("utm_source", "social"),),
            )
        )

        entry = outcome.access_entry
        assert entry is not None
        assert entry.slug == "promo"
        assert entry.matched_key == "link:promo"
        assert entry.destination == "https://dest.example/x"
        assert entry.client_class == "human"
        assert entry.locale == "US"
        assert entry.referer_host == "social.example"
        assert entry.utm == {"utm_source": "social"}
        assert not entry.diverted

    def test_traffic_split_diversion(self, link_store: InMemoryLinkStore) -> None:
        rules = Rules(
            traffic_split=TrafficSplitRules(enabled=True, alternate_url="https://alt.example/")
        )
        engine = ResolutionEngine(store=link_store, random_port=FixedRandom(index=1), rules=rules)

        diverted = engine.resolve(
            ResolutionRequest(path="/promo", user_agent=HUMAN_UA, locale="US")
        )
        exempt = engine.resolve(ResolutionRequest(path="/promo", user_agent=HUMAN_UA, locale="ID"))

        assert diverted.response is not None
        assert diverted.response.location == "https://alt.example/"
        assert diverted.access_entry is not None
        assert diverted.access_entry.diverted
        assert exempt.response is not None
        assert exempt.response.location == "https://dest.example/x"

    def test_query_propagation(self, link_store: InMemoryLinkStore) -> None:
        rules = Rules(redirect=RedirectRules(with_query=True))
        engine = ResolutionEngine(store=link_store, random_port=FixedRandom(), rules=rules)

        outcome = engine.resolve(
            ResolutionRequest(path="/promo", user_agent=HUMAN_UA, query=(("utm", "x"),))
        )

        assert outcome.response is not None
        assert outcome.response.location == "https://dest.example/x?utm=x"

    def test_link_without_url_is_not_redirected(self, rules: Rules) -> None:
        store = InMemoryLinkStore({"link:draft": {"title": "Draft"}})
        engine = ResolutionEngine(store=store, random_port=FixedRandom(), rules=rules)

        outcome = engine.resolve(ResolutionRequest(path="/draft", user_agent=HUMAN_UA))

        assert outcome.kind == OutcomeKind.NOT_REDIRECTABLE
        assert not outcome.handled


class TestBotBranch:
    def test_preview_for_bot(self, engine: ResolutionEngine) -> None:
        outcome = engine.resolve(
            ResolutionRequest(path="/promo", user_agent=BOT_UA, url="https://s.example/promo")
        )

        assert outcome.kind == OutcomeKind.PREVIEW
        assert outcome.client_class == ClientClass.BOT
        assert outcome.response is not None
        assert outcome.response.kind == ResponseKind.PREVIEW
        assert outcome.response.status_code == 200
        assert '<meta property="og:title" content="Promo" />' in outcome.response.body
        assert outcome.access_entry is not None
        assert outcome.access_entry.client_class == "bot"

    def test_bot_never_consults_random_source(self, link_store: InMemoryLinkStore) -> None:
        random_source = FixedRandom(index=1)
        rules = Rules(
            traffic_split=TrafficSplitRules(enabled=True, alternate_url="https://alt.example/")
        )
        engine = ResolutionEngine(store=link_store, random_port=random_source, rules=rules)

        engine.resolve(ResolutionRequest(path="/promo", user_agent=BOT_UA, locale="US"))

        assert random_source.calls == []


class TestStoreFailure:
    def test_store_error_propagates(self, rules: Rules) -> None:
        engine = ResolutionEngine(store=FailingLinkStore(), random_port=FixedRandom(), rules=rules)

        with pytest.raises(LinkStoreError):
            engine.resolve(ResolutionRequest(path="/promo", user_agent=HUMAN_UA))
