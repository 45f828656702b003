"""
Tests for the resolver component.

Test assertions:
- Case-sensitive mode reads the verbatim slug only
- Case-insensitive mode reads the lowercased slug, then the original
- Every read carries the cache TTL hint
- Store failures propagate; malformed records are not found
"""

from __future__ import annotations

import pytest

from linkgate.adapters.memory_store import InMemoryLinkStore
from linkgate.components.resolver import (
    LinkResolver,
    ResolveLinkInput,
    ResolverConfig,
    build_key,
    candidate_slugs,
    create_link_resolver,
    run_resolve,
)
from linkgate.core.ports.store import (
    LinkStoreDecodeError,
    LinkStoreError,
    LinkStoreUnavailableError,
)
from linkgate.rules.models import LinksRules

from tests.doubles import FailingLinkStore


class TestKeys:
    def test_build_key_uses_prefix(self) -> None:
        assert build_key("promo", ResolverConfig(key_prefix="short:")) == "short:promo"

    def test_candidates_case_sensitive(self) -> None:
        assert candidate_slugs("Abc", case_sensitive=True) == ["Abc"]

    def test_candidates_case_insensitive_mixed(self) -> None:
        assert candidate_slugs("Abc", case_sensitive=False) == ["abc", "Abc"]

    def test_candidates_case_insensitive_already_lower(self) -> None:
        assert candidate_slugs("abc", case_sensitive=False) == ["abc"]


class TestCaseInsensitive:
    @pytest.mark.parametrize("slug", ["abc", "Abc", "ABC"])
    def test_lower_record_found_by_any_case(self, slug: str) -> None:
        store = InMemoryLinkStore({"link:abc": {"url": "https://a.example"}})
        resolved = LinkResolver(store).resolve(slug)

        assert resolved is not None
        assert resolved.key == "link:abc"
        assert resolved.link.url == "https://a.example"

    def test_falls_back_to_original_case(self) -> None:
        store = InMemoryLinkStore({"link:MiXed": {"url": "https://m.example"}})
        resolved = LinkResolver(store).resolve("MiXed")

        assert resolved is not None
        assert resolved.key == "link:MiXed"
        assert [r.key for r in store.reads] == ["link:mixed", "link:MiXed"]

    def test_at_most_two_reads(self) -> None:
        store = InMemoryLinkStore()
        assert LinkResolver(store).resolve("Missing") is None
        assert len(store.reads) == 2

    def test_single_read_when_already_lower(self) -> None:
        store = InMemoryLinkStore()
        assert LinkResolver(store).resolve("missing") is None
        assert len(store.reads) == 1


class TestCaseSensitive:
    def test_only_verbatim_slug(self) -> None:
        store = InMemoryLinkStore({"link:Abc": {"url": "https://a.example"}})
        resolver = LinkResolver(store, ResolverConfig(case_sensitive=True))

        assert resolver.resolve("Abc") is not None
        assert resolver.resolve("abc") is None
        assert resolver.resolve("ABC") is None


class TestTtlHint:
    def test_every_read_passes_ttl(self) -> None:
        store = InMemoryLinkStore()
        resolver = create_link_resolver(store, LinksRules(cache_ttl_seconds=300))
        resolver.resolve("Promo")

        assert store.reads
        assert all(read.cache_ttl == 300 for read in store.reads)


class TestFailures:
    def test_store_error_propagates(self) -> None:
        store = FailingLinkStore(LinkStoreUnavailableError("link:promo"))

        with pytest.raises(LinkStoreUnavailableError):
            LinkResolver(store).resolve("promo")

    def test_unexpected_exception_is_wrapped(self) -> None:
        store = FailingLinkStore(ConnectionError("reset by peer"))

        with pytest.raises(LinkStoreError) as exc_info:
            LinkResolver(store).resolve("promo")
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_malformed_record_is_not_found(self) -> None:
        store = InMemoryLinkStore({"link:promo": {"url": ["not", "a", "string"]}})
        assert LinkResolver(store).resolve("promo") is None

    def test_undecodable_record_is_not_found(self) -> None:
        store = FailingLinkStore(LinkStoreDecodeError("link:promo"))
        assert LinkResolver(store).resolve("promo") is None


class TestRunEntryPoint:
    def test_found(self) -> None:
        store = InMemoryLinkStore({"link:promo": {"url": "https://dest.example/x"}})
        output = run_resolve(ResolveLinkInput(slug="Promo"), store=store)

        assert output.found
        assert output.key == "link:promo"
        assert output.link is not None
        assert output.link.slug == "promo"

    def test_not_found(self) -> None:
        output = run_resolve(ResolveLinkInput(slug="nope"), store=InMemoryLinkStore())

        assert not output.found
        assert output.key is None
