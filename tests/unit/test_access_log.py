"""
Tests for the access log component.

Test assertions:
- Recording never raises, even when the writer fails
- Entries hold only the referer host and UTM parameters
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

import pytest

from linkgate.adapters.log_access_log import LoggingAccessLog
from linkgate.components.access_log import (
    BestEffortAccessLogger,
    NullAccessLog,
    RecordAccessInput,
    build_entry,
    extract_utm,
    referer_host,
    run_record,
)

from tests.doubles import FailingAccessLog, RecordingAccessLog


class TestRefererHost:
    def test_host_only(self) -> None:
        assert referer_host("https://news.example.com/a/b?token=secret") == "news.example.com"

    @pytest.mark.parametrize("referer", [None, "", "not a url"])
    def test_missing_or_unparseable(self, referer: str | None) -> None:
        assert referer_host(referer) is None


class TestExtractUtm:
    def test_keeps_only_utm(self) -> None:
        query = [("utm_source", "tw"), ("ref", "x"), ("utm_campaign", "launch")]
        assert extract_utm(query) == {"utm_source": "tw", "utm_campaign": "launch"}

    def test_first_value_wins(self) -> None:
        assert extract_utm([("utm_source", "a"), ("utm_source", "b")]) == {"utm_source": "a"}


class TestBuildEntry:
    def test_entry_fields(self) -> None:
        now = datetime(2026, 1, 1, tzinfo=UTC)
        entry = build_entry(
            slug="promo",
            matched_key="link:promo",
            destination="https://dest.example/x",
            client_class="human",
            locale="US",
            referer="https://social.example/post/1",
            query=[("utm_medium", "social"), ("session", "abc")],
            diverted=True,
            now=now,
        )

        assert entry.slug == "promo"
        assert entry.matched_key == "link:promo"
        assert entry.referer_host == "social.example"
        assert entry.utm == {"utm_medium": "social"}
        assert entry.diverted
        assert entry.recorded_at == now

    def test_entry_has_no_client_identity(self) -> None:
        entry = build_entry(
            slug="p", matched_key="link:p", destination="https://d.example", client_class="bot"
        )
        fields = set(vars(entry))

        assert "ip" not in fields
        assert "user_agent" not in fields


class TestBestEffortAccessLogger:
    def test_forwards_to_writer(self) -> None:
        writer = RecordingAccessLog()
        entry = build_entry(
            slug="p", matched_key="link:p", destination="https://d.example", client_class="human"
        )
        BestEffortAccessLogger(writer).record(entry)

        assert writer.entries == [entry]

    def test_writer_failure_is_swallowed(self, caplog: pytest.LogCaptureFixture) -> None:
        writer = FailingAccessLog()
        entry = build_entry(
            slug="p", matched_key="link:p", destination="https://d.example", client_class="human"
        )

        with caplog.at_level(logging.ERROR):
            result = BestEffortAccessLogger(writer).record(entry)

        assert result is None
        assert writer.attempts == 1
        assert "Failed to write access log for slug=p" in caplog.text

    def test_null_writer(self) -> None:
        entry = build_entry(
            slug="p", matched_key="link:p", destination="https://d.example", client_class="human"
        )
        assert NullAccessLog().record(entry) is None


class TestLoggingAccessLog:
    def test_emits_info_line(self, caplog: pytest.LogCaptureFixture) -> None:
        entry = build_entry(
            slug="promo",
            matched_key="link:promo",
            destination="https://dest.example/x",
            client_class="bot",
        )
        with caplog.at_level(logging.INFO, logger="linkgate.access"):
            LoggingAccessLog().record(entry)

        assert "slug=promo" in caplog.text
        assert "client=bot" in caplog.text


class TestRunEntryPoint:
    def test_run_record(self) -> None:
        writer = RecordingAccessLog()
        run_record(
            RecordAccessInput(
                slug="promo",
                matched_key="link:promo",
                destination="https://dest.example/x",
                client_class="human",
                query=(("utm_source", "mail"),),
            ),
            writer=writer,
        )

        assert len(writer.entries) == 1
        assert writer.entries[0].utm == {"utm_source": "mail"}

    def test_run_record_never_raises(self) -> None:
        run_record(
            RecordAccessInput(
                slug="promo",
                matched_key="link:promo",
                destination="https://dest.example/x",
                client_class="human",
            ),
            writer=FailingAccessLog(),
        )
