"""Cache freshness and dashboard load behaviour. The fetcher is mocked."""

import asyncio
import json
import os
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from models.selection import ViewMode
from ranking.cache import CacheEntry, LeaderboardCache, cache_key
from ranking.dashboard import MISSING_CREDENTIALS, Dashboard
from ranking.errors import (
    LoadInProgress,
    RefreshConfirmationRequired,
    TransportError,
    UpstreamError,
    ValidationError,
)

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


def _raw_fixture(name: str) -> dict:
    with open(os.path.join(FIXTURES_DIR, f"{name}.json")) as f:
        return json.load(f)


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


# ── LeaderboardCache ──────────────────────────────────────────────────────


class TestLeaderboardCache:
    def setup_method(self):
        self.clock = FakeClock()
        self.cache = LeaderboardCache(ttl=timedelta(minutes=15), clock=self.clock)

    def test_key_format(self):
        assert cache_key(2023, "123456") == "2023:123456"

    def test_miss(self):
        assert self.cache.get("2023:1") is None
        assert not self.cache.is_fresh(None)

    def test_put_records_clock_time(self):
        entry = self.cache.put("2023:1", {"members": {}})
        assert isinstance(entry, CacheEntry)
        assert entry.fetched_at == self.clock.now
        assert self.cache.get("2023:1") == entry

    def test_fresh_until_exactly_fifteen_minutes(self):
        entry = self.cache.put("2023:1", {"members": {}})
        self.clock.advance(15 * 60 - 1)
        assert self.cache.is_fresh(entry)
        self.clock.advance(1)
        assert not self.cache.is_fresh(entry)

    def test_put_overwrites(self):
        self.cache.put("2023:1", {"members": {}})
        self.clock.advance(60)
        entry = self.cache.put("2023:1", {"members": {}, "event": "2023"})
        assert self.cache.get("2023:1").data.event == "2023"
        assert self.cache.get("2023:1").fetched_at == entry.fetched_at
        assert len(self.cache) == 1

    def test_keys_are_independent(self):
        self.cache.put("2023:1", {"members": {}})
        self.cache.put("2022:1", {"members": {}})
        assert len(self.cache) == 2
        self.cache.clear()
        assert len(self.cache) == 0


# ── Dashboard.load ────────────────────────────────────────────────────────


class TestDashboardLoad:
    def setup_method(self):
        self.clock = FakeClock()
        self.fetcher = AsyncMock(return_value=_raw_fixture("leaderboard_2023"))
        self.dashboard = Dashboard(
            cache=LeaderboardCache(clock=self.clock),
            fetcher=self.fetcher,
        )

    def _load(self, **kwargs):
        args = {"year": "2023", "leaderboard_code": "123456", "session_token": "abc"}
        args.update(kwargs)
        return asyncio.run(self.dashboard.load(**args))

    def test_load_applies_defaults(self):
        doc = self._load()
        assert len(doc.members) == 4
        assert self.dashboard.document is doc
        selection = self.dashboard.selection
        assert (selection.year, selection.day, selection.part) == ("2023", "1", "2")
        assert selection.player_id == "101"
        assert self.dashboard.loading is False
        assert self.dashboard.error == ""

    def test_fetcher_receives_trimmed_inputs(self):
        self._load(leaderboard_code=" 123456 ", session_token=" abc\n")
        self.fetcher.assert_awaited_once_with("2023", "123456", "abc")

    def test_second_call_within_window_uses_cache(self):
        self._load()
        self.clock.advance(14 * 60)
        self._load()
        assert self.fetcher.await_count == 1

    def test_call_after_window_refetches_and_overwrites(self):
        self._load()
        first = self.dashboard.cache.get("2023:123456")
        self.clock.advance(15 * 60)
        self._load()
        assert self.fetcher.await_count == 2
        second = self.dashboard.cache.get("2023:123456")
        assert second.fetched_at == first.fetched_at + 15 * 60

    def test_different_code_is_a_separate_entry(self):
        self._load()
        self._load(leaderboard_code="999")
        assert self.fetcher.await_count == 2

    def test_force_on_fresh_entry_needs_confirmation(self):
        self._load()
        self.clock.advance(5 * 60)
        with pytest.raises(RefreshConfirmationRequired) as exc_info:
            self._load(force=True)
        assert "5 minute" in str(exc_info.value)
        assert self.fetcher.await_count == 1

        self._load(force=True, confirmed=True)
        assert self.fetcher.await_count == 2

    def test_force_on_stale_entry_needs_no_confirmation(self):
        self._load()
        self.clock.advance(20 * 60)
        self._load(force=True)
        assert self.fetcher.await_count == 2

    def test_missing_credentials_skip_network(self):
        with pytest.raises(ValidationError) as exc_info:
            self._load(leaderboard_code="   ")
        assert str(exc_info.value) == MISSING_CREDENTIALS
        assert self.dashboard.error == MISSING_CREDENTIALS

        with pytest.raises(ValidationError):
            self._load(session_token="")
        self.fetcher.assert_not_awaited()

    @pytest.mark.parametrize("year", ["2014", "3000", "twenty", ""])
    def test_invalid_year(self, year):
        with pytest.raises(ValidationError):
            self._load(year=year)
        self.fetcher.assert_not_awaited()

    def test_upstream_error_message_embeds_status(self):
        self.fetcher.side_effect = UpstreamError(401)
        with pytest.raises(UpstreamError):
            self._load()
        assert "status 401" in self.dashboard.error
        assert self.dashboard.loading is False
        assert self.dashboard.document is None
        assert self.dashboard.cache.get("2023:123456") is None

    def test_transport_error_generic_fallback(self):
        self.fetcher.side_effect = TransportError()
        with pytest.raises(TransportError):
            self._load()
        assert self.dashboard.error == "Something went wrong while loading data."

    def test_malformed_payload_is_transport_error(self):
        self.fetcher.return_value = {"members": {"1": {"name": "no id"}}}
        with pytest.raises(TransportError):
            self._load()

    def test_failed_load_can_be_retried(self):
        self.fetcher.side_effect = [UpstreamError(500), _raw_fixture("leaderboard_2023")]
        with pytest.raises(UpstreamError):
            self._load()
        self._load()
        assert self.dashboard.error == ""
        assert self.dashboard.document is not None

    def test_reload_keeps_view_mode(self):
        self.dashboard.selection.view = ViewMode.PLAYER
        self._load()
        assert self.dashboard.selection.view == ViewMode.PLAYER

    def test_loading_flag_set_while_fetching(self):
        seen = []

        async def fetcher(year, code, token):
            seen.append(self.dashboard.loading)
            return _raw_fixture("leaderboard_2023")

        self.dashboard.fetcher = fetcher
        self._load()
        assert seen == [True]
        assert self.dashboard.loading is False

    def test_load_rejected_while_fetch_pending(self):
        nested = []

        async def fetcher(year, code, token):
            with pytest.raises(LoadInProgress):
                await self.dashboard.load("2023", "999", "abc")
            nested.append(True)
            return _raw_fixture("leaderboard_2023")

        self.dashboard.fetcher = fetcher
        self._load()
        assert nested == [True]
        assert self.dashboard.cache.get("2023:999") is None
        assert self.dashboard.document is not None
