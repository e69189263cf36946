"""Testes do cache em memória de resoluções."""

from __future__ import annotations

import pytest

from app.infra.stores.phone_resolution_cache import (
    DEFAULT_TTL_SECONDS,
    MemoryPhoneResolutionCache,
)
from tests.fakes.fake_clock import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> MemoryPhoneResolutionCache:
    return MemoryPhoneResolutionCache(ttl_seconds=60, clock=clock)


class TestMemoryPhoneResolutionCache:
    """Testes do MemoryPhoneResolutionCache."""

    def test_default_ttl_is_one_day(self) -> None:
        assert MemoryPhoneResolutionCache().ttl_seconds == DEFAULT_TTL_SECONDS == 86400

    def test_rejects_non_positive_ttl(self) -> None:
        with pytest.raises(ValueError):
            MemoryPhoneResolutionCache(ttl_seconds=0)

    def test_set_and_get(self, cache: MemoryPhoneResolutionCache, clock: FakeClock) -> None:
        entry = cache.set("11987654321", normalized="5511987654321@c.us", has_ninth_digit=True)

        assert cache.get("11987654321") == entry
        assert entry.created_at == clock.now
        assert entry.verified is False

    def test_get_missing_returns_none(self, cache: MemoryPhoneResolutionCache) -> None:
        assert cache.get("nope") is None

    def test_expired_entry_is_hidden_but_kept(
        self, cache: MemoryPhoneResolutionCache, clock: FakeClock
    ) -> None:
        """Expiração é preguiçosa: get() ignora, só sweep() remove."""
        cache.set("a", normalized="a@c.us", has_ninth_digit=False)
        clock.advance(60)

        assert cache.get("a") is None
        assert len(cache) == 1

    def test_set_overwrites_whole_entry(
        self, cache: MemoryPhoneResolutionCache, clock: FakeClock
    ) -> None:
        cache.set("a", normalized="5511987654321@c.us", has_ninth_digit=True)
        clock.advance(30)
        cache.set("a", normalized="551187654321@c.us", has_ninth_digit=False, verified=True)

        entry = cache.get("a")
        assert entry is not None
        assert entry.normalized == "551187654321@c.us"
        assert entry.has_ninth_digit is False
        assert entry.verified is True
        assert entry.created_at == clock.now

    def test_sweep(self, cache: MemoryPhoneResolutionCache, clock: FakeClock) -> None:
        cache.set("old", normalized="old@c.us", has_ninth_digit=False)
        clock.advance(45)
        cache.set("new", normalized="new@c.us", has_ninth_digit=True)
        clock.advance(20)

        assert cache.sweep() == 1
        assert cache.get("new") is not None
        assert len(cache) == 1
        assert cache.sweep() == 0

    def test_clear(self, cache: MemoryPhoneResolutionCache) -> None:
        cache.set("a", normalized="a@c.us", has_ninth_digit=False)
        cache.clear()
        assert len(cache) == 0

    def test_stats(self, cache: MemoryPhoneResolutionCache, clock: FakeClock) -> None:
        first_at = clock.now
        cache.set("a", normalized="a@c.us", has_ninth_digit=True, verified=True)
        clock.advance(61)
        cache.set("b", normalized="b@c.us", has_ninth_digit=False)

        stats = cache.stats()
        assert stats.to_dict() == {
            "total": 2,
            "with_ninth_digit": 1,
            "without_ninth_digit": 1,
            "expired": 1,
            "verified": 1,
            "oldest_entry": first_at,
        }
