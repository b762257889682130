"""
In-memory stores driven by a fake clock.
"""

from __future__ import annotations

from mgnrega_api.services.cache import TTLCache
from mgnrega_api.services.rate_limiter import FixedWindowRateLimiter


class TestTTLCache:
    def test_miss_returns_none(self, clock) -> None:
        assert TTLCache(clock=clock).get("districts") is None

    def test_hit_before_expiry(self, clock) -> None:
        cache = TTLCache(ttl=3600, clock=clock)
        cache.set("perf_PUN", {"activeWorkers": 1})
        clock.advance(3599)
        assert cache.get("perf_PUN") == {"activeWorkers": 1}

    def test_miss_after_ttl(self, clock) -> None:
        cache = TTLCache(ttl=3600, clock=clock)
        cache.set("perf_PUN", {"activeWorkers": 1})
        clock.advance(3600)
        assert cache.get("perf_PUN") is None
        assert len(cache) == 0

    def test_overwrite_restarts_ttl(self, clock) -> None:
        cache = TTLCache(ttl=10, clock=clock)
        cache.set("k", 1)
        clock.advance(8)
        cache.set("k", 2)
        clock.advance(8)
        assert cache.get("k") == 2

    def test_clear(self, clock) -> None:
        cache = TTLCache(clock=clock)
        cache.set("a", 1)
        cache.clear()
        assert cache.get("a") is None


class TestFixedWindowRateLimiter:
    def test_hundredth_allowed_hundred_first_denied(self, clock) -> None:
        limiter = FixedWindowRateLimiter(limit=100, window_seconds=60, clock=clock)
        decisions = [limiter.hit("10.0.0.1") for _ in range(100)]
        assert all(d.allowed for d in decisions)
        assert decisions[-1].remaining == 0

        denied = limiter.hit("10.0.0.1")
        assert not denied.allowed
        assert denied.reset_at == clock.now + 60

    def test_window_reset_after_elapsed(self, clock) -> None:
        limiter = FixedWindowRateLimiter(limit=100, window_seconds=60, clock=clock)
        for _ in range(101):
            limiter.hit("10.0.0.1")
        clock.advance(60)
        decision = limiter.hit("10.0.0.1")
        assert decision.allowed
        assert decision.remaining == 99

    def test_clients_are_independent(self, clock) -> None:
        limiter = FixedWindowRateLimiter(limit=2, window_seconds=60, clock=clock)
        limiter.hit("a")
        limiter.hit("a")
        assert not limiter.hit("a").allowed
        assert limiter.hit("b").allowed

    def test_window_is_fixed_not_sliding(self, clock) -> None:
        limiter = FixedWindowRateLimiter(limit=2, window_seconds=60, clock=clock)
        limiter.hit("a")
        clock.advance(59)
        limiter.hit("a")
        assert not limiter.hit("a").allowed
        clock.advance(1)
        assert limiter.hit("a").allowed

    def test_expired_windows_are_swept(self, clock) -> None:
        limiter = FixedWindowRateLimiter(limit=5, window_seconds=60, clock=clock)
        for client in ("a", "b", "c"):
            limiter.hit(client)
        assert len(limiter) == 3
        clock.advance(61)
        limiter.hit("d")
        assert len(limiter) == 1

    def test_capacity_evicts_least_recently_seen(self, clock) -> None:
        limiter = FixedWindowRateLimiter(limit=1, window_seconds=60, max_clients=2, clock=clock)
        limiter.hit("a")
        limiter.hit("b")
        limiter.hit("a")  # denied, but refreshes recency
        limiter.hit("c")  # evicts b
        assert len(limiter) == 2
        assert not limiter.hit("a").allowed
        assert limiter.hit("b").allowed
