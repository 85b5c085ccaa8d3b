"""TrustRank: Tests for the credibility score cache."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from threading import Thread

import pytest

from trustrank.credibility import CredibilityScore, CredibilityScoreCache
from trustrank.monitoring import MetricsRegistry


class _ManualClock:
    def __init__(self) -> None:
        self.current = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


class TestCredibilityScoreCache:
    def test_miss_then_hit(self) -> None:
        metrics = MetricsRegistry()
        cache = CredibilityScoreCache(clock=_ManualClock(), metrics=metrics)
        score = CredibilityScore(user_id="alice", overall_score=4.0)

        assert cache.get("alice") is None
        cache.set("alice", score)
        assert cache.get("alice") is score

        assert metrics.get("credibility_cache.miss") == 1.0
        assert metrics.get("credibility_cache.hit") == 1.0

    def test_keys_are_case_insensitive(self) -> None:
        cache = CredibilityScoreCache(clock=_ManualClock())
        score = CredibilityScore(user_id="Alice")

        cache.set("Alice", score)

        assert cache.get("alice") is score
        assert cache.get(" ALICE ") is score

    def test_entry_expires_after_ttl(self) -> None:
        clock = _ManualClock()
        metrics = MetricsRegistry()
        cache = CredibilityScoreCache(ttl_seconds=300, clock=clock, metrics=metrics)
        cache.set("bob", CredibilityScore(user_id="bob"))

        clock.advance(300)
        assert cache.get("bob") is not None

        clock.advance(1)
        assert cache.get("bob") is None
        assert len(cache) == 0
        assert metrics.get("credibility_cache.expired") == 1.0

    def test_set_refreshes_timestamp(self) -> None:
        clock = _ManualClock()
        cache = CredibilityScoreCache(ttl_seconds=10, clock=clock)
        cache.set("bob", CredibilityScore(user_id="bob", overall_score=3.0))

        clock.advance(8)
        replacement = CredibilityScore(user_id="bob", overall_score=3.5)
        cache.set("bob", replacement)
        clock.advance(8)

        assert cache.get("bob") is replacement

    def test_invalidate_and_clear_all(self) -> None:
        cache = CredibilityScoreCache(clock=_ManualClock())
        cache.set("a", CredibilityScore(user_id="a"))
        cache.set("b", CredibilityScore(user_id="b"))

        cache.invalidate("A")
        assert cache.get("a") is None
        assert len(cache) == 1

        cache.invalidate("missing")
        cache.clear_all()
        assert len(cache) == 0

    def test_rejects_non_positive_ttl(self) -> None:
        with pytest.raises(ValueError):
            CredibilityScoreCache(ttl_seconds=0)

    def test_concurrent_writers(self) -> None:
        cache = CredibilityScoreCache(clock=_ManualClock())

        def _writer(prefix: str) -> None:
            for i in range(200):
                cache.set(f"{prefix}-{i}", CredibilityScore(user_id=f"{prefix}-{i}"))

        threads = [Thread(target=_writer, args=(f"t{n}",)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(cache) == 800
        assert cache.ttl_seconds == 300.0
