"""TrustRank – Credibility score cache.

A local, time-bounded cache in front of the credibility store. Each
entry moves through ``absent -> cached -> (expired on read |
invalidated) -> absent``. Reading an entry older than the freshness
window evicts it and reports a miss so the caller recomputes from the
source of truth.

Keys are lower-cased user identifiers. A single lock serialises all
access; entries are replaced as whole ``(score, stored_at)`` pairs.
There is no cross-process coherence.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from threading import Lock
from typing import Dict, Optional

from trustrank.core.ids import normalize_user_id
from trustrank.core.logging import get_logger
from trustrank.core.time import Clock, SystemClock
from trustrank.credibility.types import CredibilityScore
from trustrank.monitoring.metrics import MetricsRegistry


logger = get_logger(__name__)

DEFAULT_TTL_SECONDS: float = 300.0


@dataclass(frozen=True)
class _CacheEntry:
    score: CredibilityScore
    stored_at: datetime


class CredibilityScoreCache:
    """Thread-safe read-through cache of :class:`CredibilityScore` records."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Optional[Clock] = None,
        metrics: Optional[MetricsRegistry] = None,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._ttl_seconds = float(ttl_seconds)
        self._clock: Clock = clock or SystemClock()
        self._metrics = metrics
        self._entries: Dict[str, _CacheEntry] = {}
        self._lock = Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def get(self, user_id: str) -> Optional[CredibilityScore]:
        """Return the cached score, or None on a miss or expiry."""

        key = normalize_user_id(user_id)
        now = self._clock.now()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._count("credibility_cache.miss")
                return None
            if (now - entry.stored_at).total_seconds() > self._ttl_seconds:
                del self._entries[key]
                self._count("credibility_cache.expired")
                logger.debug("CredibilityScoreCache.get: expired entry user_id=%s", key)
                return None
            self._count("credibility_cache.hit")
            return entry.score

    def set(self, user_id: str, score: CredibilityScore) -> None:
        key = normalize_user_id(user_id)
        entry = _CacheEntry(score=score, stored_at=self._clock.now())
        with self._lock:
            self._entries[key] = entry

    def invalidate(self, user_id: str) -> None:
        key = normalize_user_id(user_id)
        with self._lock:
            removed = self._entries.pop(key, None)
        if removed is not None:
            logger.debug("CredibilityScoreCache.invalidate: user_id=%s", key)

    def clear_all(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _count(self, name: str) -> None:
        if self._metrics is not None:
            self._metrics.increment(name)
