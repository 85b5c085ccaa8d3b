"""TrustRank – In-process metrics.

A small counter registry used by the score cache and the ranking
engine. Values live in memory only; a real metrics sink can be plugged
in later by reading :meth:`MetricsRegistry.snapshot` without changing
call sites.

Registries are ordinary objects passed into the components that emit
metrics, so tests can inspect their own registry in isolation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from typing import Dict, Mapping, Optional, Tuple

from trustrank.core.logging import get_logger


logger = get_logger(__name__)

TagKey = Tuple[Tuple[str, str], ...]


def _normalise_tags(tags: Optional[Mapping[str, str]]) -> TagKey:
    if not tags:
        return ()
    return tuple(sorted((str(k), str(v)) for k, v in tags.items()))


@dataclass
class MetricsRegistry:
    """Thread-safe counter registry keyed by (name, tags)."""

    _counters: Dict[Tuple[str, TagKey], float] = field(default_factory=dict)
    _lock: Lock = field(default_factory=Lock, repr=False)

    def increment(self, name: str, value: float = 1.0, tags: Optional[Mapping[str, str]] = None) -> None:
        key = (name, _normalise_tags(tags))
        with self._lock:
            self._counters[key] = self._counters.get(key, 0.0) + float(value)
        logger.debug("metric incremented name=%s value=%s tags=%s", name, value, dict(tags or {}))

    def get(self, name: str, tags: Optional[Mapping[str, str]] = None) -> float:
        """Return the current value of a counter (0.0 if never incremented)."""

        with self._lock:
            return self._counters.get((name, _normalise_tags(tags)), 0.0)

    def snapshot(self, prefix: Optional[str] = None) -> Dict[str, float]:
        """Return counters summed over tags, optionally filtered by prefix."""

        with self._lock:
            items = list(self._counters.items())

        totals: Dict[str, float] = {}
        for (name, _tags), value in items:
            if prefix is not None and not name.startswith(prefix):
                continue
            totals[name] = totals.get(name, 0.0) + value
        return totals

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
