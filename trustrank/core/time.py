"""
TrustRank: Clock Utilities

This module defines the small clock abstraction used wherever TrustRank
needs "now": cache freshness checks, decay and freeze windows. Passing a
clock explicitly keeps the scoring code deterministic under test.

Key responsibilities:
- Define the :class:`Clock` protocol
- Provide the wall-clock implementation used in production
- Compute whole-day differences between timestamps

External dependencies:
- datetime: Standard library date arithmetic only

Thread safety: Thread-safe (stateless, no shared mutable state)

Author: TrustRank Team
Created: 2025-11-24
Last Modified: 2025-11-24
Status: Development
Version: v0.1.0
"""

# ============================================================================
# Imports
# ============================================================================

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Protocol

# ============================================================================
# Public API
# ============================================================================


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:  # pragma: no cover - interface
        """Return the current timezone-aware UTC time."""


@dataclass(frozen=True)
class SystemClock(Clock):
    """Wall clock returning ``datetime.now(timezone.utc)``."""

    def now(self) -> datetime:  # type: ignore[override]
        return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime.

    Naive datetimes are assumed to already be in UTC.
    """

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def whole_days_between(start: Optional[datetime], end: datetime) -> int:
    """Return the number of whole days elapsed from ``start`` to ``end``.

    Partial days are truncated. ``None`` (no previous event) and
    ``start`` later than ``end`` both yield 0.

    Args:
        start: Earlier timestamp, or None.
        end: Later timestamp.

    Returns:
        Non-negative whole-day count.
    """

    if start is None:
        return 0
    delta = ensure_utc(end) - ensure_utc(start)
    if delta.total_seconds() <= 0:
        return 0
    return delta.days
