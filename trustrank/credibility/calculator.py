"""TrustRank – Credibility calculator.

Pure scoring functions over explicit inputs:

- overall score = 0.7 x average rating + 0.3 x fulfillment score,
  rounded to the nearest 0.5;
- fulfillment score from a coarse 10-step lookup table;
- inactivity decay, where higher scores decay faster;
- tier lookup and tier policy effects.

There is no hidden state and no error path; callers supply valid,
non-negative inputs. All constants come from
:class:`~trustrank.credibility.policy.CredibilityPolicy`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from trustrank.core.time import whole_days_between
from trustrank.credibility.policy import DEFAULT_POLICY, CredibilityPolicy, TierPolicy
from trustrank.credibility.types import CredibilityScore, CredibilityTier


def round_to_half(value: float) -> float:
    """Round ``value`` to the nearest multiple of 0.5, halves rounding up."""

    return math.floor(value * 2.0 + 0.5) / 2.0


@dataclass(frozen=True)
class CredibilityCalculator:
    """Stateless credibility math bound to a policy."""

    policy: CredibilityPolicy = field(default=DEFAULT_POLICY)

    # ========================================================================
    # Scores
    # ========================================================================

    def fulfillment_score(self, fulfillment_rate: float) -> float:
        """Map a 0-100 fulfillment rate onto the 0.5-5.0 score table."""

        for band in self.policy.fulfillment_bands:
            if fulfillment_rate >= band.min_rate:
                return band.score
        return self.policy.fulfillment_floor_score

    def calculate_overall_score(self, average_rating: float, fulfillment_rate: float) -> float:
        """Combine average rating and fulfillment rate into the overall score."""

        p = self.policy
        raw = p.rating_weight * average_rating + p.fulfillment_weight * self.fulfillment_score(fulfillment_rate)
        return min(max(round_to_half(raw), p.min_score), p.max_score)

    @staticmethod
    def calculate_fulfillment_rate(total_meetings: int, no_shows: int) -> float:
        """Percentage of meetings attended; 100 when there is no history."""

        if total_meetings <= 0:
            return 100.0
        rate = (total_meetings - no_shows) / total_meetings * 100.0
        return max(0.0, min(100.0, rate))

    # ========================================================================
    # Decay
    # ========================================================================

    def decay_rate(self, score: float) -> float:
        """Per-day decay rate for ``score``."""

        for band in self.policy.decay_bands:
            if score >= band.min_score:
                return band.rate_per_day
        return self.policy.decay_floor_rate

    def apply_decay(self, current_score: float, days_since_last_meeting: int) -> float:
        """Return ``current_score`` after inactivity decay.

        Below the threshold the score is returned unchanged. From the
        threshold on, every day past ``threshold - 1`` costs the bracket
        rate; the result is floored at ``decay_min_score`` and rounded to
        the nearest 0.5.
        """

        threshold = self.policy.decay_threshold_days
        if days_since_last_meeting < threshold:
            return current_score

        days_over = days_since_last_meeting - (threshold - 1)
        decayed = current_score - self.decay_rate(current_score) * days_over
        return round_to_half(max(self.policy.decay_min_score, decayed))

    def days_since_last_meeting(self, last_meeting_date: Optional[datetime], now: datetime) -> int:
        """Whole days since the last meeting; 0 when there was none."""

        return whole_days_between(last_meeting_date, now)

    def should_apply_decay(self, last_meeting_date: Optional[datetime], now: datetime) -> bool:
        if last_meeting_date is None:
            return False
        return self.days_since_last_meeting(last_meeting_date, now) >= self.policy.decay_threshold_days

    def days_until_decay(self, last_meeting_date: Optional[datetime], now: datetime) -> Optional[int]:
        """Days left before decay starts, 0 once decaying, None without history."""

        if last_meeting_date is None:
            return None
        remaining = self.policy.decay_threshold_days - self.days_since_last_meeting(last_meeting_date, now)
        return max(remaining, 0)

    def is_decay_warning(self, last_meeting_date: Optional[datetime], now: datetime) -> bool:
        """True when the member is inside the pre-decay warning window."""

        if last_meeting_date is None:
            return False
        days = self.days_since_last_meeting(last_meeting_date, now)
        return self.policy.decay_warning_days <= days < self.policy.decay_threshold_days

    # ========================================================================
    # Tiers
    # ========================================================================

    def tier_from_score(self, score: float) -> CredibilityTier:
        """Return the tier whose score range contains ``score``.

        Scores outside ``[min_score, max_score]`` (and NaN) map to the
        fallback tier.
        """

        p = self.policy
        if not (p.min_score <= score <= p.max_score):
            return p.fallback_tier
        for tier_policy in p.tier_policies:
            if score >= tier_policy.min_score:
                return tier_policy.tier
        return p.fallback_tier

    def tier_for(self, score: CredibilityScore) -> CredibilityTier:
        """Return the tier a record belongs in, ignoring its stored ``tier``.

        Banned members are always in the banned tier; everyone else is
        placed by ``overall_score``.
        """

        if score.is_banned:
            return CredibilityTier.BANNED
        return self.tier_from_score(score.overall_score)

    def policy_for(self, tier: CredibilityTier) -> TierPolicy:
        for tier_policy in self.policy.tier_policies:
            if tier_policy.tier is tier:
                return tier_policy
        raise KeyError(tier)

    def matching_weight_multiplier(self, tier: CredibilityTier) -> float:
        return self.policy_for(tier).matching_weight_multiplier

    def daily_swipe_limit(self, tier: CredibilityTier) -> Optional[int]:
        return self.policy_for(tier).daily_swipe_limit

    def pro_discount(self, tier: CredibilityTier) -> float:
        return self.policy_for(tier).pro_discount
