"""TrustRank – Credibility policy tables.

This module defines the Pydantic models holding every tunable constant
of the credibility system: score weights, the fulfillment lookup table,
the decay rate table, tier boundaries with their policy effects, and
the freeze / ban thresholds used by the credibility service.

The defaults reproduce the product policy; callers may construct a
policy with different tables without touching the calculator.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from trustrank.credibility.types import CredibilityTier


class FulfillmentBand(BaseModel):
    """Fulfillment rates at or above ``min_rate`` map to ``score``."""

    model_config = ConfigDict(frozen=True)

    min_rate: float
    score: float


class DecayBand(BaseModel):
    """Scores at or above ``min_score`` lose ``rate_per_day`` per day."""

    model_config = ConfigDict(frozen=True)

    min_score: float
    rate_per_day: float


class TierPolicy(BaseModel):
    """Score boundary and policy effects of one credibility tier.

    Attributes:
        tier: Tier this entry describes.
        min_score: Inclusive lower score bound; the upper bound is the
            next tier's ``min_score`` (or the maximum score).
        matching_weight_multiplier: Factor applied to ranking scores.
        daily_swipe_limit: Daily swipe cap; None means unlimited.
        pro_discount: Price multiplier for the Pro subscription.
    """

    model_config = ConfigDict(frozen=True)

    tier: CredibilityTier
    min_score: float
    matching_weight_multiplier: float
    daily_swipe_limit: Optional[int] = None
    pro_discount: float = 1.0


DEFAULT_FULFILLMENT_BANDS: List[FulfillmentBand] = [
    FulfillmentBand(min_rate=95.0, score=5.0),
    FulfillmentBand(min_rate=90.0, score=4.5),
    FulfillmentBand(min_rate=85.0, score=4.0),
    FulfillmentBand(min_rate=80.0, score=3.5),
    FulfillmentBand(min_rate=70.0, score=3.0),
    FulfillmentBand(min_rate=60.0, score=2.5),
    FulfillmentBand(min_rate=50.0, score=2.0),
    FulfillmentBand(min_rate=40.0, score=1.5),
    FulfillmentBand(min_rate=30.0, score=1.0),
]

# Higher scores decay faster.
DEFAULT_DECAY_BANDS: List[DecayBand] = [
    DecayBand(min_score=4.5, rate_per_day=0.08),
    DecayBand(min_score=4.0, rate_per_day=0.06),
    DecayBand(min_score=3.5, rate_per_day=0.04),
    DecayBand(min_score=3.0, rate_per_day=0.03),
    DecayBand(min_score=2.5, rate_per_day=0.02),
]

DEFAULT_TIER_POLICIES: List[TierPolicy] = [
    TierPolicy(tier=CredibilityTier.HIGHLY_TRUSTED, min_score=4.6, matching_weight_multiplier=1.6, pro_discount=0.7),
    TierPolicy(tier=CredibilityTier.WELL_TRUSTED, min_score=4.1, matching_weight_multiplier=1.3, pro_discount=0.8),
    TierPolicy(tier=CredibilityTier.TRUSTED, min_score=3.6, matching_weight_multiplier=1.1, pro_discount=0.9),
    TierPolicy(tier=CredibilityTier.NORMAL, min_score=2.6, matching_weight_multiplier=1.0),
    TierPolicy(tier=CredibilityTier.NEEDS_IMPROVEMENT, min_score=2.1, matching_weight_multiplier=0.9),
    TierPolicy(tier=CredibilityTier.ALERT, min_score=1.6, matching_weight_multiplier=0.7, daily_swipe_limit=3),
    TierPolicy(tier=CredibilityTier.LOW_TRUST, min_score=1.1, matching_weight_multiplier=0.4, daily_swipe_limit=1),
    TierPolicy(tier=CredibilityTier.CRITICAL, min_score=0.6, matching_weight_multiplier=0.4, daily_swipe_limit=1),
    TierPolicy(tier=CredibilityTier.BANNED, min_score=0.0, matching_weight_multiplier=0.0, daily_swipe_limit=0),
]


class CredibilityPolicy(BaseModel):
    """Complete set of credibility constants.

    Attributes:
        rating_weight: Weight of the average star rating in the overall
            score.
        fulfillment_weight: Weight of the fulfillment score.
        min_score: Lowest valid score.
        max_score: Highest valid score.
        fulfillment_bands: Fulfillment lookup table, highest band first.
        fulfillment_floor_score: Score for rates below every band.
        decay_threshold_days: Days without a meeting before decay starts.
        decay_warning_days: Days without a meeting before members are
            warned about upcoming decay.
        decay_bands: Per-day decay rates, highest band first.
        decay_floor_rate: Rate for scores below every decay band.
        decay_min_score: Decay never takes a score below this value.
        tier_policies: Tier ladder, highest tier first.
        fallback_tier: Tier returned for scores outside the valid range.
        freeze_hours: Length of an automatic freeze.
        gps_anomaly_freeze_threshold: GPS anomalies that trigger a freeze.
        mutual_high_rating_freeze_threshold: Reciprocal high-rating pairs
            that trigger a freeze.
        mutual_high_rating_min: Rating at or above which a reciprocal
            pair counts as mutual high rating.
        ban_severity_threshold: Verified misconduct at or above this
            severity bans the member; lower severities freeze.
        max_comment_length: Maximum rating comment length.
    """

    model_config = ConfigDict(frozen=True)

    rating_weight: float = 0.7
    fulfillment_weight: float = 0.3
    min_score: float = 0.0
    max_score: float = 5.0

    fulfillment_bands: List[FulfillmentBand] = DEFAULT_FULFILLMENT_BANDS
    fulfillment_floor_score: float = 0.5

    decay_threshold_days: int = 15
    decay_warning_days: int = 10
    decay_bands: List[DecayBand] = DEFAULT_DECAY_BANDS
    decay_floor_rate: float = 0.01
    decay_min_score: float = 0.5

    tier_policies: List[TierPolicy] = DEFAULT_TIER_POLICIES
    fallback_tier: CredibilityTier = CredibilityTier.NORMAL

    freeze_hours: int = 72
    gps_anomaly_freeze_threshold: int = 3
    mutual_high_rating_freeze_threshold: int = 3
    mutual_high_rating_min: float = 4.5
    ban_severity_threshold: int = 4
    max_comment_length: int = 500

    @field_validator("fulfillment_bands")
    @classmethod
    def _sort_fulfillment(cls, bands: List[FulfillmentBand]) -> List[FulfillmentBand]:
        return sorted(bands, key=lambda band: band.min_rate, reverse=True)

    @field_validator("decay_bands")
    @classmethod
    def _sort_decay(cls, bands: List[DecayBand]) -> List[DecayBand]:
        return sorted(bands, key=lambda band: band.min_score, reverse=True)

    @field_validator("tier_policies")
    @classmethod
    def _check_tiers(cls, policies: List[TierPolicy]) -> List[TierPolicy]:
        tiers = [policy.tier for policy in policies]
        if len(set(tiers)) != len(tiers):
            raise ValueError("tier_policies contains duplicate tiers")
        if set(tiers) != set(CredibilityTier):
            missing = sorted(t.value for t in set(CredibilityTier) - set(tiers))
            raise ValueError(f"tier_policies is missing tiers: {missing}")
        return sorted(policies, key=lambda policy: policy.min_score, reverse=True)


DEFAULT_POLICY = CredibilityPolicy()
