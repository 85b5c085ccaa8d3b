"""TrustRank: Tests for the credibility calculator.

These tests pin the scoring tables: overall score, fulfillment lookup,
inactivity decay and the tier ladder with its policy effects.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from trustrank.credibility import (
    CredibilityCalculator,
    CredibilityPolicy,
    CredibilityScore,
    CredibilityTier,
    round_to_half,
)
from trustrank.credibility.policy import DEFAULT_TIER_POLICIES


NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class TestRoundToHalf:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0.15, 0.0), (0.25, 0.5), (2.24, 2.0), (2.25, 2.5), (4.74, 4.5), (4.75, 5.0)],
    )
    def test_rounding(self, value: float, expected: float) -> None:
        assert round_to_half(value) == expected


class TestOverallScore:
    def test_perfect_record(self) -> None:
        assert CredibilityCalculator().calculate_overall_score(5.0, 100.0) == 5.0

    def test_empty_record(self) -> None:
        # 0.7 * 0 + 0.3 * 0.5 = 0.15, which rounds down to 0.0.
        assert CredibilityCalculator().calculate_overall_score(0.0, 0.0) == 0.0

    def test_weighted_combination(self) -> None:
        # 0.7 * 4.0 + 0.3 * 4.5 = 4.15
        assert CredibilityCalculator().calculate_overall_score(4.0, 92.0) == 4.0

    def test_result_is_multiple_of_half(self) -> None:
        calculator = CredibilityCalculator()
        for avg in (0.5, 1.3, 2.7, 3.9, 4.4):
            for rate in (0.0, 45.0, 72.0, 88.0, 100.0):
                score = calculator.calculate_overall_score(avg, rate)
                assert 0.0 <= score <= 5.0
                assert score * 2 == int(score * 2)


class TestFulfillment:
    @pytest.mark.parametrize(
        ("rate", "expected"),
        [(120.0, 5.0), (95.0, 5.0), (94.9, 4.5), (85.0, 4.0), (70.0, 3.0), (30.0, 1.0), (29.9, 0.5), (0.0, 0.5)],
    )
    def test_fulfillment_score_table(self, rate: float, expected: float) -> None:
        assert CredibilityCalculator().fulfillment_score(rate) == expected

    def test_fulfillment_rate(self) -> None:
        calc = CredibilityCalculator
        assert calc.calculate_fulfillment_rate(0, 0) == 100.0
        assert calc.calculate_fulfillment_rate(10, 2) == pytest.approx(80.0)
        assert calc.calculate_fulfillment_rate(5, 9) == 0.0


class TestDecay:
    def test_no_decay_below_threshold(self) -> None:
        calculator = CredibilityCalculator()
        assert calculator.apply_decay(4.0, 0) == 4.0
        assert calculator.apply_decay(4.0, 14) == 4.0

    def test_higher_scores_decay_faster(self) -> None:
        calculator = CredibilityCalculator()

        # 5.0 - 0.08 * 6 = 4.52 -> 4.5
        assert calculator.apply_decay(5.0, 20) == 4.5
        # 2.0 - 0.01 * 6 = 1.94 -> 2.0
        assert calculator.apply_decay(2.0, 20) == 2.0

    def test_decay_is_floored(self) -> None:
        assert CredibilityCalculator().apply_decay(1.0, 400) == 0.5

    def test_decay_rate_brackets(self) -> None:
        calculator = CredibilityCalculator()
        assert calculator.decay_rate(4.5) == 0.08
        assert calculator.decay_rate(4.0) == 0.06
        assert calculator.decay_rate(2.5) == 0.02
        assert calculator.decay_rate(1.0) == 0.01

    def test_custom_threshold(self) -> None:
        calculator = CredibilityCalculator(policy=CredibilityPolicy(decay_threshold_days=5))
        # days over = 10 - 4 = 6; 4.0 - 0.06 * 6 = 3.64 -> 3.5
        assert calculator.apply_decay(4.0, 10) == 3.5

    def test_decay_window_helpers(self) -> None:
        calculator = CredibilityCalculator()

        assert calculator.days_until_decay(None, NOW) is None
        assert calculator.days_until_decay(NOW - timedelta(days=10), NOW) == 5
        assert calculator.days_until_decay(NOW - timedelta(days=30), NOW) == 0

        assert calculator.should_apply_decay(NOW - timedelta(days=15), NOW)
        assert not calculator.should_apply_decay(NOW - timedelta(days=14), NOW)
        assert not calculator.should_apply_decay(None, NOW)

        assert calculator.is_decay_warning(NOW - timedelta(days=10), NOW)
        assert not calculator.is_decay_warning(NOW - timedelta(days=9), NOW)
        assert not calculator.is_decay_warning(NOW - timedelta(days=15), NOW)

        assert calculator.days_since_last_meeting(None, NOW) == 0


class TestTiers:
    @pytest.mark.parametrize(
        ("score", "tier"),
        [
            (5.0, CredibilityTier.HIGHLY_TRUSTED),
            (4.6, CredibilityTier.HIGHLY_TRUSTED),
            (4.599999, CredibilityTier.WELL_TRUSTED),
            (4.1, CredibilityTier.WELL_TRUSTED),
            (3.6, CredibilityTier.TRUSTED),
            (3.0, CredibilityTier.NORMAL),
            (2.599999, CredibilityTier.NEEDS_IMPROVEMENT),
            (2.0, CredibilityTier.ALERT),
            (1.5, CredibilityTier.LOW_TRUST),
            (1.0, CredibilityTier.CRITICAL),
            (0.6, CredibilityTier.CRITICAL),
            (0.5, CredibilityTier.BANNED),
            (0.0, CredibilityTier.BANNED),
        ],
    )
    def test_tier_boundaries(self, score: float, tier: CredibilityTier) -> None:
        assert CredibilityCalculator().tier_from_score(score) is tier

    @pytest.mark.parametrize("score", [-0.1, 5.1, math.nan])
    def test_out_of_range_is_normal(self, score: float) -> None:
        assert CredibilityCalculator().tier_from_score(score) is CredibilityTier.NORMAL

    def test_tiers_are_total_and_monotone(self) -> None:
        calculator = CredibilityCalculator()
        order = list(CredibilityTier)
        previous_index = len(order) - 1

        for step in range(0, 501):
            tier = calculator.tier_from_score(step / 100.0)
            index = order.index(tier)
            assert index <= previous_index
            previous_index = index

    def test_tier_for_ignores_stored_tier(self) -> None:
        calculator = CredibilityCalculator()
        stale = CredibilityScore(user_id="u", overall_score=0.5, tier=CredibilityTier.NORMAL)
        banned = CredibilityScore(user_id="u", overall_score=4.0, tier=CredibilityTier.TRUSTED, is_banned=True)

        assert calculator.tier_for(stale) is CredibilityTier.BANNED
        assert calculator.tier_for(banned) is CredibilityTier.BANNED
        assert calculator.tier_for(CredibilityScore(user_id="u")) is CredibilityTier.NORMAL

    def test_policy_effects(self) -> None:
        calculator = CredibilityCalculator()

        assert calculator.matching_weight_multiplier(CredibilityTier.HIGHLY_TRUSTED) == 1.6
        assert calculator.matching_weight_multiplier(CredibilityTier.NORMAL) == 1.0
        assert calculator.matching_weight_multiplier(CredibilityTier.BANNED) == 0.0
        assert calculator.daily_swipe_limit(CredibilityTier.NORMAL) is None
        assert calculator.daily_swipe_limit(CredibilityTier.ALERT) == 3
        assert calculator.daily_swipe_limit(CredibilityTier.BANNED) == 0
        assert calculator.pro_discount(CredibilityTier.HIGHLY_TRUSTED) == 0.7
        assert calculator.pro_discount(CredibilityTier.ALERT) == 1.0


class TestPolicyValidation:
    def test_missing_tier_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CredibilityPolicy(tier_policies=DEFAULT_TIER_POLICIES[:-1])

    def test_tier_policies_are_sorted(self) -> None:
        policy = CredibilityPolicy(tier_policies=list(reversed(DEFAULT_TIER_POLICIES)))
        assert policy.tier_policies[0].tier is CredibilityTier.HIGHLY_TRUSTED
