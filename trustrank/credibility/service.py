"""TrustRank – Credibility Service.

This module implements :class:`CredibilityService`, which drives the
credibility lifecycle on top of :class:`CredibilityCalculator`:

- read-through lookup (cache, then store, then a default record);
- recomputation from meeting aggregates after a rating is submitted;
- inactivity decay;
- freeze and ban enforcement, including the anti-gaming counters;
- reaction to verified misconduct reports.

The service owns no storage. Every mutation is written through the
injected :class:`CredibilityStore` and invalidates the cache entry for
the affected member.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Optional

from trustrank.core.errors import InvalidRatingError
from trustrank.core.ids import normalize_user_id
from trustrank.core.logging import get_logger
from trustrank.core.time import Clock, SystemClock
from trustrank.credibility.cache import CredibilityScoreCache
from trustrank.credibility.calculator import CredibilityCalculator
from trustrank.credibility.storage import CredibilityStore
from trustrank.credibility.types import (
    CredibilityScore,
    CredibilityTier,
    MeetingRating,
    MisconductReport,
    RatingAggregate,
    ReportStatus,
)
from trustrank.monitoring.metrics import MetricsRegistry


logger = get_logger(__name__)


@dataclass
class CredibilityService:
    """Reads, recomputes and enforces member credibility scores."""

    calculator: CredibilityCalculator
    cache: CredibilityScoreCache
    store: CredibilityStore
    clock: Clock = field(default_factory=SystemClock)
    metrics: Optional[MetricsRegistry] = None

    # ========================================================================
    # Reads
    # ========================================================================

    def get_score(self, user_id: str) -> CredibilityScore:
        """Return the credibility score for ``user_id``.

        Members without a stored record get the default score; the
        default is not persisted until the first recompute. A stored
        ``tier`` that disagrees with the stored score is replaced by the
        tier the score falls in.

        Raises:
            CredibilityDecodeError: If the stored record is malformed.
        """

        cached = self.cache.get(user_id)
        if cached is not None:
            return cached

        stored = self.store.load_score(user_id)
        if stored is None:
            logger.debug("CredibilityService.get_score: no record for user_id=%s, using default", user_id)
            return CredibilityScore.new(user_id, self.clock.now())

        expected_tier = self.calculator.tier_for(stored)
        if stored.tier is not expected_tier:
            logger.warning(
                "CredibilityService.get_score: user_id=%s stored tier %s does not match score %.1f, using %s",
                user_id,
                stored.tier.value,
                stored.overall_score,
                expected_tier.value,
            )
            stored = replace(stored, tier=expected_tier)

        self.cache.set(user_id, stored)
        return stored

    # ========================================================================
    # Mutations
    # ========================================================================

    def recompute(self, user_id: str, aggregate: RatingAggregate) -> CredibilityScore:
        """Recompute fulfillment, overall score and tier from ``aggregate``."""

        current = self.get_score(user_id)
        return self._recompute(current, current, aggregate)

    def submit_rating(
        self,
        rating: MeetingRating,
        aggregate: RatingAggregate,
        reciprocal: Optional[MeetingRating] = None,
    ) -> CredibilityScore:
        """Apply a new meeting rating to the rated member.

        ``aggregate`` is the rated member's meeting history *including*
        ``rating``, as produced by the rating store. ``reciprocal`` is the
        rated member's rating of the rater for the same meeting, if one
        exists.

        Raises:
            InvalidRatingError: If the rating value, comment or reciprocal
                pairing is invalid.
        """

        self._validate_rating(rating)
        if reciprocal is not None:
            self._validate_rating(reciprocal)
            if not (
                reciprocal.meeting_id == rating.meeting_id
                and normalize_user_id(reciprocal.rater_id) == normalize_user_id(rating.rated_user_id)
                and normalize_user_id(reciprocal.rated_user_id) == normalize_user_id(rating.rater_id)
            ):
                raise InvalidRatingError(
                    f"Rating {reciprocal.id} is not the reciprocal of rating {rating.id}"
                )

        current = self.get_score(rating.rated_user_id)
        updated = current

        if not rating.gps_verified:
            updated = replace(updated, gps_anomaly_count=updated.gps_anomaly_count + 1)
            logger.info(
                "CredibilityService.submit_rating: GPS anomaly user_id=%s meeting_id=%s count=%d",
                rating.rated_user_id,
                rating.meeting_id,
                updated.gps_anomaly_count,
            )

        threshold = self.calculator.policy.mutual_high_rating_min
        if reciprocal is not None and rating.rating >= threshold and reciprocal.rating >= threshold:
            updated = replace(updated, mutual_high_rating_count=updated.mutual_high_rating_count + 1)
            logger.info(
                "CredibilityService.submit_rating: mutual high rating user_id=%s meeting_id=%s count=%d",
                rating.rated_user_id,
                rating.meeting_id,
                updated.mutual_high_rating_count,
            )

        self._count("credibility.rating_submitted")
        return self._recompute(current, updated, aggregate)

    def apply_decay(self, user_id: str) -> CredibilityScore:
        """Apply inactivity decay to ``user_id``'s score.

        Decay is always computed from the undecayed score implied by the
        current aggregates, so applying it repeatedly on the same day
        gives the same result. The record is persisted only when the
        overall score changes. Members without meeting history, or whose
        last meeting is inside the decay threshold, are left untouched.
        """

        current = self.get_score(user_id)
        if current.is_banned:
            return current

        now = self.clock.now()
        if not self.calculator.should_apply_decay(current.last_meeting_date, now):
            return current

        days = self.calculator.days_since_last_meeting(current.last_meeting_date, now)
        base = self.calculator.calculate_overall_score(current.average_rating, current.fulfillment_rate)
        decayed = self.calculator.apply_decay(base, days)

        if decayed == current.overall_score:
            return current

        updated = replace(
            current,
            overall_score=decayed,
            tier=self.calculator.tier_from_score(decayed),
            last_decay_date=now,
        )
        updated = self._enforce_policy(current, updated, now)
        logger.info(
            "CredibilityService.apply_decay: user_id=%s days=%d score %.1f -> %.1f",
            user_id,
            days,
            current.overall_score,
            updated.overall_score,
        )
        self._persist(updated)
        return updated

    def apply_verified_misconduct(self, report: MisconductReport) -> CredibilityScore:
        """React to a misconduct report that moderation has verified.

        Severe misconduct bans the reported member; lower severities
        freeze the account. Reports in any other status are ignored.
        """

        current = self.get_score(report.reported_user_id)
        if report.status is not ReportStatus.VERIFIED:
            logger.debug(
                "CredibilityService.apply_verified_misconduct: ignoring report_id=%s status=%s",
                report.id,
                report.status.value,
            )
            return current
        if current.is_banned:
            return current

        now = self.clock.now()
        if report.severity >= self.calculator.policy.ban_severity_threshold:
            updated = self._ban(current, report.misconduct_type.value)
        else:
            updated = self._freeze(current, now, reason=f"misconduct:{report.misconduct_type.name.lower()}")

        self._persist(updated)
        return updated

    # ========================================================================
    # Internals
    # ========================================================================

    def _recompute(
        self,
        previous: CredibilityScore,
        current: CredibilityScore,
        aggregate: RatingAggregate,
    ) -> CredibilityScore:
        now = self.clock.now()
        fulfillment = self.calculator.calculate_fulfillment_rate(
            aggregate.total_meetings, aggregate.total_no_shows
        )
        overall = self.calculator.calculate_overall_score(aggregate.average_rating, fulfillment)

        updated = replace(
            current,
            average_rating=aggregate.average_rating,
            fulfillment_rate=fulfillment,
            total_meetings=aggregate.total_meetings,
            total_no_shows=aggregate.total_no_shows,
            last_meeting_date=aggregate.last_meeting_date,
            overall_score=overall,
            tier=self.calculator.tier_from_score(overall),
        )
        updated = self._enforce_policy(previous, updated, now)

        logger.info(
            "CredibilityService.recompute: user_id=%s score=%.1f tier=%s",
            updated.user_id,
            updated.overall_score,
            updated.tier.value,
        )
        self._persist(updated)
        return updated

    def _enforce_policy(self, previous: CredibilityScore, score: CredibilityScore, now: datetime) -> CredibilityScore:
        """Apply ban and freeze rules to a freshly computed score.

        Only verified misconduct sets ``is_banned``. A score that falls in
        the banned tier keeps its value and tier, which already removes the
        member from rankings, and recovers with the next good recompute.
        """

        if score.is_banned:
            return replace(score, overall_score=0.0, tier=CredibilityTier.BANNED)

        if score.is_frozen and not score.is_frozen_at(now):
            score = replace(score, is_frozen=False, freeze_end_date=None)
            logger.info("CredibilityService: freeze expired user_id=%s", score.user_id)

        p = self.calculator.policy
        if score.tier is CredibilityTier.CRITICAL and previous.tier is not CredibilityTier.CRITICAL:
            score = self._freeze(score, now, reason="critical tier")
        if (
            score.gps_anomaly_count >= p.gps_anomaly_freeze_threshold
            and previous.gps_anomaly_count < p.gps_anomaly_freeze_threshold
        ):
            score = self._freeze(score, now, reason="gps anomalies")
        if (
            score.mutual_high_rating_count >= p.mutual_high_rating_freeze_threshold
            and previous.mutual_high_rating_count < p.mutual_high_rating_freeze_threshold
        ):
            score = self._freeze(score, now, reason="mutual high ratings")
        return score

    def _freeze(self, score: CredibilityScore, now: datetime, reason: str) -> CredibilityScore:
        end = now + timedelta(hours=self.calculator.policy.freeze_hours)
        if score.is_frozen_at(now):
            if score.freeze_end_date is None:
                return score
            end = max(end, score.freeze_end_date)
        logger.warning(
            "CredibilityService: freezing user_id=%s until %s reason=%s",
            score.user_id,
            end.isoformat(),
            reason,
        )
        self._count("credibility.frozen")
        return replace(score, is_frozen=True, freeze_end_date=end)

    def _ban(self, score: CredibilityScore, reason: str) -> CredibilityScore:
        logger.warning("CredibilityService: banning user_id=%s reason=%s", score.user_id, reason)
        self._count("credibility.banned")
        return replace(
            score,
            is_banned=True,
            ban_reason=reason,
            overall_score=0.0,
            tier=CredibilityTier.BANNED,
        )

    def _persist(self, score: CredibilityScore) -> None:
        self.store.save_score(score)
        self.cache.invalidate(score.user_id)

    def _validate_rating(self, rating: MeetingRating) -> None:
        if not (0.5 <= rating.rating <= 5.0) or (rating.rating * 2) != int(rating.rating * 2):
            raise InvalidRatingError(f"Rating {rating.id} has invalid value {rating.rating!r}")
        if rating.comment is not None and len(rating.comment) > self.calculator.policy.max_comment_length:
            raise InvalidRatingError(
                f"Rating {rating.id} comment exceeds {self.calculator.policy.max_comment_length} characters"
            )
        if normalize_user_id(rating.rater_id) == normalize_user_id(rating.rated_user_id):
            raise InvalidRatingError(f"Rating {rating.id} rates its own author")

    def _count(self, name: str) -> None:
        if self.metrics is not None:
            self.metrics.increment(name)
