"""TrustRank – Credibility subsystem types.

This module defines the enums and immutable records used by the
credibility calculator, cache and service. Records are frozen
dataclasses; every state change produces a new instance via
:func:`dataclasses.replace`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from trustrank.core.time import ensure_utc


DEFAULT_OVERALL_SCORE: float = 3.0


class CredibilityTier(str, Enum):
    """Discrete trust bracket, ordered from most to least trusted.

    The enum value is the label used on the wire and in the UI.
    """

    HIGHLY_TRUSTED = "Highly Trusted"
    WELL_TRUSTED = "Well Trusted"
    TRUSTED = "Trusted"
    NORMAL = "Normal"
    NEEDS_IMPROVEMENT = "Needs Improvement"
    ALERT = "Alert"
    LOW_TRUST = "Low Trust"
    CRITICAL = "Critical"
    BANNED = "Banned"


class RatingTagCategory(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class RatingTag(str, Enum):
    """Qualitative tags a member can attach to a meeting rating."""

    PROFESSIONAL_HELPFUL = "Professional and helpful"
    FRIENDLY_RESPECTFUL = "Friendly and respectful"
    ON_TIME = "On time"
    STAY_IN_TOUCH = "Will stay in touch"

    CONVERSATION_MISMATCH = "Conversation didn't fully align"
    LIMITED_SHARING = "Limited information shared"
    BRIEF_MEETING = "Brief meeting"

    LATE_RESCHEDULED = "Late or rescheduled last-minute"
    UNFOCUSED_DISENGAGED = "Unfocused or disengaged"
    NOT_RESPECTFUL = "Not respectful of the conversation flow"

    @property
    def category(self) -> RatingTagCategory:
        return _TAG_CATEGORIES[self]


_TAG_CATEGORIES = {
    RatingTag.PROFESSIONAL_HELPFUL: RatingTagCategory.POSITIVE,
    RatingTag.FRIENDLY_RESPECTFUL: RatingTagCategory.POSITIVE,
    RatingTag.ON_TIME: RatingTagCategory.POSITIVE,
    RatingTag.STAY_IN_TOUCH: RatingTagCategory.POSITIVE,
    RatingTag.CONVERSATION_MISMATCH: RatingTagCategory.NEUTRAL,
    RatingTag.LIMITED_SHARING: RatingTagCategory.NEUTRAL,
    RatingTag.BRIEF_MEETING: RatingTagCategory.NEUTRAL,
    RatingTag.LATE_RESCHEDULED: RatingTagCategory.NEGATIVE,
    RatingTag.UNFOCUSED_DISENGAGED: RatingTagCategory.NEGATIVE,
    RatingTag.NOT_RESPECTFUL: RatingTagCategory.NEGATIVE,
}


class MisconductType(str, Enum):
    """Misconduct categories with a fixed severity weight."""

    VIOLENCE = "Violence, threats, or intimidation"
    SEXUAL_HARASSMENT = "Sexual harassment or unwanted physical contact"
    STALKING = "Stalking or invasion of privacy"
    FRAUD = "Fraud, impersonation, or coercive sales"
    OTHER = "Other serious misconduct"

    @property
    def severity(self) -> int:
        return _MISCONDUCT_SEVERITY[self]


_MISCONDUCT_SEVERITY = {
    MisconductType.VIOLENCE: 5,
    MisconductType.SEXUAL_HARASSMENT: 5,
    MisconductType.STALKING: 4,
    MisconductType.FRAUD: 3,
    MisconductType.OTHER: 2,
}


class ReportStatus(str, Enum):
    """Moderation status of a misconduct report."""

    PENDING = "Pending Review"
    UNDER_INVESTIGATION = "Under Investigation"
    VERIFIED = "Verified - Action Taken"
    REJECTED = "Not Verified"
    DISMISSED = "Dismissed"


@dataclass(frozen=True)
class CredibilityScore:
    """Per-member credibility state.

    Attributes:
        user_id: Member identifier.
        overall_score: Final score, a multiple of 0.5 in [0, 5].
        average_rating: Mean star rating received, in [0, 5].
        fulfillment_rate: Percentage of meetings attended, in [0, 100].
        total_meetings: Number of scheduled meetings.
        total_no_shows: Number of meetings the member missed.
        last_meeting_date: Time of the most recent meeting, if any.
        tier: Tier whose score range contains ``overall_score``.
        is_frozen: Whether matching is suspended.
        freeze_end_date: When the freeze lifts; None means indefinite.
        is_banned: Whether the member is permanently excluded.
        ban_reason: Human-readable reason for the ban.
        gps_anomaly_count: Ratings received without GPS verification.
        mutual_high_rating_count: Reciprocal high-rating pairs detected.
        last_decay_date: When decay was last evaluated.
    """

    user_id: str
    overall_score: float = DEFAULT_OVERALL_SCORE
    average_rating: float = DEFAULT_OVERALL_SCORE
    fulfillment_rate: float = 100.0
    total_meetings: int = 0
    total_no_shows: int = 0
    last_meeting_date: Optional[datetime] = None
    tier: CredibilityTier = CredibilityTier.NORMAL
    is_frozen: bool = False
    freeze_end_date: Optional[datetime] = None
    is_banned: bool = False
    ban_reason: Optional[str] = None
    gps_anomaly_count: int = 0
    mutual_high_rating_count: int = 0
    last_decay_date: Optional[datetime] = None

    @classmethod
    def new(cls, user_id: str, now: Optional[datetime] = None) -> "CredibilityScore":
        """Default record for a member with no meeting history."""

        return cls(user_id=user_id, last_decay_date=now)

    def is_frozen_at(self, now: datetime) -> bool:
        """Return True if the account is frozen at ``now``.

        A freeze without an end date never lifts on its own.
        """

        if not self.is_frozen:
            return False
        if self.freeze_end_date is None:
            return True
        return ensure_utc(self.freeze_end_date) > ensure_utc(now)


@dataclass(frozen=True)
class MeetingRating:
    """One member's rating of another after a meeting."""

    id: str
    meeting_id: str
    rater_id: str
    rated_user_id: str
    rating: float
    tags: Tuple[RatingTag, ...]
    timestamp: datetime
    gps_verified: bool
    meeting_duration_seconds: int
    comment: Optional[str] = None

    @property
    def negative_tag_count(self) -> int:
        return sum(1 for tag in self.tags if tag.category is RatingTagCategory.NEGATIVE)


@dataclass(frozen=True)
class MisconductReport:
    """Complaint raised against a member after a meeting."""

    id: str
    reporter_id: str
    reported_user_id: str
    misconduct_type: MisconductType
    description: str
    timestamp: datetime
    meeting_id: Optional[str] = None
    location: Optional[str] = None
    evidence: Tuple[str, ...] = ()
    needs_follow_up: bool = False
    status: ReportStatus = ReportStatus.PENDING
    review_notes: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None

    @property
    def severity(self) -> int:
        return self.misconduct_type.severity


@dataclass(frozen=True)
class RatingAggregate:
    """Meeting history aggregates computed by the external rating store."""

    total_meetings: int
    total_no_shows: int
    average_rating: float
    last_meeting_date: Optional[datetime] = None
