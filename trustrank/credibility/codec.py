"""TrustRank – Credibility wire codec.

Persisted credibility scores, meeting ratings and misconduct reports use
snake_case field names. This module validates those payloads once, at
the store boundary, with Pydantic models and converts them to the
immutable domain records in :mod:`trustrank.credibility.types`.

One decoding rule per field type:

- scores and ratings are decimal numbers;
- counts and ``meeting_duration`` are integers (seconds for duration);
- timestamps are ISO-8601 strings or datetimes, naive values read as UTC;
- enums are decoded from their label (e.g. ``"Highly Trusted"``).

A payload that fails validation raises
:class:`~trustrank.core.errors.CredibilityDecodeError`; callers decide
whether to fall back to a default score or drop the affected candidate.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from trustrank.core.errors import CredibilityDecodeError, RecordDecodeError
from trustrank.core.time import ensure_utc
from trustrank.core.types import Payload
from trustrank.credibility.policy import DEFAULT_POLICY
from trustrank.credibility.types import (
    CredibilityScore,
    CredibilityTier,
    MeetingRating,
    MisconductReport,
    MisconductType,
    RatingTag,
    ReportStatus,
)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    return ensure_utc(value) if value is not None else None


class CredibilityScoreRecord(BaseModel):
    """Wire schema for a persisted credibility score."""

    model_config = ConfigDict(extra="ignore")

    user_id: str
    overall_score: float = Field(ge=0.0, le=5.0, multiple_of=0.5)
    average_rating: float = Field(ge=0.0, le=5.0)
    fulfillment_rate: float = Field(ge=0.0, le=100.0)
    total_meetings: int = Field(ge=0)
    total_no_shows: int = Field(ge=0)
    last_meeting_date: Optional[datetime] = None
    tier: CredibilityTier
    is_frozen: bool = False
    freeze_end_date: Optional[datetime] = None
    is_banned: bool = False
    ban_reason: Optional[str] = None
    gps_anomaly_count: int = Field(default=0, ge=0)
    mutual_high_rating_count: int = Field(default=0, ge=0)
    last_decay_date: Optional[datetime] = None

    @model_validator(mode="after")
    def _banned_tier(self) -> "CredibilityScoreRecord":
        # Score ranges depend on the configured policy and are checked by
        # the service; a ban maps to the banned tier under every policy.
        if self.is_banned and self.tier is not CredibilityTier.BANNED:
            self.tier = CredibilityTier.BANNED
        return self


class MeetingRatingRecord(BaseModel):
    """Wire schema for a meeting rating."""

    model_config = ConfigDict(extra="ignore")

    id: str
    meeting_id: str
    rater_id: str
    rated_user_id: str
    rating: float = Field(ge=0.5, le=5.0, multiple_of=0.5)
    tags: List[RatingTag] = Field(default_factory=list)
    comment: Optional[str] = Field(default=None, max_length=DEFAULT_POLICY.max_comment_length)
    timestamp: datetime
    gps_verified: bool = False
    meeting_duration: int = Field(ge=0)

    @field_validator("tags", mode="before")
    @classmethod
    def _null_tags(cls, value: Any) -> Any:
        return [] if value is None else value


class MisconductReportRecord(BaseModel):
    """Wire schema for a misconduct report."""

    model_config = ConfigDict(extra="ignore")

    id: str
    reporter_id: str
    reported_user_id: str
    meeting_id: Optional[str] = None
    misconduct_type: MisconductType
    description: str
    location: Optional[str] = None
    evidence: Optional[List[str]] = None
    needs_follow_up: bool = False
    timestamp: datetime
    status: ReportStatus = ReportStatus.PENDING
    review_notes: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None


def _validate(model: type[BaseModel], payload: Mapping[str, Any], kind: str, error_cls: type[RecordDecodeError]) -> Any:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        user_id = payload.get("user_id") if isinstance(payload, Mapping) else None
        raise error_cls(
            f"Invalid {kind} payload for user_id={user_id!r}: {exc.error_count()} error(s)",
            user_id=str(user_id) if user_id is not None else None,
        ) from exc


# ============================================================================
# Credibility scores
# ============================================================================


def decode_credibility_score(payload: Mapping[str, Any]) -> CredibilityScore:
    """Decode a persisted credibility score.

    Raises:
        CredibilityDecodeError: If the payload does not match the schema.
    """

    record: CredibilityScoreRecord = _validate(
        CredibilityScoreRecord, payload, "credibility score", CredibilityDecodeError
    )
    return CredibilityScore(
        user_id=record.user_id,
        overall_score=record.overall_score,
        average_rating=record.average_rating,
        fulfillment_rate=record.fulfillment_rate,
        total_meetings=record.total_meetings,
        total_no_shows=record.total_no_shows,
        last_meeting_date=_as_utc(record.last_meeting_date),
        tier=record.tier,
        is_frozen=record.is_frozen,
        freeze_end_date=_as_utc(record.freeze_end_date),
        is_banned=record.is_banned,
        ban_reason=record.ban_reason,
        gps_anomaly_count=record.gps_anomaly_count,
        mutual_high_rating_count=record.mutual_high_rating_count,
        last_decay_date=_as_utc(record.last_decay_date),
    )


def encode_credibility_score(score: CredibilityScore) -> Payload:
    """Encode a credibility score into its JSON-compatible wire payload."""

    record = CredibilityScoreRecord(
        user_id=score.user_id,
        overall_score=score.overall_score,
        average_rating=score.average_rating,
        fulfillment_rate=score.fulfillment_rate,
        total_meetings=score.total_meetings,
        total_no_shows=score.total_no_shows,
        last_meeting_date=score.last_meeting_date,
        tier=score.tier,
        is_frozen=score.is_frozen,
        freeze_end_date=score.freeze_end_date,
        is_banned=score.is_banned,
        ban_reason=score.ban_reason,
        gps_anomaly_count=score.gps_anomaly_count,
        mutual_high_rating_count=score.mutual_high_rating_count,
        last_decay_date=score.last_decay_date,
    )
    return record.model_dump(mode="json")


# ============================================================================
# Meeting ratings
# ============================================================================


def decode_meeting_rating(payload: Mapping[str, Any]) -> MeetingRating:
    """Decode a meeting rating.

    Raises:
        RecordDecodeError: If the payload does not match the schema.
    """

    record: MeetingRatingRecord = _validate(MeetingRatingRecord, payload, "meeting rating", RecordDecodeError)
    return MeetingRating(
        id=record.id,
        meeting_id=record.meeting_id,
        rater_id=record.rater_id,
        rated_user_id=record.rated_user_id,
        rating=record.rating,
        tags=tuple(record.tags),
        comment=record.comment,
        timestamp=ensure_utc(record.timestamp),
        gps_verified=record.gps_verified,
        meeting_duration_seconds=record.meeting_duration,
    )


def encode_meeting_rating(rating: MeetingRating) -> Payload:
    record = MeetingRatingRecord(
        id=rating.id,
        meeting_id=rating.meeting_id,
        rater_id=rating.rater_id,
        rated_user_id=rating.rated_user_id,
        rating=rating.rating,
        tags=list(rating.tags),
        comment=rating.comment,
        timestamp=rating.timestamp,
        gps_verified=rating.gps_verified,
        meeting_duration=rating.meeting_duration_seconds,
    )
    return record.model_dump(mode="json")


# ============================================================================
# Misconduct reports
# ============================================================================


def decode_misconduct_report(payload: Mapping[str, Any]) -> MisconductReport:
    """Decode a misconduct report.

    Raises:
        RecordDecodeError: If the payload does not match the schema.
    """

    record: MisconductReportRecord = _validate(
        MisconductReportRecord, payload, "misconduct report", RecordDecodeError
    )
    return MisconductReport(
        id=record.id,
        reporter_id=record.reporter_id,
        reported_user_id=record.reported_user_id,
        meeting_id=record.meeting_id,
        misconduct_type=record.misconduct_type,
        description=record.description,
        location=record.location,
        evidence=tuple(record.evidence or ()),
        needs_follow_up=record.needs_follow_up,
        timestamp=ensure_utc(record.timestamp),
        status=record.status,
        review_notes=record.review_notes,
        reviewed_at=_as_utc(record.reviewed_at),
        reviewed_by=record.reviewed_by,
    )
