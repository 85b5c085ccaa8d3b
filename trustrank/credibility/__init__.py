"""TrustRank – Credibility subsystem package.

This package contains the credibility tier model, the scoring
calculator and its policy tables, the score cache, the wire codec and
store interface, and the :class:`CredibilityService` lifecycle driver.
"""

from trustrank.credibility.types import (
    DEFAULT_OVERALL_SCORE,
    CredibilityScore,
    CredibilityTier,
    MeetingRating,
    MisconductReport,
    MisconductType,
    RatingAggregate,
    RatingTag,
    RatingTagCategory,
    ReportStatus,
)
from trustrank.credibility.policy import (
    DEFAULT_POLICY,
    CredibilityPolicy,
    DecayBand,
    FulfillmentBand,
    TierPolicy,
)
from trustrank.credibility.calculator import CredibilityCalculator, round_to_half
from trustrank.credibility.cache import CredibilityScoreCache
from trustrank.credibility.codec import (
    decode_credibility_score,
    decode_meeting_rating,
    decode_misconduct_report,
    encode_credibility_score,
    encode_meeting_rating,
)
from trustrank.credibility.storage import CredibilityStore, InMemoryCredibilityStore
from trustrank.credibility.service import CredibilityService
