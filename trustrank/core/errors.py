"""TrustRank – shared exception types.

Only genuinely exceptional conditions are modelled as exceptions. Unknown
vocabulary values, zero vectors and missing history are handled with
documented fallbacks and never raise.
"""

from __future__ import annotations

from typing import Optional


class TrustRankError(Exception):
    """Base class for all TrustRank errors."""


class RecordDecodeError(TrustRankError):
    """Raised when a persisted record fails schema validation.

    Attributes:
        user_id: Identifier of the user the record belongs to, when it
            could be determined from the payload.
    """

    def __init__(self, message: str, user_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.user_id = user_id


class ProfileDecodeError(RecordDecodeError):
    """Raised when a profile payload cannot be decoded."""


class CredibilityDecodeError(RecordDecodeError):
    """Raised when a credibility score payload cannot be decoded."""


class InvalidRatingError(TrustRankError):
    """Raised when a submitted meeting rating violates its value constraints."""
