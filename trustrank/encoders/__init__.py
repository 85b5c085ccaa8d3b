"""TrustRank – Encoders package.

This package contains the deterministic two-tower profile encoder used
to compare a requester with candidate profiles.
"""

from trustrank.encoders.two_tower import (
    FeatureSegment,
    FeatureVector,
    ScoredCandidate,
    TwoTowerEncoder,
)
