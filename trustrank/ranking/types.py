"""TrustRank – Ranking types."""

from __future__ import annotations

from dataclasses import dataclass

from trustrank.concepts.types import ConceptTagSet
from trustrank.credibility.types import CredibilityTier


@dataclass(frozen=True)
class RankedCandidate:
    """One candidate in a ranked result list.

    Attributes:
        user_id: Candidate identifier.
        score: Final ranking score, ``(similarity + concept_bonus) *
            multiplier``.
        similarity: Embedding cosine similarity to the requester.
        concept_bonus: Bonus from concept tags shared with the query (or
            with the requester when no query concepts were found).
        multiplier: Tier matching-weight multiplier applied.
        tier: Candidate's credibility tier.
        concept_tags: Candidate's concept tags.
    """

    user_id: str
    score: float
    similarity: float
    concept_bonus: float
    multiplier: float
    tier: CredibilityTier
    concept_tags: ConceptTagSet
