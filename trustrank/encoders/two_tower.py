"""TrustRank – Two-tower profile encoder.

This module maps profiles into a shared vector space so that a
requester and a candidate can be compared with cosine similarity. There
is no learned model here: the encoder is a fixed, deterministic scheme.

1. ``encode`` builds a sparse feature vector by concatenating, in a fixed
   order, one-hot segments (intention, experience level, career stage,
   industry), multi-hot segments (skills, hobbies, values, skills to
   learn, skills to teach) and three scalars (normalised years of
   experience, clamped profile completion, verified flag). Non-empty
   multi-hot segments are normalised to sum to 1 so long tag lists do
   not dominate similarity.
2. ``embed`` projects the feature vector into ``embedding_dim`` buckets
   (feature ``i`` goes to bucket ``i mod embedding_dim``; collisions are
   accepted) and L2-normalises.
3. ``similarity`` is cosine similarity between embeddings.

All methods are pure and safe to call from multiple threads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from trustrank.core.logging import get_logger
from trustrank.core.types import FloatArray
from trustrank.profiles.types import Profile
from trustrank.profiles.vocabulary import DEFAULT_VOCABULARY, FeatureVocabulary


logger = get_logger(__name__)

NORM_EPSILON: float = 1e-10


@dataclass(frozen=True)
class FeatureSegment:
    """Location of one named segment inside a feature vector."""

    name: str
    start: int
    stop: int

    @property
    def size(self) -> int:
        return self.stop - self.start


@dataclass(frozen=True, eq=False)
class FeatureVector:
    """Encoded profile features.

    Attributes:
        values: Dense float64 vector of length ``vocabulary.feature_dimension``.
        segments: Segment layout in encoding order.
    """

    values: FloatArray
    segments: Tuple[FeatureSegment, ...]

    def __len__(self) -> int:
        return int(self.values.shape[0])

    def segment(self, name: str) -> FloatArray:
        """Return the slice of ``values`` belonging to segment ``name``."""

        for seg in self.segments:
            if seg.name == name:
                return self.values[seg.start : seg.stop]
        raise KeyError(name)


@dataclass(frozen=True)
class ScoredCandidate:
    """Candidate identifier paired with its similarity to a query."""

    candidate_id: str
    score: float


@dataclass(frozen=True)
class TwoTowerEncoder:
    """Deterministic profile encoder and similarity scorer.

    Attributes:
        vocabulary: Feature vocabulary defining the one-hot / multi-hot
            layout.
        embedding_dim: Number of hash buckets in an embedding.
        years_experience_cap: Divisor for years of experience.
    """

    vocabulary: FeatureVocabulary = field(default=DEFAULT_VOCABULARY)
    embedding_dim: int = 64
    years_experience_cap: float = 50.0

    def __post_init__(self) -> None:
        if self.embedding_dim <= 0:
            raise ValueError("embedding_dim must be positive")
        if self.years_experience_cap <= 0:
            raise ValueError("years_experience_cap must be positive")

    # ========================================================================
    # Feature encoding
    # ========================================================================

    @property
    def feature_dimension(self) -> int:
        return self.vocabulary.feature_dimension

    def encode(self, profile: Profile) -> FeatureVector:
        """Encode ``profile`` into a fixed-length :class:`FeatureVector`."""

        vocab = self.vocabulary
        parts: List[FloatArray] = []
        segments: List[FeatureSegment] = []

        def _append(name: str, part: FloatArray) -> None:
            start = segments[-1].stop if segments else 0
            segments.append(FeatureSegment(name=name, start=start, stop=start + part.shape[0]))
            parts.append(part)

        _append("intention", _one_hot(profile.intention, vocab.intentions, "intention"))
        _append(
            "experience_level",
            _one_hot(profile.experience_level, vocab.experience_levels, "experience_level"),
        )
        _append("career_stage", _one_hot(profile.career_stage, vocab.career_stages, "career_stage"))
        _append("industry", _one_hot(profile.industry, vocab.industries, "industry"))
        _append("skills", _multi_hot(profile.skills, vocab.skills, "skills"))
        _append("hobbies", _multi_hot(profile.hobbies, vocab.hobbies, "hobbies"))
        _append("values", _multi_hot(profile.values, vocab.values, "values"))
        _append("skills_to_learn", _multi_hot(profile.skills_to_learn, vocab.skills, "skills_to_learn"))
        _append("skills_to_teach", _multi_hot(profile.skills_to_teach, vocab.skills, "skills_to_teach"))

        years = max(float(profile.years_of_experience), 0.0) / self.years_experience_cap
        completion = min(max(float(profile.profile_completion), 0.0), 1.0)
        verified = 1.0 if profile.is_verified else 0.0
        _append("scalars", np.array([years, completion, verified], dtype=np.float64))

        values = np.concatenate(parts)
        return FeatureVector(values=values, segments=tuple(segments))

    # ========================================================================
    # Projection and similarity
    # ========================================================================

    def embed(self, vector: FeatureVector | FloatArray) -> FloatArray:
        """Project a feature vector into an L2-normalised embedding.

        If the projected norm is below ``1e-10`` the unnormalised (zero)
        vector is returned.
        """

        values = vector.values if isinstance(vector, FeatureVector) else np.asarray(vector, dtype=np.float64)
        buckets = np.arange(values.shape[0]) % self.embedding_dim
        embedding = np.bincount(buckets, weights=values, minlength=self.embedding_dim).astype(np.float64)

        norm = float(np.linalg.norm(embedding))
        if norm < NORM_EPSILON:
            return embedding
        return embedding / norm

    def embed_profile(self, profile: Profile) -> FloatArray:
        """Shorthand for ``embed(encode(profile))``."""

        return self.embed(self.encode(profile))

    def similarity(self, a: FloatArray, b: FloatArray) -> float:
        """Cosine similarity of two embeddings, clipped to [0, 1].

        Mismatched lengths are logged and score 0.
        """

        if a.shape != b.shape:
            logger.error(
                "TwoTowerEncoder.similarity: dimension mismatch %s vs %s",
                a.shape,
                b.shape,
            )
            return 0.0

        dot = float(np.dot(a, b))
        denom = max(float(np.linalg.norm(a)) * float(np.linalg.norm(b)), NORM_EPSILON)
        return min(max(dot / denom, 0.0), 1.0)

    def top_k(
        self,
        query: FloatArray,
        candidates: Sequence[Tuple[str, FloatArray]],
        k: int,
    ) -> List[ScoredCandidate]:
        """Return the ``k`` candidates most similar to ``query``.

        The sort is stable, so equal scores keep the input order.
        """

        if k <= 0 or not candidates:
            return []

        scored = [
            ScoredCandidate(candidate_id=candidate_id, score=self.similarity(query, embedding))
            for candidate_id, embedding in candidates
        ]
        scored.sort(key=lambda item: -item.score)
        return scored[:k]


# ============================================================================
# Helpers
# ============================================================================


def _one_hot(value: Optional[str], categories: Sequence[str], field_name: str) -> FloatArray:
    out = np.zeros(len(categories), dtype=np.float64)
    if not value:
        return out
    try:
        out[categories.index(value)] = 1.0
    except ValueError:
        logger.debug("Unknown %s value %r (skipping)", field_name, value)
    return out


def _multi_hot(values: Iterable[str], categories: Sequence[str], field_name: str) -> FloatArray:
    out = np.zeros(len(categories), dtype=np.float64)
    for value in values:
        try:
            out[categories.index(value)] = 1.0
        except ValueError:
            logger.debug("Unknown %s value %r (skipping)", field_name, value)

    total = float(out.sum())
    if total > 0.0:
        out /= total
    return out
