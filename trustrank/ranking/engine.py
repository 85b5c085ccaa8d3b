"""TrustRank – Ranking engine.

The ranking engine orders candidate profiles for a requester by
combining three signals:

- embedding similarity from :class:`TwoTowerEncoder`;
- a concept bonus from :class:`ConceptTagger`, matched against the
  search query's concepts or, without any, the requester's own tags;
- the multiplier of the tier the candidate's credibility score falls in.

Candidates that must never be shown (banned, multiplier 0, frozen) are
dropped before scoring. A candidate whose credibility record cannot be
decoded is skipped and logged so that one bad record never aborts the
batch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence

from trustrank.concepts.tagger import ConceptTagger
from trustrank.core.errors import CredibilityDecodeError
from trustrank.core.ids import normalize_user_id
from trustrank.core.logging import get_logger
from trustrank.core.time import Clock, SystemClock
from trustrank.credibility.service import CredibilityService
from trustrank.encoders.two_tower import TwoTowerEncoder
from trustrank.monitoring.metrics import MetricsRegistry
from trustrank.profiles.types import Profile
from trustrank.ranking.types import RankedCandidate


logger = get_logger(__name__)


@dataclass
class RankingEngine:
    """Orchestrates encoder, tagger and credibility lookups into a ranking."""

    encoder: TwoTowerEncoder
    tagger: ConceptTagger
    credibility: CredibilityService
    clock: Clock = field(default_factory=SystemClock)
    metrics: Optional[MetricsRegistry] = None

    def rank(
        self,
        requester: Profile,
        candidates: Sequence[Profile],
        query: Optional[str] = None,
        limit: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> List[RankedCandidate]:
        """Return ``candidates`` ordered by descending ranking score.

        Ties are broken by ascending ``user_id``. ``limit`` truncates the
        result; ``None`` returns every eligible candidate.
        """

        if now is None:
            now = self.clock.now()

        requester_key = normalize_user_id(requester.user_id)
        requester_embedding = self.encoder.embed_profile(requester)

        target_tags = self.tagger.map_query_to_concepts(query)
        if not target_tags:
            target_tags = self.tagger.generate_tags(requester)

        ranked: List[RankedCandidate] = []
        for candidate in candidates:
            if normalize_user_id(candidate.user_id) == requester_key:
                continue

            try:
                credibility = self.credibility.get_score(candidate.user_id)
            except CredibilityDecodeError as exc:
                logger.error(
                    "RankingEngine.rank: skipping user_id=%s, unreadable credibility record: %s",
                    candidate.user_id,
                    exc,
                )
                self._count("ranking.candidate_skipped", reason="decode_error")
                continue

            calculator = self.credibility.calculator
            tier = calculator.tier_for(credibility)
            multiplier = calculator.matching_weight_multiplier(tier)
            if credibility.is_banned or multiplier <= 0.0:
                self._count("ranking.candidate_excluded", reason="banned")
                continue
            if credibility.is_frozen_at(now):
                self._count("ranking.candidate_excluded", reason="frozen")
                continue

            similarity = self.encoder.similarity(requester_embedding, self.encoder.embed_profile(candidate))
            candidate_tags = self.tagger.generate_tags(candidate)
            bonus = self.tagger.score_concept_match(candidate_tags, target_tags)

            ranked.append(
                RankedCandidate(
                    user_id=candidate.user_id,
                    score=(similarity + bonus) * multiplier,
                    similarity=similarity,
                    concept_bonus=bonus,
                    multiplier=multiplier,
                    tier=tier,
                    concept_tags=candidate_tags,
                )
            )

        ranked.sort(key=lambda item: (-item.score, item.user_id))
        if limit is not None:
            ranked = ranked[: max(limit, 0)]

        logger.info(
            "RankingEngine.rank: requester=%s candidates=%d ranked=%d query=%r",
            requester.user_id,
            len(candidates),
            len(ranked),
            query,
        )
        return ranked

    def _count(self, name: str, reason: str) -> None:
        if self.metrics is not None:
            self.metrics.increment(name, tags={"reason": reason})
