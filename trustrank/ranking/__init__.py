"""TrustRank – Ranking package.

This package contains :class:`RankingEngine`, which turns a requester
and a candidate list into an ordered list of :class:`RankedCandidate`.
"""

from trustrank.ranking.types import RankedCandidate
from trustrank.ranking.engine import RankingEngine
