"""TrustRank – top-level package exports.

This module re-exports the components needed to assemble a ranking
pipeline.
"""

# Profiles
from trustrank.profiles.types import Education, Profile
from trustrank.profiles.vocabulary import DEFAULT_VOCABULARY, FeatureVocabulary

# Encoding and concepts
from trustrank.encoders.two_tower import TwoTowerEncoder
from trustrank.concepts.tagger import ConceptTagger

# Credibility
from trustrank.credibility.types import CredibilityScore, CredibilityTier
from trustrank.credibility.calculator import CredibilityCalculator
from trustrank.credibility.cache import CredibilityScoreCache
from trustrank.credibility.service import CredibilityService

# Ranking
from trustrank.ranking.engine import RankingEngine
from trustrank.ranking.types import RankedCandidate
