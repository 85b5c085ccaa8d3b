"""TrustRank – Concept tagging package.

This package derives coarse concept tags from profile text and maps
free-text queries onto the same tag vocabulary.
"""

from trustrank.concepts.types import ConceptTag, ConceptTagSet
from trustrank.concepts.lexicon import DEFAULT_LEXICON, ConceptLexicon
from trustrank.concepts.tagger import DEFAULT_CONCEPT_BONUS, ConceptTagger, fuzzy_contains
