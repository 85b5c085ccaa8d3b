"""TrustRank – Concept tagger.

Derives coarse concept tags (FAANG, MBB, Ivy League, ...) from a
profile's company and education text, translates recruiting-style search
queries into the same tag vocabulary, and scores tag overlap.

Matching is intentionally fuzzy: a lexicon term matches when it contains
the input or the input contains it, ignoring case. The tagger never
raises; absent fields simply contribute no tags.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import AbstractSet, FrozenSet, Iterable, Optional, Set

from trustrank.concepts.lexicon import DEFAULT_LEXICON, ConceptLexicon
from trustrank.concepts.types import ConceptTag, ConceptTagSet
from trustrank.core.logging import get_logger
from trustrank.profiles.types import Education, Profile


logger = get_logger(__name__)

DEFAULT_CONCEPT_BONUS: float = 3.0


def fuzzy_contains(text: str, lexicon: Iterable[str]) -> bool:
    """Return True if ``text`` and any lexicon term contain one another.

    ``text`` must already be lower-cased and non-empty.
    """

    return any(term in text or text in term for term in lexicon)


@dataclass(frozen=True)
class ConceptTagger:
    """Stateless concept tagger.

    Attributes:
        lexicon: Company, school and query lexicons.
        bonus_per_tag: Score added per shared tag in
            :meth:`score_concept_match`.
    """

    lexicon: ConceptLexicon = field(default=DEFAULT_LEXICON)
    bonus_per_tag: float = DEFAULT_CONCEPT_BONUS

    def generate_tags(self, profile: Profile) -> ConceptTagSet:
        """Return the concept tags for ``profile``."""

        tags: Set[ConceptTag] = set()
        tags |= self._company_tags(profile.current_company, profile.career_stage)
        for education in profile.educations:
            tags |= self._education_tags(education)
        return frozenset(tags)

    def map_query_to_concepts(self, query: Optional[str]) -> ConceptTagSet:
        """Translate a free-text search query into concept tags."""

        if not query:
            return frozenset()

        lowered = query.lower()
        concepts = {
            tag
            for tag, keywords in self.lexicon.query_keywords.items()
            if any(keyword in lowered for keyword in keywords)
        }
        return frozenset(concepts)

    def score_concept_match(
        self,
        profile_tags: AbstractSet[ConceptTag],
        query_tags: AbstractSet[ConceptTag],
    ) -> float:
        """Return ``bonus_per_tag`` times the number of shared tags."""

        shared = set(profile_tags) & set(query_tags)
        if not shared:
            return 0.0

        score = len(shared) * self.bonus_per_tag
        logger.debug(
            "Concept match: %s (+%.1f)",
            ", ".join(sorted(tag.display_name for tag in shared)),
            score,
        )
        return score

    # ========================================================================
    # Internal helpers
    # ========================================================================

    def _company_tags(self, company: Optional[str], career_stage: Optional[str]) -> FrozenSet[ConceptTag]:
        if company is None:
            return frozenset()
        text = company.strip().lower()
        if not text:
            return frozenset()

        lex = self.lexicon
        tags: Set[ConceptTag] = set()

        if fuzzy_contains(text, lex.big_tech):
            tags.add(ConceptTag.BIG_TECH)
        if fuzzy_contains(text, lex.faang):
            tags.add(ConceptTag.FAANG)
        if fuzzy_contains(text, lex.mbb):
            tags.update((ConceptTag.MBB, ConceptTag.CONSULTING))
        if fuzzy_contains(text, lex.consulting):
            tags.add(ConceptTag.CONSULTING)
        if fuzzy_contains(text, lex.finance):
            tags.add(ConceptTag.FINANCE)
        if fuzzy_contains(text, lex.unicorn):
            tags.update((ConceptTag.UNICORN, ConceptTag.STARTUP))

        stage = (career_stage or "").strip().lower()
        if lex.startup_keyword in text or stage in lex.startup_career_stages:
            tags.add(ConceptTag.STARTUP)

        return frozenset(tags)

    def _education_tags(self, education: Education) -> FrozenSet[ConceptTag]:
        school = education.school_name.strip().lower()
        if not school:
            return frozenset()

        lex = self.lexicon
        tags: Set[ConceptTag] = set()

        if fuzzy_contains(school, lex.ivy_league):
            tags.add(ConceptTag.IVY_LEAGUE)

        business_field = lex.business_keyword in (education.field_of_study or "").lower()
        if fuzzy_contains(school, lex.top_mba) and (education.is_mba or business_field):
            tags.add(ConceptTag.TOP_MBA)

        return frozenset(tags)
