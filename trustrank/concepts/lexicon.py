"""TrustRank – Curated lexicons for concept tagging.

Company and school lexicons are matched against profile text with
bidirectional, case-insensitive substring containment. Query keywords
are matched against free-text search queries with plain containment.
All terms are stored lower-case.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Mapping, Tuple

from trustrank.concepts.types import ConceptTag


BIG_TECH_COMPANIES: FrozenSet[str] = frozenset({
    "google", "alphabet", "facebook", "meta", "amazon", "apple",
    "microsoft", "netflix", "tesla", "nvidia", "uber", "airbnb",
})

FAANG_COMPANIES: FrozenSet[str] = frozenset({
    "facebook", "meta", "apple", "amazon", "netflix", "google", "alphabet",
})

MBB_COMPANIES: FrozenSet[str] = frozenset({
    "mckinsey", "bain", "bcg", "boston consulting",
})

CONSULTING_COMPANIES: FrozenSet[str] = frozenset({
    "mckinsey", "bain", "bcg", "deloitte", "pwc", "ey", "kpmg",
    "accenture", "oliver wyman", "monitor deloitte",
})

FINANCE_COMPANIES: FrozenSet[str] = frozenset({
    "goldman sachs", "goldman", "morgan stanley", "jpmorgan", "jp morgan",
    "citigroup", "bank of america", "blackrock", "citadel", "bridgewater",
})

UNICORN_COMPANIES: FrozenSet[str] = frozenset({
    "stripe", "spacex", "databricks", "canva", "figma", "notion",
    "plaid", "instacart", "doordash", "coinbase",
})

IVY_LEAGUE_SCHOOLS: FrozenSet[str] = frozenset({
    "harvard", "yale", "princeton", "columbia", "penn", "upenn",
    "brown", "dartmouth", "cornell",
})

TOP_MBA_SCHOOLS: FrozenSet[str] = frozenset({
    "harvard", "stanford", "wharton", "penn", "mit sloan", "kellogg",
    "booth", "chicago", "columbia", "berkeley haas", "haas",
})

QUERY_KEYWORDS: Mapping[ConceptTag, Tuple[str, ...]] = {
    ConceptTag.BIG_TECH: ("top tech", "big tech", "large tech"),
    ConceptTag.FAANG: ("faang", "f.a.a.n.g"),
    ConceptTag.MBB: ("mbb", "top consulting", "management consulting"),
    ConceptTag.CONSULTING: ("consulting", "consultant"),
    ConceptTag.FINANCE: ("investment bank", "finance", "wall street"),
    ConceptTag.IVY_LEAGUE: ("ivy league", "ivy", "elite university"),
    ConceptTag.TOP_MBA: ("top mba", "m7", "elite mba"),
    ConceptTag.STARTUP: ("startup", "founder", "entrepreneurial"),
    ConceptTag.UNICORN: ("unicorn",),
}

# Career stages that imply the startup tag for members with a company.
STARTUP_CAREER_STAGES: FrozenSet[str] = frozenset({"founder", "earlycareer", "early-career"})


@dataclass(frozen=True)
class ConceptLexicon:
    """Bundle of lexicons used by :class:`~trustrank.concepts.tagger.ConceptTagger`."""

    big_tech: FrozenSet[str] = BIG_TECH_COMPANIES
    faang: FrozenSet[str] = FAANG_COMPANIES
    mbb: FrozenSet[str] = MBB_COMPANIES
    consulting: FrozenSet[str] = CONSULTING_COMPANIES
    finance: FrozenSet[str] = FINANCE_COMPANIES
    unicorn: FrozenSet[str] = UNICORN_COMPANIES
    ivy_league: FrozenSet[str] = IVY_LEAGUE_SCHOOLS
    top_mba: FrozenSet[str] = TOP_MBA_SCHOOLS
    query_keywords: Mapping[ConceptTag, Tuple[str, ...]] = field(
        default_factory=lambda: dict(QUERY_KEYWORDS)
    )
    startup_keyword: str = "startup"
    startup_career_stages: FrozenSet[str] = STARTUP_CAREER_STAGES
    business_keyword: str = "business"


DEFAULT_LEXICON = ConceptLexicon()
