"""TrustRank – Concept tag types."""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet, TypeAlias


class ConceptTag(str, Enum):
    """Coarse boolean labels derived from company and education text."""

    BIG_TECH = "tag_big_tech"
    FAANG = "tag_faang"
    STARTUP = "tag_startup"
    UNICORN = "tag_unicorn"
    IVY_LEAGUE = "tag_ivy_league"
    TOP_MBA = "tag_top_mba"
    MBB = "tag_mbb"
    FINANCE = "tag_finance"
    CONSULTING = "tag_consulting"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    ConceptTag.BIG_TECH: "Big Tech",
    ConceptTag.FAANG: "FAANG",
    ConceptTag.STARTUP: "Startup",
    ConceptTag.UNICORN: "Unicorn",
    ConceptTag.IVY_LEAGUE: "Ivy League",
    ConceptTag.TOP_MBA: "Top MBA",
    ConceptTag.MBB: "MBB",
    ConceptTag.FINANCE: "Finance",
    ConceptTag.CONSULTING: "Consulting",
}


ConceptTagSet: TypeAlias = FrozenSet[ConceptTag]
