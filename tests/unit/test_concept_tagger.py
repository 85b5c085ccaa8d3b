"""TrustRank: Tests for the concept tagger."""

from __future__ import annotations

import pytest

from trustrank.concepts import ConceptLexicon, ConceptTag, ConceptTagger, fuzzy_contains
from trustrank.profiles import Education, Profile


class TestCompanyTags:
    def test_faang_company(self) -> None:
        tags = ConceptTagger().generate_tags(Profile(user_id="u", current_company="Google"))
        assert tags == {ConceptTag.BIG_TECH, ConceptTag.FAANG}

    def test_case_and_whitespace_insensitive(self) -> None:
        tags = ConceptTagger().generate_tags(Profile(user_id="u", current_company="  GOOGLE  "))
        assert ConceptTag.FAANG in tags

    def test_mbb_implies_consulting(self) -> None:
        tags = ConceptTagger().generate_tags(Profile(user_id="u", current_company="McKinsey & Company"))
        assert tags == {ConceptTag.MBB, ConceptTag.CONSULTING}

    def test_unicorn_implies_startup(self) -> None:
        tags = ConceptTagger().generate_tags(Profile(user_id="u", current_company="Stripe"))
        assert tags == {ConceptTag.UNICORN, ConceptTag.STARTUP}

    def test_founder_with_company_is_startup(self) -> None:
        tags = ConceptTagger().generate_tags(
            Profile(user_id="u", current_company="Acme Widgets", career_stage="founder")
        )
        assert tags == {ConceptTag.STARTUP}

    def test_startup_keyword(self) -> None:
        tags = ConceptTagger().generate_tags(Profile(user_id="u", current_company="Stealth Startup"))
        assert ConceptTag.STARTUP in tags

    @pytest.mark.parametrize("company", [None, "", "   "])
    def test_blank_company_has_no_tags(self, company) -> None:  # type: ignore[no-untyped-def]
        profile = Profile(user_id="u", current_company=company, career_stage="founder")
        assert ConceptTagger().generate_tags(profile) == frozenset()


class TestEducationTags:
    def test_ivy_league_and_top_mba(self) -> None:
        profile = Profile(
            user_id="u",
            educations=(Education(school_name="Harvard Business School", degree="MBA"),),
        )
        assert ConceptTagger().generate_tags(profile) == {ConceptTag.IVY_LEAGUE, ConceptTag.TOP_MBA}

    def test_top_mba_needs_mba_or_business_field(self) -> None:
        tagger = ConceptTagger()
        undergrad = Profile(
            user_id="u",
            educations=(Education(school_name="Stanford University", degree="Bachelor's", field_of_study="Physics"),),
        )
        business = Profile(
            user_id="u",
            educations=(
                Education(school_name="Stanford University", degree="Master's", field_of_study="Business Administration"),
            ),
        )

        assert tagger.generate_tags(undergrad) == frozenset()
        assert tagger.generate_tags(business) == {ConceptTag.TOP_MBA}

    def test_blank_school_is_skipped(self) -> None:
        profile = Profile(user_id="u", educations=(Education(school_name="  ", degree="MBA"),))
        assert ConceptTagger().generate_tags(profile) == frozenset()

    def test_tags_union_company_and_education(self) -> None:
        profile = Profile(
            user_id="u",
            current_company="Goldman Sachs",
            educations=(Education(school_name="Yale"),),
        )
        assert ConceptTagger().generate_tags(profile) == {ConceptTag.FINANCE, ConceptTag.IVY_LEAGUE}


class TestQueryMapping:
    def test_maps_keywords(self) -> None:
        concepts = ConceptTagger().map_query_to_concepts("Ex-FAANG founders with an M7 MBA")
        assert {ConceptTag.FAANG, ConceptTag.STARTUP, ConceptTag.TOP_MBA} <= concepts

    def test_empty_query(self) -> None:
        tagger = ConceptTagger()
        assert tagger.map_query_to_concepts(None) == frozenset()
        assert tagger.map_query_to_concepts("") == frozenset()
        assert tagger.map_query_to_concepts("people who like coffee") == frozenset()


class TestScoring:
    def test_bonus_per_shared_tag(self) -> None:
        tagger = ConceptTagger()
        profile_tags = {ConceptTag.BIG_TECH, ConceptTag.FAANG, ConceptTag.IVY_LEAGUE}
        query_tags = {ConceptTag.FAANG, ConceptTag.IVY_LEAGUE, ConceptTag.MBB}

        assert tagger.score_concept_match(profile_tags, query_tags) == 6.0
        assert tagger.score_concept_match(profile_tags, set()) == 0.0

    def test_custom_bonus(self) -> None:
        tagger = ConceptTagger(bonus_per_tag=1.5)
        assert tagger.score_concept_match({ConceptTag.MBB}, {ConceptTag.MBB}) == 1.5


class TestLexicon:
    def test_fuzzy_contains_is_bidirectional(self) -> None:
        assert fuzzy_contains("meta platforms", {"meta"})
        assert fuzzy_contains("bcg", {"bcg digital ventures"})
        assert not fuzzy_contains("acme", {"meta"})

    def test_custom_lexicon(self) -> None:
        lexicon = ConceptLexicon(finance=frozenset({"acme capital"}))
        tags = ConceptTagger(lexicon=lexicon).generate_tags(Profile(user_id="u", current_company="Acme Capital"))
        assert tags == {ConceptTag.FINANCE}
