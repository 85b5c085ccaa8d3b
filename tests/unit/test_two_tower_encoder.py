"""TrustRank: Tests for the two-tower profile encoder.

These tests cover the fixed feature layout, the bucketed projection and
the similarity / top-k helpers.
"""

from __future__ import annotations

import numpy as np
import pytest

from trustrank.encoders import TwoTowerEncoder
from trustrank.profiles import DEFAULT_VOCABULARY, FeatureVocabulary, Profile


def _profile(user_id: str = "u1", **overrides) -> Profile:  # type: ignore[no-untyped-def]
    fields = dict(
        user_id=user_id,
        intention="learnGrow",
        experience_level="Senior",
        career_stage="manager",
        industry="FinTech",
        skills=("Python", "Machine Learning"),
        hobbies=("Hiking",),
        values=("Curiosity", "Integrity"),
        skills_to_learn=("Rust",),
        skills_to_teach=("SQL",),
        years_of_experience=25.0,
        profile_completion=0.8,
        is_verified=True,
    )
    fields.update(overrides)
    return Profile(**fields)


class TestEncode:
    def test_length_is_constant(self) -> None:
        encoder = TwoTowerEncoder()

        rich = encoder.encode(_profile())
        empty = encoder.encode(Profile(user_id="empty"))

        assert len(rich) == DEFAULT_VOCABULARY.feature_dimension
        assert len(empty) == DEFAULT_VOCABULARY.feature_dimension
        assert encoder.feature_dimension == DEFAULT_VOCABULARY.feature_dimension

    def test_segment_order(self) -> None:
        vector = TwoTowerEncoder().encode(_profile())
        names = [segment.name for segment in vector.segments]

        assert names == [
            "intention",
            "experience_level",
            "career_stage",
            "industry",
            "skills",
            "hobbies",
            "values",
            "skills_to_learn",
            "skills_to_teach",
            "scalars",
        ]
        assert vector.segments[-1].stop == len(vector)

    def test_one_hot_and_multi_hot_sums(self) -> None:
        vector = TwoTowerEncoder().encode(_profile())

        assert vector.segment("intention").sum() == pytest.approx(1.0)
        assert vector.segment("career_stage").sum() == pytest.approx(1.0)
        skills = vector.segment("skills")
        assert skills.sum() == pytest.approx(1.0)
        assert np.count_nonzero(skills) == 2
        assert skills.max() == pytest.approx(0.5)

    def test_unknown_values_contribute_nothing(self) -> None:
        vector = TwoTowerEncoder().encode(
            _profile(intention="time travel", skills=("Underwater Basket Weaving",), skills_to_learn=("Rust",))
        )

        assert vector.segment("intention").sum() == 0.0
        assert vector.segment("skills").sum() == 0.0
        # "Rust" is not in the skills vocabulary either.
        assert vector.segment("skills_to_learn").sum() == 0.0
        assert vector.segment("skills_to_teach").sum() == pytest.approx(1.0)

    def test_scalars(self) -> None:
        vector = TwoTowerEncoder().encode(_profile(years_of_experience=25.0, profile_completion=1.7))
        years, completion, verified = vector.segment("scalars")

        assert years == pytest.approx(0.5)
        assert completion == 1.0
        assert verified == 1.0

    def test_custom_vocabulary(self) -> None:
        vocab = FeatureVocabulary(intentions=("a", "b"), skills=("x",))
        vector = TwoTowerEncoder(vocabulary=vocab).encode(Profile(user_id="u", intention="b", skills=("x",)))

        assert len(vector) == vocab.feature_dimension
        assert list(vector.segment("intention")) == [0.0, 1.0]

    def test_duplicate_vocabulary_rejected(self) -> None:
        with pytest.raises(ValueError):
            FeatureVocabulary(skills=("Python", "Python"))


class TestEmbed:
    def test_embedding_is_unit_norm(self) -> None:
        encoder = TwoTowerEncoder()
        embedding = encoder.embed_profile(_profile())

        assert embedding.shape == (64,)
        assert float(np.linalg.norm(embedding)) == pytest.approx(1.0)

    def test_zero_vector_stays_zero(self) -> None:
        embedding = TwoTowerEncoder().embed_profile(Profile(user_id="blank"))

        assert embedding.shape == (64,)
        assert not embedding.any()

    def test_bucket_folding(self) -> None:
        encoder = TwoTowerEncoder(embedding_dim=2)
        embedding = encoder.embed(np.array([3.0, 0.0, 4.0, 0.0]))

        assert embedding == pytest.approx(np.array([1.0, 0.0]))


class TestSimilarity:
    def test_self_similarity_and_symmetry(self) -> None:
        encoder = TwoTowerEncoder()
        a = encoder.embed_profile(_profile("a"))
        b = encoder.embed_profile(_profile("b", hobbies=("Reading",), industry="Healthcare"))

        assert encoder.similarity(a, a) == pytest.approx(1.0)
        assert encoder.similarity(a, b) == pytest.approx(encoder.similarity(b, a))
        assert 0.0 <= encoder.similarity(a, b) <= 1.0

    def test_career_stage_difference_is_partial(self) -> None:
        encoder = TwoTowerEncoder()
        founder = encoder.embed_profile(_profile("a", career_stage="founder"))
        manager = encoder.embed_profile(_profile("b", career_stage="manager"))

        score = encoder.similarity(founder, manager)
        assert 0.0 < score < 1.0

    def test_zero_vector_scores_zero(self) -> None:
        encoder = TwoTowerEncoder()
        blank = encoder.embed_profile(Profile(user_id="blank"))

        assert encoder.similarity(blank, encoder.embed_profile(_profile())) == 0.0

    def test_dimension_mismatch_scores_zero(self) -> None:
        encoder = TwoTowerEncoder()
        assert encoder.similarity(np.ones(3), np.ones(4)) == 0.0


class TestTopK:
    def test_orders_by_similarity(self) -> None:
        encoder = TwoTowerEncoder()
        query = encoder.embed_profile(_profile("q"))
        candidates = [
            ("far", encoder.embed_profile(Profile(user_id="far", intention="unwindChat"))),
            ("near", encoder.embed_profile(_profile("near"))),
        ]

        result = encoder.top_k(query, candidates, k=2)

        assert [item.candidate_id for item in result] == ["near", "far"]
        assert result[0].score == pytest.approx(1.0)

    def test_ties_keep_input_order(self) -> None:
        encoder = TwoTowerEncoder()
        query = encoder.embed_profile(_profile("q"))
        same = encoder.embed_profile(_profile("x"))
        candidates = [("c3", same), ("c1", same), ("c2", same)]

        result = encoder.top_k(query, candidates, k=3)

        assert [item.candidate_id for item in result] == ["c3", "c1", "c2"]

    def test_k_truncates_and_edge_cases(self) -> None:
        encoder = TwoTowerEncoder()
        query = encoder.embed_profile(_profile("q"))
        candidates = [(f"c{i}", query) for i in range(5)]

        assert len(encoder.top_k(query, candidates, k=2)) == 2
        assert encoder.top_k(query, candidates, k=0) == []
        assert encoder.top_k(query, [], k=3) == []


class TestEncoderValidation:
    def test_rejects_non_positive_dimension(self) -> None:
        with pytest.raises(ValueError):
            TwoTowerEncoder(embedding_dim=0)
