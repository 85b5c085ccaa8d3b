"""TrustRank – Candidate ranking CLI.

This script loads profiles and credibility records from a JSON fixture,
ranks every other profile for the given requester and prints the result
as CSV on stdout.

The fixture is a JSON object with a ``profiles`` list and an optional
``credibility`` list, both in wire format.

Examples
--------

    # Rank all candidates for one member
    python -m trustrank.scripts.rank_candidates \
        --input fixtures/members.json \
        --requester-id alice

    # Rank with a search query and keep the top 10
    python -m trustrank.scripts.rank_candidates \
        --input fixtures/members.json \
        --requester-id alice \
        --query "ex-FAANG founders" \
        --top-k 10
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from trustrank.concepts.tagger import ConceptTagger
from trustrank.core.config import TrustRankConfig, get_config, load_config
from trustrank.core.logging import get_logger, setup_logging
from trustrank.credibility.cache import CredibilityScoreCache
from trustrank.credibility.calculator import CredibilityCalculator
from trustrank.credibility.service import CredibilityService
from trustrank.credibility.storage import InMemoryCredibilityStore
from trustrank.encoders.two_tower import TwoTowerEncoder
from trustrank.monitoring.metrics import MetricsRegistry
from trustrank.profiles.storage import InMemoryProfileStore
from trustrank.ranking.engine import RankingEngine


logger = get_logger(__name__)

CSV_COLUMNS = ("rank", "user_id", "score", "similarity", "concept_bonus", "multiplier", "tier")


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Rank candidate profiles for a requester and print CSV results.",
    )

    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Path to a JSON fixture with 'profiles' and optional 'credibility' lists",
    )
    parser.add_argument(
        "--requester-id",
        type=str,
        required=True,
        help="user_id of the requesting member",
    )
    parser.add_argument(
        "--query",
        type=str,
        default=None,
        help="Optional free-text search query mapped onto concept tags",
    )
    parser.add_argument(
        "--top-k",
        type=int,
        default=None,
        help="Maximum number of candidates to print (default: all)",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Optional .env file with TrustRank settings",
    )

    args = parser.parse_args(argv)

    if args.top_k is not None and args.top_k <= 0:
        parser.error("--top-k must be positive")
    if not args.input.exists():
        parser.error(f"--input file not found: {args.input}")

    return args


def build_engine(config: TrustRankConfig, credibility_store: InMemoryCredibilityStore) -> RankingEngine:
    """Wire a :class:`RankingEngine` from configuration values."""

    metrics = MetricsRegistry()
    encoder_settings = config.encoder
    encoder = TwoTowerEncoder(
        embedding_dim=encoder_settings.embedding_dim,
        years_experience_cap=encoder_settings.years_experience_cap,
    )
    tagger = ConceptTagger(bonus_per_tag=config.concept_tag_bonus)
    service = CredibilityService(
        calculator=CredibilityCalculator(policy=config.credibility_policy),
        cache=CredibilityScoreCache(ttl_seconds=config.cache_ttl_seconds, metrics=metrics),
        store=credibility_store,
        metrics=metrics,
    )
    return RankingEngine(encoder=encoder, tagger=tagger, credibility=service, metrics=metrics)


def _load_fixture(path: Path) -> Mapping[str, Any]:
    with path.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise SystemExit(f"Fixture {path} must contain a JSON object")
    return data


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    config = load_config(args.env_file) if args.env_file is not None else get_config()

    setup_logging(config)

    fixture = _load_fixture(args.input)
    profile_store = InMemoryProfileStore.from_payloads(fixture.get("profiles") or [])
    credibility_store = InMemoryCredibilityStore.from_payloads(fixture.get("credibility") or [])

    requester = profile_store.load_profile(args.requester_id)
    if requester is None:
        logger.error("rank_candidates: requester %r not found in %s", args.requester_id, args.input)
        raise SystemExit(1)

    engine = build_engine(config, credibility_store)
    ranked = engine.rank(
        requester,
        profile_store.all_profiles(),
        query=args.query,
        limit=args.top_k,
    )

    print(",".join(CSV_COLUMNS))
    for position, candidate in enumerate(ranked, start=1):
        print(
            ",".join(
                [
                    str(position),
                    candidate.user_id,
                    f"{candidate.score:.6f}",
                    f"{candidate.similarity:.6f}",
                    f"{candidate.concept_bonus:.1f}",
                    f"{candidate.multiplier:.1f}",
                    candidate.tier.value,
                ]
            )
        )


if __name__ == "__main__":  # pragma: no cover - manual CLI entry
    main()
