"""TrustRank – Credibility store interface.

Credibility scores are persisted by an external store as wire payloads.
The store decodes on read so that malformed records surface as
:class:`~trustrank.core.errors.CredibilityDecodeError` at the boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Protocol

from trustrank.core.ids import normalize_user_id
from trustrank.core.logging import get_logger
from trustrank.core.types import Payload
from trustrank.credibility.codec import decode_credibility_score, encode_credibility_score
from trustrank.credibility.types import CredibilityScore


logger = get_logger(__name__)


class CredibilityStore(Protocol):
    """Persistence interface for credibility scores."""

    def load_score(self, user_id: str) -> Optional[CredibilityScore]:  # pragma: no cover - interface
        """Return the stored score for ``user_id`` or None if absent.

        Raises:
            CredibilityDecodeError: If the stored record is malformed.
        """

    def save_score(self, score: CredibilityScore) -> None:  # pragma: no cover - interface
        """Insert or replace the stored score for ``score.user_id``."""


@dataclass
class InMemoryCredibilityStore(CredibilityStore):
    """Dictionary-backed :class:`CredibilityStore` holding wire payloads."""

    payloads: Dict[str, Payload] = field(default_factory=dict)

    def load_score(self, user_id: str) -> Optional[CredibilityScore]:  # type: ignore[override]
        payload = self.payloads.get(normalize_user_id(user_id))
        if payload is None:
            return None
        return decode_credibility_score(payload)

    def save_score(self, score: CredibilityScore) -> None:  # type: ignore[override]
        self.payloads[normalize_user_id(score.user_id)] = encode_credibility_score(score)

    def put_payload(self, payload: Mapping[str, Any]) -> None:
        """Store a raw payload without validating it."""

        user_id = str(payload.get("user_id", ""))
        self.payloads[normalize_user_id(user_id)] = dict(payload)

    @classmethod
    def from_payloads(cls, payloads: Iterable[Mapping[str, Any]]) -> "InMemoryCredibilityStore":
        store = cls()
        for payload in payloads:
            store.put_payload(payload)
        logger.debug("InMemoryCredibilityStore.from_payloads: loaded %d records", len(store.payloads))
        return store
