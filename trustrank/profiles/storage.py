"""TrustRank – Profile store interface.

Profiles are owned by an external store; the engine only reads
snapshots. :class:`InMemoryProfileStore` backs the CLI and tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol

from trustrank.core.errors import ProfileDecodeError
from trustrank.core.ids import normalize_user_id
from trustrank.core.logging import get_logger
from trustrank.profiles.codec import decode_profile
from trustrank.profiles.types import Profile


logger = get_logger(__name__)


class ProfileStore(Protocol):
    """Read-only access to profile snapshots by user id."""

    def load_profile(self, user_id: str) -> Optional[Profile]:  # pragma: no cover - interface
        """Return the current snapshot for ``user_id`` or None."""


@dataclass
class InMemoryProfileStore(ProfileStore):
    """Dictionary-backed :class:`ProfileStore`."""

    profiles: Dict[str, Profile] = field(default_factory=dict)

    def add(self, profile: Profile) -> None:
        self.profiles[normalize_user_id(profile.user_id)] = profile

    def load_profile(self, user_id: str) -> Optional[Profile]:  # type: ignore[override]
        return self.profiles.get(normalize_user_id(user_id))

    def all_profiles(self) -> List[Profile]:
        return list(self.profiles.values())

    @classmethod
    def from_payloads(cls, payloads: Iterable[Mapping[str, Any]]) -> "InMemoryProfileStore":
        """Build a store from wire payloads.

        Payloads that cannot be decoded are logged and skipped so that one
        bad record never drops the rest of the batch.
        """

        store = cls()
        for payload in payloads:
            try:
                store.add(decode_profile(payload))
            except ProfileDecodeError as exc:
                logger.error("InMemoryProfileStore.from_payloads: skipping profile: %s", exc)
        logger.debug("InMemoryProfileStore.from_payloads: loaded %d profiles", len(store.profiles))
        return store
