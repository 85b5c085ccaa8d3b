"""
TrustRank: Identifier Utilities

This module contains helpers for the user identifiers that key profiles,
credibility records and cache entries. Identifiers are compared
case-insensitively everywhere, so every lookup goes through
:func:`normalize_user_id`.

Key responsibilities:
- Normalise user identifiers for case-insensitive lookups

Thread safety: Thread-safe (stateless functions)

Author: TrustRank Team
Created: 2025-11-24
Last Modified: 2025-11-24
Status: Development
Version: v0.1.0
"""

# ============================================================================
# Imports
# ============================================================================

from __future__ import annotations

# ============================================================================
# Public API
# ============================================================================


def normalize_user_id(user_id: str) -> str:
    """Return the canonical lookup key for a user identifier.

    Identifiers are compared case-insensitively; surrounding whitespace is
    ignored.
    """

    return user_id.strip().lower()
