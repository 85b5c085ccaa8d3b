"""
TrustRank: Core Type Definitions

This module defines common type aliases used across the TrustRank
codebase. It exists to centralise frequently used type definitions and
avoid circular imports between higher-level modules.

Key responsibilities:
- Provide canonical aliases for wire payloads and numeric vectors
- Improve readability of function signatures

External dependencies:
- typing: Standard library typing primitives
- numpy: Array type used for feature vectors and embeddings

Thread safety: Thread-safe (no mutable global state)

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

from typing import Any, Dict, TypeAlias

import numpy as np
from numpy.typing import NDArray

# ============================================================================
# Type Aliases
# ============================================================================

# JSON-like record as produced or consumed by external stores
Payload: TypeAlias = Dict[str, Any]

# Dense float vector used for feature vectors and embeddings
FloatArray: TypeAlias = NDArray[np.float64]
