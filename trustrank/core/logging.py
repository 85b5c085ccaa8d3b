"""
TrustRank: Logging Setup

This module provides centralised logging configuration and helper
functions for obtaining namespaced loggers. Engine components never
configure handlers themselves; they obtain a logger through
:func:`get_logger` and emit leveled diagnostics only.

Key responsibilities:
- Configure root logging handlers and formats
- Provide a helper to obtain module-specific loggers

External dependencies:
- logging: Python standard library logging framework

Thread safety: Thread-safe (logging module is process-global and
thread-safe under normal usage)

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

import logging
import sys
from typing import Optional

from trustrank.core.config import TrustRankConfig, get_config

# ============================================================================
# Public API
# ============================================================================


def setup_logging(config: Optional[TrustRankConfig] = None) -> None:
    """Configure application-wide logging.

    This function initialises the root logger and the ``trustrank``
    namespace logger. It is idempotent: calling it multiple times will not
    attach duplicate handlers.

    Args:
        config: Optional configuration object. If omitted, the global
            configuration will be loaded via :func:`get_config`.
    """

    if config is None:
        config = get_config()

    root_logger = logging.getLogger()

    # Avoid attaching duplicate handlers if setup_logging is called again.
    if root_logger.handlers:
        return

    log_level = getattr(logging, config.logging.level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)

    file_handler = logging.FileHandler(config.logging.file)
    file_handler.setFormatter(formatter)

    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    logging.getLogger("trustrank").setLevel(log_level)


def get_logger(name: str) -> logging.Logger:
    """Return a namespaced logger for the given module.

    Module ``__name__`` values already starting with ``trustrank.`` are
    used as-is so that ``get_logger(__name__)`` does not double the
    prefix. Handlers are not configured here; entry points call
    :func:`setup_logging` once their configuration is loaded.

    Args:
        name: Module-level ``__name__`` or any descriptive logger name.

    Returns:
        A :class:`logging.Logger` instance under the ``trustrank``
        namespace.
    """

    if name == "trustrank" or name.startswith("trustrank."):
        return logging.getLogger(name)
    return logging.getLogger(f"trustrank.{name}")
