"""
TrustRank: Configuration Management

This module provides centralised configuration management for TrustRank.
It loads configuration from environment variables (optionally via a .env
file), with strongly typed access via Pydantic BaseSettings.

Key responsibilities:
- Load and validate configuration from environment variables
- Provide typed configuration objects for logging, encoding and the
  credibility policy
- Expose a cached global configuration accessor for convenience

External dependencies:
- pydantic: Data validation and settings management
- pydantic-settings: Environment variable integration for settings
- python-dotenv: Optional .env loading for local development

Thread safety: Thread-safe (configuration is immutable after initial load)

Author: TrustRank Team
Created: 2025-11-24
Last Modified: 2025-12-02
Status: Development
Version: v0.1.0
"""

# ============================================================================
# Imports
# ============================================================================

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

if TYPE_CHECKING:  # pragma: no cover - annotations only
    from trustrank.credibility.policy import CredibilityPolicy

# ============================================================================
# Data Models
# ============================================================================


class LoggingConfig(BaseModel):
    """Logging configuration for TrustRank.

    Attributes:
        level: Log level name (e.g. "INFO", "DEBUG").
        file: Path to the primary log file.
    """

    level: str = "INFO"
    file: str = "trustrank.log"


class EncoderSettings(BaseModel):
    """Numeric settings for the two-tower encoder.

    Attributes:
        embedding_dim: Number of hash buckets in a profile embedding.
        years_experience_cap: Divisor used to normalise years of
            experience into roughly [0, 1].
    """

    embedding_dim: int = 64
    years_experience_cap: float = 50.0


class TrustRankConfig(BaseSettings):
    """Main TrustRank configuration loaded from environment variables.

    Environment variables use the following mapping by default:

    - LOG_LEVEL / LOG_FILE for logging
    - ENVIRONMENT for environment name (development/staging/production)
    - EMBEDDING_DIM / YEARS_EXPERIENCE_CAP for the encoder
    - CACHE_TTL_SECONDS for the credibility score cache
    - CONCEPT_TAG_BONUS for the ranking concept bonus
    - DECAY_*, FREEZE_HOURS and *_FREEZE_THRESHOLD for the credibility
      policy

    The score tables (fulfillment bands, decay bands, tier policies) are
    not environment driven; they come from :class:`CredibilityPolicy`
    defaults and can be overridden in code.
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: str = Field(default="trustrank.log", alias="LOG_FILE")

    # Environment
    environment: str = Field(default="development", alias="ENVIRONMENT")

    # Encoder
    embedding_dim: int = Field(default=64, alias="EMBEDDING_DIM")
    years_experience_cap: float = Field(default=50.0, alias="YEARS_EXPERIENCE_CAP")

    # Cache and ranking
    cache_ttl_seconds: float = Field(default=300.0, alias="CACHE_TTL_SECONDS")
    concept_tag_bonus: float = Field(default=3.0, alias="CONCEPT_TAG_BONUS")

    # Credibility policy
    decay_threshold_days: int = Field(default=15, alias="DECAY_THRESHOLD_DAYS")
    decay_warning_days: int = Field(default=10, alias="DECAY_WARNING_DAYS")
    freeze_hours: int = Field(default=72, alias="FREEZE_HOURS")
    gps_anomaly_freeze_threshold: int = Field(
        default=3, alias="GPS_ANOMALY_FREEZE_THRESHOLD"
    )
    mutual_high_rating_freeze_threshold: int = Field(
        default=3, alias="MUTUAL_HIGH_RATING_FREEZE_THRESHOLD"
    )

    @property
    def logging(self) -> LoggingConfig:
        """Return logging configuration."""

        return LoggingConfig(level=self.log_level, file=self.log_file)

    @property
    def encoder(self) -> EncoderSettings:
        """Return encoder configuration."""

        return EncoderSettings(
            embedding_dim=self.embedding_dim,
            years_experience_cap=self.years_experience_cap,
        )

    @property
    def credibility_policy(self) -> CredibilityPolicy:
        """Return the credibility policy with env-driven thresholds applied.

        Environment variables:
        - DECAY_THRESHOLD_DAYS
        - DECAY_WARNING_DAYS
        - FREEZE_HOURS
        - GPS_ANOMALY_FREEZE_THRESHOLD
        - MUTUAL_HIGH_RATING_FREEZE_THRESHOLD
        """

        # The credibility package depends on core.logging, which in turn
        # imports this module.
        from trustrank.credibility.policy import CredibilityPolicy

        return CredibilityPolicy(
            decay_threshold_days=self.decay_threshold_days,
            decay_warning_days=self.decay_warning_days,
            freeze_hours=self.freeze_hours,
            gps_anomaly_freeze_threshold=self.gps_anomaly_freeze_threshold,
            mutual_high_rating_freeze_threshold=self.mutual_high_rating_freeze_threshold,
        )


# ============================================================================
# Public API
# ============================================================================


def load_config(env_file: Optional[Path] = None) -> TrustRankConfig:
    """Load TrustRank configuration.

    For local development this function will attempt to load a `.env` file
    from the current working directory if one is present. Environment
    variables always take precedence over values from `.env`.

    Args:
        env_file: Optional explicit path to a `.env` file. If omitted,
            the function will look for `.env` in the current working
            directory.

    Returns:
        A fully populated :class:`TrustRankConfig` instance.

    Raises:
        FileNotFoundError: If an explicit ``env_file`` is provided but
            does not exist.
    """

    if env_file is not None:
        if not env_file.exists():
            msg = f"Environment file not found: {env_file}"
            raise FileNotFoundError(msg)
        # An explicit env_file overrides existing values so that tests and
        # CLI runs can reliably control configuration.
        load_dotenv(env_file, override=True)
    else:
        default_env = Path(".env")
        if default_env.exists():
            load_dotenv(default_env)

    return TrustRankConfig()  # type: ignore[call-arg]


_global_config: Optional[TrustRankConfig] = None


def get_config() -> TrustRankConfig:
    """Return the process-wide TrustRank configuration.

    The configuration is loaded on first access and cached for subsequent
    calls. Engine components never read it implicitly; callers pass the
    relevant values into constructors.

    Returns:
        A cached :class:`TrustRankConfig` instance.
    """

    global _global_config
    if _global_config is None:
        _global_config = load_config()
    return _global_config
