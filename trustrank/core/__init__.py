"""TrustRank – core infrastructure (config, logging, clock, ids, errors)."""
