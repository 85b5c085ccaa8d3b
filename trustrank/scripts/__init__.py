"""TrustRank – command-line scripts."""
