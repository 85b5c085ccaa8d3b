"""TrustRank – Monitoring package (in-process metrics)."""

from trustrank.monitoring.metrics import MetricsRegistry
