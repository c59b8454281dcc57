"""Metrics package: per-generation population summaries."""

from can_collector.metrics.population import rule_diversity, score_summary

__all__ = [
    "rule_diversity",
    "score_summary",
]
