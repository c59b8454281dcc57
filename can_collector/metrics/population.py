"""Population metrics: score summaries and rule-table diversity."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from can_collector.config.constants import NUM_ACTIONS
from can_collector.domain.genome import Genome


def score_summary(scores: Sequence[float]) -> dict[str, float]:
    """Return max/mean/min/median of one generation's normalized scores."""
    if not scores:
        return {"max": 0.0, "mean": 0.0, "min": 0.0, "median": 0.0}
    values = np.asarray(scores, dtype=np.float64)
    return {
        "max": float(values.max()),
        "mean": float(values.mean()),
        "min": float(values.min()),
        "median": float(np.median(values)),
    }


def rule_diversity(population: Sequence[Genome]) -> float:
    """Mean per-code Shannon entropy (bits) of actions across the population.

    0.0 when all genomes are identical; at most ``log2(NUM_ACTIONS)``.
    """
    if not population:
        return 0.0
    table = np.asarray([genome.to_codes() for genome in population], dtype=np.int64)
    # counts[action, code]
    counts = np.stack([(table == action).sum(axis=0) for action in range(NUM_ACTIONS)])
    probs = counts / len(population)
    with np.errstate(divide="ignore", invalid="ignore"):
        terms = np.where(probs > 0, -probs * np.log2(probs), 0.0)
    return float(terms.sum(axis=0).mean())
