"""Simulation layer: single trials, the evolution engine, and persistence."""

from can_collector.simulation.engine import (
    GridFactory,
    breed_next_generation,
    evaluate_generation,
    normalized_score,
    run_generation_trials,
    run_generations,
    summarize_generation,
)
from can_collector.simulation.persistence import write_best_genome, write_generation_log
from can_collector.simulation.trial import MOVE_DELTAS, Trial, run_trial

__all__ = [
    "GridFactory",
    "MOVE_DELTAS",
    "Trial",
    "breed_next_generation",
    "evaluate_generation",
    "normalized_score",
    "run_generation_trials",
    "run_generations",
    "run_trial",
    "summarize_generation",
    "write_best_genome",
    "write_generation_log",
]
