"""Experiments layer: evolution run orchestration."""

from can_collector.experiments.evolution import EvolutionRun, make_grid_factory, run_evolution

__all__ = [
    "EvolutionRun",
    "make_grid_factory",
    "run_evolution",
]
