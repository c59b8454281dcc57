"""Configuration and result dataclasses for evolution runs.

All frozen dataclasses that parameterise grids, rewards, and evolution runs,
plus the small result containers handed to the display layer, live here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from can_collector.config.constants import (
    FILL_PROBABILITY,
    GRID_HEIGHT,
    GRID_WIDTH,
    MAX_EVOLUTION_WORK_UNITS,
    MAX_STEPS,
    MUTATION_COUNT,
    NUM_GENERATIONS,
    PICK_FAIL,
    PICK_SUCCESS,
    POPULATION_SIZE,
    WALL_HIT,
)

# Re-export the safety constant so callers can import from config or config.types
__all__ = [
    "MAX_EVOLUTION_WORK_UNITS",
    "RewardSchedule",
    "GridConfig",
    "EvolutionConfig",
    "TrialResult",
    "GenerationResult",
]

# ---------------------------------------------------------------------------
# Result containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TrialResult:
    """Outcome of running one genome against one grid."""

    score: float
    steps_taken: int
    cans_collected: int
    initial_can_count: int
    final_position: tuple[int, int]


@dataclass(frozen=True)
class GenerationResult:
    """Summary of one evaluated generation."""

    generation: int
    max_score: float
    mean_score: float
    min_score: float
    median_score: float
    rule_diversity: float
    best_raw_score: float


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RewardSchedule:
    """Score deltas applied by the simulator."""

    pick_success: float = PICK_SUCCESS
    pick_fail: float = PICK_FAIL
    wall_hit: float = WALL_HIT

    def __post_init__(self) -> None:
        if self.pick_success <= 0:
            raise ValueError("pick_success must be > 0")


@dataclass(frozen=True)
class GridConfig:
    """Dimensions and can density of freshly generated grids."""

    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    fill_probability: float = FILL_PROBABILITY

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError("grid dimensions must be >= 1")
        if not 0.0 <= self.fill_probability <= 1.0:
            raise ValueError("fill_probability must be in [0.0, 1.0]")


@dataclass(frozen=True)
class EvolutionConfig:
    """Parameters for one complete evolution run."""

    grid: GridConfig = field(default_factory=GridConfig)
    rewards: RewardSchedule = field(default_factory=RewardSchedule)
    population_size: int = POPULATION_SIZE
    mutation_count: int = MUTATION_COUNT
    max_steps: int = MAX_STEPS
    generations: int = NUM_GENERATIONS
    seed: int = 0
    out_dir: Path | None = None

    def __post_init__(self) -> None:
        if self.population_size < 2:
            raise ValueError("population_size must be >= 2")
        if self.mutation_count < 0:
            raise ValueError("mutation_count must be >= 0")
        if self.max_steps < 0:
            raise ValueError("max_steps must be >= 0")
        if self.generations < 0:
            raise ValueError("generations must be >= 0")

    @property
    def work_units(self) -> int:
        """Upper bound on simulated steps, counting the initial generation."""
        return self.population_size * (self.generations + 1) * self.max_steps
