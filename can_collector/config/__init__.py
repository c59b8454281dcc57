"""Configuration layer: constants and typed config dataclasses."""

from can_collector.config.constants import (
    FILL_PROBABILITY,
    GRID_HEIGHT,
    GRID_WIDTH,
    MAX_EVOLUTION_WORK_UNITS,
    MAX_STEPS,
    MUTATION_COUNT,
    NUM_ACTIONS,
    NUM_CELL_STATES,
    NUM_GENERATIONS,
    PICK_FAIL,
    PICK_SUCCESS,
    POPULATION_SIZE,
    SENSOR_COMBINATIONS,
    SENSOR_LENGTH,
    WALL_HIT,
)
from can_collector.config.types import (
    EvolutionConfig,
    GenerationResult,
    GridConfig,
    RewardSchedule,
    TrialResult,
)

__all__ = [
    "EvolutionConfig",
    "FILL_PROBABILITY",
    "GRID_HEIGHT",
    "GRID_WIDTH",
    "GenerationResult",
    "GridConfig",
    "MAX_EVOLUTION_WORK_UNITS",
    "MAX_STEPS",
    "MUTATION_COUNT",
    "NUM_ACTIONS",
    "NUM_CELL_STATES",
    "NUM_GENERATIONS",
    "PICK_FAIL",
    "PICK_SUCCESS",
    "POPULATION_SIZE",
    "RewardSchedule",
    "SENSOR_COMBINATIONS",
    "SENSOR_LENGTH",
    "TrialResult",
    "WALL_HIT",
]
