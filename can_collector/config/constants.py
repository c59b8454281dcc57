"""Centralized domain constants for can-collecting evolution runs.

All magic numbers that appear across multiple modules are defined here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

GRID_WIDTH = 11
"""Default grid width in cells."""

GRID_HEIGHT = 11
"""Default grid height in cells."""

FILL_PROBABILITY = 0.2
"""Default per-cell probability of holding a can at grid creation."""

POPULATION_SIZE = 200
"""Default number of genomes per generation."""

MUTATION_COUNT = 5
"""Default number of point-mutation events applied to each child."""

MAX_STEPS = 200
"""Default per-trial step cap."""

NUM_GENERATIONS = 100
"""Default number of bred generations after the initial one."""

PICK_SUCCESS = 10
"""Reward for picking up a can."""

PICK_FAIL = -1
"""Penalty for trying to pick up where there is no can."""

WALL_HIT = -5
"""Penalty for moving into a wall."""

SENSOR_LENGTH = 5
"""Cells observed per step: center, north, east, south, west."""

NUM_CELL_STATES = 3
"""Distinct cell states: empty, wall, can."""

SENSOR_COMBINATIONS = NUM_CELL_STATES**SENSOR_LENGTH
"""Number of distinct sensor codes (3 ** 5 = 243); also the genome length."""

NUM_ACTIONS = 7
"""Total action count: stay, pick, random move + 4 directional moves."""

MAX_EVOLUTION_WORK_UNITS = 500_000_000
"""Safety cap on total simulation steps (population x generations x steps)."""
