"""Genome: a complete action table indexed by sensor code, plus GA operators."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from random import Random

from can_collector.config.constants import SENSOR_COMBINATIONS
from can_collector.domain.sensor import SensorCode, decode, describe

GENOME_LENGTH = SENSOR_COMBINATIONS
"""One rule per possible sensor code."""


class Action(Enum):
    """Behavior the robot may execute for a sensed situation."""

    STAY_PUT = 0
    TRY_PICK = 1
    MOVE_RANDOM = 2
    MOVE_NORTH = 3
    MOVE_EAST = 4
    MOVE_SOUTH = 5
    MOVE_WEST = 6


ALL_ACTIONS: tuple[Action, ...] = tuple(Action)

MOVE_ACTIONS: tuple[Action, ...] = (
    Action.MOVE_NORTH,
    Action.MOVE_EAST,
    Action.MOVE_SOUTH,
    Action.MOVE_WEST,
)
"""Candidates for resolving ``MOVE_RANDOM``."""

ACTION_LABELS: dict[Action, str] = {
    Action.STAY_PUT: "Stay",
    Action.TRY_PICK: "Try Pick",
    Action.MOVE_RANDOM: "Move Random",
    Action.MOVE_NORTH: "Move North",
    Action.MOVE_EAST: "Move East",
    Action.MOVE_SOUTH: "Move South",
    Action.MOVE_WEST: "Move West",
}


def action_label(action: Action) -> str:
    """Return the display name of an action."""
    try:
        return ACTION_LABELS[action]
    except KeyError:
        raise ValueError(f"invalid action {action!r}") from None


@dataclass
class Genome:
    """Deterministic policy: ``rules[code]`` is the action for sensor ``code``.

    ``score`` is the latest normalized fitness assigned by the evolution loop.
    It is not part of the genome's identity and is excluded from equality.
    """

    rules: list[Action]
    score: float = field(default=0.0, compare=False)

    def __post_init__(self) -> None:
        if len(self.rules) != GENOME_LENGTH:
            raise ValueError(f"rules must contain exactly {GENOME_LENGTH} actions")
        if not all(isinstance(action, Action) for action in self.rules):
            raise ValueError("rules must contain only Action members")

    @classmethod
    def create_random(cls, rng: Random) -> Genome:
        """Draw every rule uniformly over all actions."""
        return cls(rules=[rng.choice(ALL_ACTIONS) for _ in range(GENOME_LENGTH)])

    @classmethod
    def uniform(cls, action: Action) -> Genome:
        """Genome that answers every sensor code with the same action."""
        return cls(rules=[action] * GENOME_LENGTH)

    @classmethod
    def from_codes(cls, codes: list[int]) -> Genome:
        """Rebuild a genome from integer action values, e.g. ``to_codes`` output."""
        return cls(rules=[Action(code) for code in codes])

    def action_at(self, code: SensorCode) -> Action:
        """Look up the rule for a sensor code produced by ``encode``."""
        assert 0 <= code < GENOME_LENGTH, f"sensor code out of range: {code}"
        return self.rules[code]

    def mutate(self, gene_count: int, rng: Random) -> None:
        """Apply ``gene_count`` independent point mutations in place.

        Indices are drawn with replacement and the new action may equal the
        old one, so at most ``gene_count`` positions actually change.
        """
        if gene_count < 0:
            raise ValueError("gene_count must be >= 0")
        for _ in range(gene_count):
            index = rng.randrange(GENOME_LENGTH)
            self.rules[index] = rng.choice(ALL_ACTIONS)

    def to_codes(self) -> list[int]:
        """Integer action values in sensor-code order."""
        return [action.value for action in self.rules]

    def render(self) -> str:
        """One ``<reading> -> <action>`` line per sensor code."""
        return "\n".join(
            f"{describe(decode(code))} -> {action_label(action)}"
            for code, action in enumerate(self.rules)
        )


def crossover_at(parent_a: Genome, parent_b: Genome, split_index: int) -> Genome:
    """Child takes ``parent_a`` rules below ``split_index`` and ``parent_b`` from it on.

    ``split_index`` may be anywhere in ``[0, GENOME_LENGTH]``: 0 copies
    ``parent_b``, ``GENOME_LENGTH`` copies ``parent_a``.
    """
    if not 0 <= split_index <= GENOME_LENGTH:
        raise ValueError(f"split_index must be in [0, {GENOME_LENGTH}]")
    return Genome(rules=parent_a.rules[:split_index] + parent_b.rules[split_index:])


def crossover(parent_a: Genome, parent_b: Genome, rng: Random) -> Genome:
    """Single-point crossover with the split drawn uniformly in ``[0, GENOME_LENGTH)``."""
    return crossover_at(parent_a, parent_b, rng.randrange(GENOME_LENGTH))
