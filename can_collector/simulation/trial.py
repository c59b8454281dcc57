"""Single-trial simulator: one genome driving the robot on one grid."""

from __future__ import annotations

from dataclasses import dataclass, field
from random import Random

from can_collector.config.types import RewardSchedule, TrialResult
from can_collector.domain.genome import MOVE_ACTIONS, Action, Genome
from can_collector.domain.grid import Grid
from can_collector.domain.sensor import encode

MOVE_DELTAS: dict[Action, tuple[int, int]] = {
    Action.MOVE_NORTH: (0, 1),
    Action.MOVE_EAST: (1, 0),
    Action.MOVE_SOUTH: (0, -1),
    Action.MOVE_WEST: (-1, 0),
}


@dataclass
class Trial:
    """Robot state for one genome on one grid.

    The trial owns the robot position and running score; the grid stays a
    plain environment value. All randomness comes from ``rng``.
    """

    genome: Genome
    grid: Grid
    rng: Random
    rewards: RewardSchedule = field(default_factory=RewardSchedule)
    start: tuple[int, int] | None = None
    x: int = field(init=False)
    y: int = field(init=False)
    score: float = field(init=False, default=0.0)
    steps_taken: int = field(init=False, default=0)
    cans_collected: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        x, y = self.start if self.start is not None else self.grid.center
        if not self.grid.is_in_bounds(x, y):
            raise ValueError(f"start position {(x, y)} lies outside the grid")
        self.x, self.y = x, y

    @property
    def position(self) -> tuple[int, int]:
        return self.x, self.y

    def step(self) -> Action:
        """Advance one step and return the action actually executed."""
        code = encode(self.grid.sense(self.x, self.y))
        action = self.genome.action_at(code)
        if action is Action.MOVE_RANDOM:
            action = self.rng.choice(MOVE_ACTIONS)

        dx, dy = 0, 0
        if action is Action.TRY_PICK:
            if self.grid.try_collect(self.x, self.y):
                self.score += self.rewards.pick_success
                self.cans_collected += 1
            else:
                self.score += self.rewards.pick_fail
        elif action in MOVE_DELTAS:
            dx, dy = MOVE_DELTAS[action]

        if not self.grid.is_in_bounds(self.x + dx, self.y + dy):
            dx, dy = 0, 0
            self.score += self.rewards.wall_hit

        self.x += dx
        self.y += dy
        self.steps_taken += 1
        return action

    def run(self, max_steps: int) -> TrialResult:
        """Step until ``max_steps`` are used or the grid runs out of cans."""
        if max_steps < 0:
            raise ValueError("max_steps must be >= 0")
        while self.steps_taken < max_steps and self.grid.can_count > 0:
            self.step()
        return self.result()

    def result(self) -> TrialResult:
        return TrialResult(
            score=self.score,
            steps_taken=self.steps_taken,
            cans_collected=self.cans_collected,
            initial_can_count=self.grid.initial_can_count,
            final_position=self.position,
        )


def run_trial(
    genome: Genome,
    grid: Grid,
    max_steps: int,
    rng: Random,
    rewards: RewardSchedule | None = None,
    start: tuple[int, int] | None = None,
) -> TrialResult:
    """Run one complete trial and return its raw fitness and counters."""
    trial = Trial(
        genome=genome,
        grid=grid,
        rng=rng,
        rewards=rewards or RewardSchedule(),
        start=start,
    )
    return trial.run(max_steps)
