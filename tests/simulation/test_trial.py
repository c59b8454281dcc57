"""Tests for the single-trial simulator (simulation/trial.py)."""

from __future__ import annotations

import copy
from random import Random

import pytest

from can_collector.config.types import RewardSchedule
from can_collector.domain.genome import MOVE_ACTIONS, Action, Genome
from can_collector.domain.grid import Grid
from can_collector.domain.sensor import Cell
from can_collector.simulation.trial import Trial, run_trial


def _grid_with_can_at_center() -> Grid:
    return Grid.from_rows(
        [
            "...",
            ".+.",
            "...",
        ]
    )


class TestTrialRun:
    def test_zero_steps_leaves_everything_untouched(self) -> None:
        grid = Grid.create_random(11, 11, 0.5, Random(0))
        before = copy.deepcopy(grid.cans)
        result = run_trial(Genome.uniform(Action.TRY_PICK), grid, 0, Random(1))
        assert result.score == 0
        assert result.steps_taken == 0
        assert grid.cans == before
        assert grid.can_count == grid.initial_can_count

    def test_empty_grid_terminates_immediately(self) -> None:
        grid = Grid.create_random(11, 11, 0.0, Random(0))
        result = run_trial(Genome.uniform(Action.MOVE_NORTH), grid, 1000, Random(1))
        assert result.steps_taken == 0
        assert result.score == 0

    def test_stops_when_last_can_is_collected(self) -> None:
        grid = _grid_with_can_at_center()
        result = run_trial(Genome.uniform(Action.TRY_PICK), grid, 100, Random(0))
        assert result.steps_taken == 1
        assert result.score == 10
        assert result.cans_collected == 1
        assert result.initial_can_count == 1
        assert grid.can_count == 0

    def test_step_cap_is_respected(self) -> None:
        grid = Grid.create_random(11, 11, 0.3, Random(0))
        result = run_trial(Genome.uniform(Action.STAY_PUT), grid, 37, Random(1))
        assert result.steps_taken == 37
        assert result.score == 0
        assert result.final_position == (5, 5)

    def test_negative_steps_raise(self) -> None:
        with pytest.raises(ValueError):
            run_trial(Genome.uniform(Action.STAY_PUT), _grid_with_can_at_center(), -1, Random(0))

    def test_same_seed_same_result(self) -> None:
        genome = Genome.create_random(Random(3))
        results = [
            run_trial(genome, Grid.create_random(11, 11, 0.2, Random(4)), 200, Random(5))
            for _ in range(2)
        ]
        assert results[0] == results[1]


class TestTrialStep:
    def test_starts_at_grid_center(self) -> None:
        trial = Trial(Genome.uniform(Action.STAY_PUT), Grid.from_rows(["....."] * 5), Random(0))
        assert trial.position == (2, 2)

    def test_start_outside_grid_raises(self) -> None:
        with pytest.raises(ValueError):
            Trial(
                Genome.uniform(Action.STAY_PUT),
                _grid_with_can_at_center(),
                Random(0),
                start=(3, 0),
            )

    def test_pick_success(self) -> None:
        grid = _grid_with_can_at_center()
        trial = Trial(Genome.uniform(Action.TRY_PICK), grid, Random(0))
        assert trial.step() is Action.TRY_PICK
        assert trial.score == 10
        assert grid.state_at(1, 1) is Cell.EMPTY

    def test_pick_fail(self) -> None:
        grid = _grid_with_can_at_center()
        trial = Trial(Genome.uniform(Action.TRY_PICK), grid, Random(0), start=(0, 0))
        trial.step()
        assert trial.score == -1
        assert grid.can_count == 1

    def test_stay_put_changes_nothing(self) -> None:
        trial = Trial(Genome.uniform(Action.STAY_PUT), _grid_with_can_at_center(), Random(0))
        trial.step()
        assert trial.position == (1, 1)
        assert trial.score == 0
        assert trial.steps_taken == 1

    @pytest.mark.parametrize(
        "action,expected",
        [
            (Action.MOVE_NORTH, (1, 2)),
            (Action.MOVE_EAST, (2, 1)),
            (Action.MOVE_SOUTH, (1, 0)),
            (Action.MOVE_WEST, (0, 1)),
        ],
    )
    def test_moves_apply_unit_delta(self, action: Action, expected: tuple[int, int]) -> None:
        trial = Trial(Genome.uniform(action), _grid_with_can_at_center(), Random(0))
        trial.step()
        assert trial.position == expected
        assert trial.score == 0

    def test_wall_blocks_and_penalizes_every_time(self) -> None:
        grid = Grid.create_random(11, 11, 0.2, Random(0))
        trial = Trial(Genome.uniform(Action.MOVE_NORTH), grid, Random(0), start=(5, 10))
        trial.step()
        assert trial.position == (5, 10)
        assert trial.score == -5
        trial.step()
        assert trial.position == (5, 10)
        assert trial.score == -10

    def test_random_move_resolves_to_direction(self) -> None:
        grid = Grid.from_rows(["....."] * 5)
        trial = Trial(Genome.uniform(Action.MOVE_RANDOM), grid, Random(0))
        seen = {trial.step() for _ in range(40)}
        assert seen <= set(MOVE_ACTIONS)
        assert len(seen) > 1

    def test_custom_rewards(self) -> None:
        rewards = RewardSchedule(pick_success=3, pick_fail=-2, wall_hit=-7)
        grid = Grid.from_rows(["+"])
        trial = Trial(Genome.uniform(Action.TRY_PICK), grid, Random(0), rewards=rewards)
        trial.step()
        trial.step()
        assert trial.score == 3 - 2
        wall = Trial(Genome.uniform(Action.MOVE_WEST), Grid.from_rows(["+"]), Random(0), rewards)
        wall.step()
        assert wall.score == -7
