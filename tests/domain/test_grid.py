"""Tests for can_collector.domain.grid module."""

from __future__ import annotations

from random import Random

import pytest

from can_collector.config.types import GridConfig
from can_collector.domain.grid import Grid
from can_collector.domain.sensor import Cell, SensorReading


class TestGridCreate:
    def test_zero_fill_has_no_cans(self) -> None:
        grid = Grid.create_random(11, 11, 0.0, Random(0))
        assert grid.can_count == 0
        assert grid.initial_can_count == 0

    def test_full_fill_has_a_can_everywhere(self) -> None:
        grid = Grid.create_random(7, 4, 1.0, Random(0))
        assert grid.can_count == 28
        assert all(all(row) for row in grid.cans)

    def test_can_count_matches_occupancy(self) -> None:
        grid = Grid.create_random(11, 11, 0.2, Random(3))
        assert grid.can_count == sum(sum(row) for row in grid.cans)
        assert grid.initial_can_count == grid.can_count

    def test_same_seed_same_grid(self) -> None:
        a = Grid.create_random(11, 11, 0.2, Random(42))
        b = Grid.create_random(11, 11, 0.2, Random(42))
        assert a.cans == b.cans

    def test_create_from_config(self) -> None:
        grid = Grid.create(GridConfig(width=5, height=3, fill_probability=1.0), Random(0))
        assert (grid.width, grid.height, grid.can_count) == (5, 3, 15)

    def test_invalid_arguments_raise(self) -> None:
        with pytest.raises(ValueError):
            Grid.create_random(0, 5, 0.2, Random(0))
        with pytest.raises(ValueError):
            Grid.create_random(5, 5, 1.2, Random(0))

    def test_center(self) -> None:
        assert Grid.create_random(11, 11, 0.0, Random(0)).center == (5, 5)

    def test_from_rows_puts_first_row_north(self) -> None:
        grid = Grid.from_rows(["+..", "...", "..+"])
        assert grid.state_at(0, 2) is Cell.CAN
        assert grid.state_at(2, 0) is Cell.CAN
        assert grid.can_count == 2


class TestGridQueries:
    @pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (5, 0), (0, 4), (-3, 10), (99, 99)])
    def test_outside_is_wall(self, x: int, y: int) -> None:
        for fill in (0.0, 1.0):
            grid = Grid.create_random(5, 4, fill, Random(0))
            assert grid.state_at(x, y) is Cell.WALL
            assert grid.is_in_bounds(x, y) is False

    def test_inside_reports_occupancy(self) -> None:
        grid = Grid.from_rows(["+.", ".+"])
        assert grid.state_at(0, 1) is Cell.CAN
        assert grid.state_at(1, 1) is Cell.EMPTY
        assert grid.is_in_bounds(1, 1) is True

    def test_sense_uses_north_as_increasing_y(self) -> None:
        grid = Grid.from_rows(
            [
                ".+.",
                "..+",
                "...",
            ]
        )
        assert grid.sense(1, 1) == SensorReading(
            center=Cell.EMPTY,
            north=Cell.CAN,
            east=Cell.CAN,
            south=Cell.EMPTY,
            west=Cell.EMPTY,
        )

    def test_sense_in_corner_sees_walls(self) -> None:
        grid = Grid.from_rows(["+"])
        assert grid.sense(0, 0) == SensorReading(
            Cell.CAN, Cell.WALL, Cell.WALL, Cell.WALL, Cell.WALL
        )


class TestTryCollect:
    def test_collect_on_empty_cell_is_noop(self) -> None:
        grid = Grid.from_rows(["..", ".+"])
        assert grid.try_collect(0, 0) is False
        assert grid.can_count == 1

    def test_collect_on_can_removes_it(self) -> None:
        grid = Grid.from_rows(["..", ".+"])
        assert grid.try_collect(1, 0) is True
        assert grid.can_count == 0
        assert grid.state_at(1, 0) is Cell.EMPTY
        assert grid.initial_can_count == 1

    def test_second_collect_fails(self) -> None:
        grid = Grid.from_rows(["+"])
        assert grid.try_collect(0, 0) is True
        assert grid.try_collect(0, 0) is False
        assert grid.can_count == 0


class TestRender:
    def test_render_shape(self) -> None:
        grid = Grid.create_random(6, 3, 0.5, Random(1))
        lines = grid.render().split("\n")
        assert len(lines) == 3
        assert all(len(line.split(" ")) == 6 for line in lines)

    def test_render_symbols_and_robot(self) -> None:
        grid = Grid.from_rows(["+.", ".+"])
        assert grid.render() == "+ .\n. +"
        assert grid.render(robot=(1, 0)) == "+ .\n. @"
        assert grid.render(robot=(1, 1)) == "+ #\n. +"
