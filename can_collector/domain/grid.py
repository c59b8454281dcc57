"""Bounded can grid: occupancy map, wall synthesis, and can collection.

Coordinates are ``(x, y)`` with ``y`` growing northwards. Cells outside the
grid read as walls; walls are never stored.

Invariant: ``can_count`` always equals the number of occupied cells.
"""

from __future__ import annotations

from dataclasses import dataclass
from random import Random
from typing import TYPE_CHECKING

from can_collector.domain.sensor import Cell, SensorReading

if TYPE_CHECKING:
    from can_collector.config.types import GridConfig


@dataclass
class Grid:
    """Rectangular occupancy map of cans."""

    width: int
    height: int
    cans: list[list[bool]]  # cans[y][x]
    can_count: int
    initial_can_count: int

    @classmethod
    def create_random(
        cls, width: int, height: int, fill_probability: float, rng: Random
    ) -> Grid:
        """Place a can on each cell independently with ``fill_probability``."""
        if width < 1 or height < 1:
            raise ValueError("grid dimensions must be >= 1")
        if not 0.0 <= fill_probability <= 1.0:
            raise ValueError("fill_probability must be in [0.0, 1.0]")
        cans = [[rng.random() < fill_probability for _ in range(width)] for _ in range(height)]
        count = sum(sum(row) for row in cans)
        return cls(
            width=width,
            height=height,
            cans=cans,
            can_count=count,
            initial_can_count=count,
        )

    @classmethod
    def create(cls, config: GridConfig, rng: Random) -> Grid:
        """Initialize a random grid from a :class:`GridConfig`."""
        return cls.create_random(config.width, config.height, config.fill_probability, rng)

    @classmethod
    def from_rows(cls, rows: list[str]) -> Grid:
        """Build a grid from text rows listed top (north) first; ``+`` marks a can."""
        if not rows or not rows[0]:
            raise ValueError("rows must describe at least one cell")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("rows must all have the same length")
        cans = [[ch == "+" for ch in row] for row in reversed(rows)]
        count = sum(sum(row) for row in cans)
        return cls(
            width=width,
            height=len(rows),
            cans=cans,
            can_count=count,
            initial_can_count=count,
        )

    @property
    def center(self) -> tuple[int, int]:
        """Robot start position."""
        return self.width // 2, self.height // 2

    def is_in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def state_at(self, x: int, y: int) -> Cell:
        """Return the cell state, synthesizing walls outside the grid."""
        if not self.is_in_bounds(x, y):
            return Cell.WALL
        return Cell.CAN if self.cans[y][x] else Cell.EMPTY

    def sense(self, x: int, y: int) -> SensorReading:
        """Read the robot's cell and its four cardinal neighbors."""
        return SensorReading(
            center=self.state_at(x, y),
            north=self.state_at(x, y + 1),
            east=self.state_at(x + 1, y),
            south=self.state_at(x, y - 1),
            west=self.state_at(x - 1, y),
        )

    def try_collect(self, x: int, y: int) -> bool:
        """Remove the can at ``(x, y)`` if there is one.

        Callers keep ``(x, y)`` inside the grid; the simulator never lets the
        robot leave it.
        """
        if not self.cans[y][x]:
            return False
        self.cans[y][x] = False
        self.can_count -= 1
        return True

    def render(self, robot: tuple[int, int] | None = None) -> str:
        """Text dump, north row first: ``+`` can, ``.`` empty, ``@``/``#`` robot."""
        lines: list[str] = []
        for y in range(self.height - 1, -1, -1):
            symbols: list[str] = []
            for x in range(self.width):
                has_can = self.cans[y][x]
                if robot is not None and robot == (x, y):
                    symbols.append("@" if has_can else "#")
                else:
                    symbols.append("+" if has_can else ".")
            lines.append(" ".join(symbols))
        return "\n".join(lines)
