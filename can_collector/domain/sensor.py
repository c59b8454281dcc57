"""Sensor encoding: 5-cell von Neumann neighborhood <-> dense integer code.

A reading lists the cell under the robot followed by its four neighbors in
the order center, north, east, south, west. Readings pack into base-3
integers with the center as the most significant digit, giving exactly
``SENSOR_COMBINATIONS`` (243) codes.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, NamedTuple, NewType

from can_collector.config.constants import NUM_CELL_STATES, SENSOR_COMBINATIONS, SENSOR_LENGTH

SensorCode = NewType("SensorCode", int)
"""Integer in [0, SENSOR_COMBINATIONS) produced by :func:`encode`."""

DIRECTION_SYMBOLS: tuple[str, ...] = ("+", "^", ">", "v", "<")
"""Display symbols for center, north, east, south, west."""


class Cell(Enum):
    """State of one grid location as seen by the robot."""

    EMPTY = 0
    WALL = 1
    CAN = 2


CELL_LABELS: dict[Cell, str] = {
    Cell.EMPTY: "Empty",
    Cell.WALL: "Wall",
    Cell.CAN: "Can",
}


class SensorReading(NamedTuple):
    """Cell states around the robot, center first."""

    center: Cell
    north: Cell
    east: Cell
    south: Cell
    west: Cell


class SensorCodeRangeError(ValueError):
    """Raised when decoding an integer outside the sensor code range."""


def encode(reading: SensorReading) -> SensorCode:
    """Pack a reading into its base-3 sensor code."""
    code = 0
    for cell in reading:
        code = code * NUM_CELL_STATES + cell.value
    return SensorCode(code)


def decode(code: int) -> SensorReading:
    """Unpack a sensor code; exact inverse of :func:`encode`."""
    if not 0 <= code < SENSOR_COMBINATIONS:
        raise SensorCodeRangeError(
            f"sensor code must be in [0, {SENSOR_COMBINATIONS}), got {code}"
        )
    digits: list[Cell] = []
    for _ in range(SENSOR_LENGTH):
        code, digit = divmod(code, NUM_CELL_STATES)
        digits.append(Cell(digit))
    digits.reverse()
    return SensorReading(*digits)


def all_readings() -> Iterator[SensorReading]:
    """Yield every possible reading in sensor-code order."""
    for code in range(SENSOR_COMBINATIONS):
        yield decode(code)


def cell_label(cell: Cell) -> str:
    """Return the display name of a cell state."""
    try:
        return CELL_LABELS[cell]
    except KeyError:
        raise ValueError(f"invalid cell state {cell!r}") from None


def describe(reading: SensorReading) -> str:
    """Render a reading as ``(+Empty) (^Wall) ...`` for display."""
    return " ".join(
        f"({symbol}{cell_label(cell)})"
        for symbol, cell in zip(DIRECTION_SYMBOLS, reading, strict=True)
    )
