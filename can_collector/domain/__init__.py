"""Domain layer: sensor encoding, can grid, and genome operators."""

from can_collector.domain.genome import (
    ACTION_LABELS,
    GENOME_LENGTH,
    MOVE_ACTIONS,
    Action,
    Genome,
    action_label,
    crossover,
    crossover_at,
)
from can_collector.domain.grid import Grid
from can_collector.domain.sensor import (
    Cell,
    SensorCode,
    SensorCodeRangeError,
    SensorReading,
    all_readings,
    cell_label,
    decode,
    describe,
    encode,
)

__all__ = [
    "ACTION_LABELS",
    "Action",
    "Cell",
    "GENOME_LENGTH",
    "Genome",
    "Grid",
    "MOVE_ACTIONS",
    "SensorCode",
    "SensorCodeRangeError",
    "SensorReading",
    "action_label",
    "all_readings",
    "cell_label",
    "crossover",
    "crossover_at",
    "decode",
    "describe",
    "encode",
]
