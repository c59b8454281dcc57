"""CLI entrypoint for evolution runs.

This module owns CLI argument parsing, the text display of generation
scores, and the demo routine. All domain logic lives in the extracted
modules:

- ``can_collector.config``                – constants and configuration dataclasses
- ``can_collector.domain``                – sensor encoding, grid, genome
- ``can_collector.simulation``            – trial simulator and evolution engine
- ``can_collector.experiments.evolution`` – seeded runs and artifact writing
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from random import Random
from typing import Callable, TextIO, TypeVar

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
    SENSOR_COMBINATIONS,
    WALL_HIT,
)
from can_collector.config.types import (
    EvolutionConfig,
    GenerationResult,
    GridConfig,
    RewardSchedule,
)
from can_collector.domain.genome import Genome
from can_collector.domain.grid import Grid
from can_collector.domain.sensor import decode, describe, encode
from can_collector.experiments.evolution import run_evolution
from can_collector.io.paths import resolve_within_base

logger = logging.getLogger(__name__)

T = TypeVar("T")

CSV_HEADER = "generation,score"
"""Header of the generation score stream."""

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# ---------------------------------------------------------------------------
# CLI parsing helpers
# ---------------------------------------------------------------------------


def _as_int(raw: object, key: str) -> int:
    """Accept ints, integral floats and numeric strings; booleans are rejected."""
    if isinstance(raw, float) and raw.is_integer():
        raw = int(raw)
    if isinstance(raw, bool) or not isinstance(raw, (int, str)):
        raise ValueError(f"{key} must be an integer, got {raw!r}")
    return int(raw)


def _as_float(raw: object, key: str) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise ValueError(f"{key} must be a number, got {raw!r}")
    return float(raw)


def _as_optional_path(raw: object, key: str) -> Path | None:
    if raw is None:
        return None
    if not isinstance(raw, (str, Path)):
        raise ValueError(f"{key} must be a path string, got {raw!r}")
    return Path(raw)


def _setting(
    args: argparse.Namespace,
    file_cfg: dict[str, object],
    key: str,
    default: T,
    coerce: Callable[[object, str], T],
) -> T:
    """Look up *key* on the command line, then in the config file, then *default*.

    Argparse destinations share their names with the config-file keys.
    """
    raw = getattr(args, key)
    if raw is None:
        raw = file_cfg.get(key, default)
    return coerce(raw, key)


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Evolve can-collecting robot rule tables with a genetic algorithm"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--grid-width", type=int, default=None)
    parser.add_argument("--grid-height", type=int, default=None)
    parser.add_argument("--fill-probability", type=float, default=None)
    parser.add_argument("--population-size", type=int, default=None)
    parser.add_argument("--mutation-count", type=int, default=None)
    parser.add_argument("--max-steps", type=int, default=None)
    parser.add_argument("--generations", type=int, default=None)
    parser.add_argument("--pick-success", type=float, default=None)
    parser.add_argument("--pick-fail", type=float, default=None)
    parser.add_argument("--wall-hit", type=float, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=None,
        help="Write generation_log.parquet and best_genome.json under this directory",
    )
    parser.add_argument(
        "--base-dir",
        type=Path,
        default=Path("."),
        help="Trusted root; --out-dir must resolve inside it",
    )
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default="INFO")
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Print an example grid, all sensor codes, and a random genome, then exit",
    )
    return parser


def _build_config(args: argparse.Namespace, file_cfg: dict[str, object]) -> EvolutionConfig:
    """Resolve every tunable with CLI > file > default precedence."""
    out_dir = _setting(args, file_cfg, "out_dir", None, _as_optional_path)
    if out_dir is not None:
        out_dir = resolve_within_base(out_dir, Path(args.base_dir).resolve())
    grid = GridConfig(
        width=_setting(args, file_cfg, "grid_width", GRID_WIDTH, _as_int),
        height=_setting(args, file_cfg, "grid_height", GRID_HEIGHT, _as_int),
        fill_probability=_setting(
            args, file_cfg, "fill_probability", FILL_PROBABILITY, _as_float
        ),
    )
    rewards = RewardSchedule(
        pick_success=_setting(args, file_cfg, "pick_success", PICK_SUCCESS, _as_float),
        pick_fail=_setting(args, file_cfg, "pick_fail", PICK_FAIL, _as_float),
        wall_hit=_setting(args, file_cfg, "wall_hit", WALL_HIT, _as_float),
    )
    return EvolutionConfig(
        grid=grid,
        rewards=rewards,
        population_size=_setting(args, file_cfg, "population_size", POPULATION_SIZE, _as_int),
        mutation_count=_setting(args, file_cfg, "mutation_count", MUTATION_COUNT, _as_int),
        max_steps=_setting(args, file_cfg, "max_steps", MAX_STEPS, _as_int),
        generations=_setting(args, file_cfg, "generations", NUM_GENERATIONS, _as_int),
        seed=_setting(args, file_cfg, "seed", 0, _as_int),
        out_dir=out_dir,
    )


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------


def format_generation_line(result: GenerationResult) -> str:
    """Two-column CSV row for one generation."""
    return f"{result.generation},{result.max_score}"


def run_demo(config: EvolutionConfig, out: TextIO) -> None:
    """Print an example world, every sensor code round trip, and a random genome."""
    rng = Random(config.seed)
    grid = Grid.create(config.grid, rng)
    out.write("Example world\n")
    out.write(grid.render(robot=grid.center) + "\n")
    out.write(f"Total cans: {grid.can_count}\n")
    out.write(f"Current input: {describe(grid.sense(*grid.center))}\n\n")

    out.write("Input combinations + integer conversion\n")
    for code in range(SENSOR_COMBINATIONS):
        reading = decode(code)
        out.write(f"{code} -> {describe(reading)} -> {encode(reading)}\n")
    out.write("\n")

    out.write("Random robot\n")
    out.write(Genome.create_random(rng).render() + "\n")


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for evolution runs.

    Supports ``--config path/to/config.json`` for experiment reproducibility.
    CLI arguments override config-file values; config-file values override
    built-in defaults. Generation scores stream to stdout as CSV; logs go to
    stderr.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    # Load config file defaults (CLI overrides file, file overrides built-in)
    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")
        if not isinstance(file_cfg, dict):
            parser.error(f"Config file must contain a JSON object: {args.config}")

    try:
        config = _build_config(args, file_cfg)
    except ValueError as exc:
        parser.error(str(exc))

    if args.demo:
        run_demo(config, sys.stdout)
        return

    if config.work_units > MAX_EVOLUTION_WORK_UNITS:
        parser.error(
            f"evolution workload {config.work_units} exceeds {MAX_EVOLUTION_WORK_UNITS}; "
            "reduce population_size/generations/max_steps"
        )

    print(CSV_HEADER, flush=True)

    def emit(result: GenerationResult) -> None:
        print(format_generation_line(result), flush=True)

    run = run_evolution(config, on_generation=emit)
    log_path = run.generation_log_path
    genome_path = run.best_genome_path
    summary = {
        "generations": len(run.results),
        "final_max_score": run.results[-1].max_score,
        "best_max_score": max(result.max_score for result in run.results),
        "best_genome_score": run.best_genome.score,
        "generation_log": None if log_path is None else str(log_path),
        "best_genome": None if genome_path is None else str(genome_path),
    }
    logger.info("summary: %s", json.dumps(summary, ensure_ascii=False))


if __name__ == "__main__":
    main()
