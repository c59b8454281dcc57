"""Evolution run orchestration: seeding, population setup, and artifacts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from random import Random
from typing import Callable

from can_collector.config.constants import MAX_EVOLUTION_WORK_UNITS
from can_collector.config.types import EvolutionConfig, GenerationResult
from can_collector.domain.genome import Genome
from can_collector.domain.grid import Grid
from can_collector.io.paths import best_genome_path, generation_log_path
from can_collector.simulation.engine import GridFactory, run_generations
from can_collector.simulation.persistence import write_best_genome, write_generation_log

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvolutionRun:
    """Per-generation results and the best genome of the final generation."""

    results: list[GenerationResult]
    best_genome: Genome
    generation_log_path: Path | None = None
    best_genome_path: Path | None = None


def make_grid_factory(config: EvolutionConfig) -> GridFactory:
    """Bind the grid settings of *config* into a factory for fresh grids."""

    def factory(rng: Random) -> Grid:
        return Grid.create(config.grid, rng)

    return factory


def _run_metadata(config: EvolutionConfig) -> dict[str, object]:
    return {
        "seed": config.seed,
        "grid_width": config.grid.width,
        "grid_height": config.grid.height,
        "fill_probability": config.grid.fill_probability,
        "population_size": config.population_size,
        "mutation_count": config.mutation_count,
        "max_steps": config.max_steps,
        "generations": config.generations,
        "pick_success": config.rewards.pick_success,
        "pick_fail": config.rewards.pick_fail,
        "wall_hit": config.rewards.wall_hit,
    }


def run_evolution(
    config: EvolutionConfig,
    on_generation: Callable[[GenerationResult], None] | None = None,
) -> EvolutionRun:
    """Evolve a population from ``config.seed`` and persist artifacts if requested."""
    if config.work_units > MAX_EVOLUTION_WORK_UNITS:
        raise ValueError(
            "evolution workload exceeds safety threshold; "
            "reduce population_size/generations/max_steps"
        )

    rng = Random(config.seed)
    initial_population = [Genome.create_random(rng) for _ in range(config.population_size)]
    logger.info(
        "evolving %d genomes for %d generations (seed=%d)",
        config.population_size,
        config.generations,
        config.seed,
    )
    results, population = run_generations(
        initial_population,
        generation_count=config.generations,
        mutation_count=config.mutation_count,
        max_steps=config.max_steps,
        rng=rng,
        grid_factory=make_grid_factory(config),
        rewards=config.rewards,
        on_generation=on_generation,
    )
    best = max(population, key=lambda genome: genome.score)

    log_path: Path | None = None
    genome_path: Path | None = None
    if config.out_dir is not None:
        out_dir = Path(config.out_dir)
        log_path = write_generation_log(results, generation_log_path(out_dir))
        genome_path = write_best_genome(
            best,
            best_genome_path(out_dir),
            metadata={**_run_metadata(config), "final_generation": config.generations},
        )
        logger.info("wrote %s and %s", log_path, genome_path)

    return EvolutionRun(
        results=results,
        best_genome=best,
        generation_log_path=log_path,
        best_genome_path=genome_path,
    )
