"""Evolution engine: fitness-proportionate breeding and generation evaluation.

Generation barrier: breeding generation N+1 only starts once every genome
of generation N has a final score. Each trial draws from its own
``random.Random`` substream seeded from the generation rng, so trials share
no mutable state.
"""

from __future__ import annotations

import logging
import math
from random import Random
from typing import Callable, Sequence

from can_collector.config.types import GenerationResult, RewardSchedule, TrialResult
from can_collector.domain.genome import Genome, crossover
from can_collector.domain.grid import Grid
from can_collector.metrics.population import rule_diversity, score_summary
from can_collector.simulation.trial import run_trial

logger = logging.getLogger(__name__)

GridFactory = Callable[[Random], Grid]
"""Builds a fresh random grid from a trial substream."""

_SEED_BITS = 64


def normalized_score(raw_score: float, initial_can_count: int, pick_success: float) -> float:
    """Map a raw trial score onto [0, 1] relative to the best achievable score.

    Negative scores clamp to 0 so selection weights stay non-negative. A grid
    that started without cans scores 0.
    """
    if initial_can_count <= 0:
        return 0.0
    return max(0.0, raw_score) / (initial_can_count * pick_success)


def _selection_weights(fitness_weights: Sequence[float], population_size: int) -> list[float]:
    """Validate weights; fall back to uniform when a distinct pair is unreachable."""
    if len(fitness_weights) != population_size:
        raise ValueError("fitness_weights must have one entry per genome")
    weights = [float(w) for w in fitness_weights]
    if any(not math.isfinite(w) or w < 0.0 for w in weights):
        raise ValueError("fitness_weights must be finite non-negative numbers")
    if sum(1 for w in weights if w > 0.0) < 2:
        logger.warning(
            "fewer than two genomes have positive fitness; sampling parents uniformly"
        )
        return [1.0] * population_size
    return weights


def breed_next_generation(
    population: Sequence[Genome],
    fitness_weights: Sequence[float],
    mutation_count: int,
    rng: Random,
) -> list[Genome]:
    """Breed a same-size population by fitness-proportionate parent sampling.

    Each child comes from two distinct parents (a self-pair is redrawn),
    single-point crossover, then ``mutation_count`` point mutations.
    """
    size = len(population)
    if size < 2:
        raise ValueError("population must contain at least 2 genomes")
    if mutation_count < 0:
        raise ValueError("mutation_count must be >= 0")
    weights = _selection_weights(fitness_weights, size)
    indices = range(size)

    children: list[Genome] = []
    while len(children) < size:
        first, second = rng.choices(indices, weights=weights, k=2)
        if first == second:
            continue
        child = crossover(population[first], population[second], rng)
        child.mutate(mutation_count, rng)
        children.append(child)
    return children


def run_generation_trials(
    population: Sequence[Genome],
    grid_factory: GridFactory,
    max_steps: int,
    rng: Random,
    rewards: RewardSchedule | None = None,
) -> tuple[list[TrialResult], list[float]]:
    """Run one trial per genome on its own fresh grid and store normalized scores.

    Returns the raw trial results and the normalized score of each trial, both
    in population order. ``genome.score`` is also set, so a genome listed twice
    keeps only its last score there.
    """
    rewards = rewards or RewardSchedule()
    results: list[TrialResult] = []
    scores: list[float] = []
    for genome in population:
        trial_rng = Random(rng.getrandbits(_SEED_BITS))
        grid = grid_factory(trial_rng)
        result = run_trial(genome, grid, max_steps, trial_rng, rewards=rewards)
        score = normalized_score(result.score, result.initial_can_count, rewards.pick_success)
        genome.score = score
        results.append(result)
        scores.append(score)
    return results, scores


def evaluate_generation(
    population: Sequence[Genome],
    grid_factory: GridFactory,
    max_steps: int,
    rng: Random,
    rewards: RewardSchedule | None = None,
) -> list[float]:
    """Score every genome on a fresh grid; returns normalized scores in order."""
    _, scores = run_generation_trials(population, grid_factory, max_steps, rng, rewards=rewards)
    return scores


def summarize_generation(
    generation: int,
    population: Sequence[Genome],
    scores: Sequence[float],
    best_raw_score: float,
) -> GenerationResult:
    """Collect the per-generation summary handed to the display layer."""
    summary = score_summary(scores)
    return GenerationResult(
        generation=generation,
        max_score=summary["max"],
        mean_score=summary["mean"],
        min_score=summary["min"],
        median_score=summary["median"],
        rule_diversity=rule_diversity(population),
        best_raw_score=best_raw_score,
    )


def _evaluate_and_summarize(
    generation: int,
    population: list[Genome],
    grid_factory: GridFactory,
    max_steps: int,
    rng: Random,
    rewards: RewardSchedule,
) -> tuple[list[float], GenerationResult]:
    trials, scores = run_generation_trials(
        population, grid_factory, max_steps, rng, rewards=rewards
    )
    result = summarize_generation(
        generation, population, scores, max(trial.score for trial in trials)
    )
    logger.info(
        "generation %d: max=%.4f mean=%.4f diversity=%.3f",
        generation,
        result.max_score,
        result.mean_score,
        result.rule_diversity,
    )
    return scores, result


def run_generations(
    initial_population: Sequence[Genome],
    generation_count: int,
    mutation_count: int,
    max_steps: int,
    rng: Random,
    grid_factory: GridFactory,
    rewards: RewardSchedule | None = None,
    on_generation: Callable[[GenerationResult], None] | None = None,
) -> tuple[list[GenerationResult], list[Genome]]:
    """Evaluate the initial population, then alternate breeding and evaluation.

    Generation 0 is the initial population. Returns one result per
    evaluated generation (``generation_count + 1`` in total) and the final
    population with its scores set.
    """
    if len(initial_population) < 2:
        raise ValueError("population must contain at least 2 genomes")
    if generation_count < 0:
        raise ValueError("generation_count must be >= 0")
    rewards = rewards or RewardSchedule()

    population = list(initial_population)
    results: list[GenerationResult] = []
    scores, result = _evaluate_and_summarize(0, population, grid_factory, max_steps, rng, rewards)
    results.append(result)
    if on_generation is not None:
        on_generation(result)

    for generation in range(1, generation_count + 1):
        population = breed_next_generation(population, scores, mutation_count, rng)
        scores, result = _evaluate_and_summarize(
            generation, population, grid_factory, max_steps, rng, rewards
        )
        results.append(result)
        if on_generation is not None:
            on_generation(result)

    return results, population
