"""Run driver: generation loop, termination policy and result bundle.

The loop keeps only the current population; the previous generation is
dropped as soon as the next one exists. The reported best schedule is the
fittest member of the final population.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from jobga.genetic import GAParams, evolve_population
from jobga.models import InvalidInputError, Job, validate_jobs
from jobga.population import Population
from jobga.schedule import Schedule

logger = logging.getLogger("jobga.runner")

STOP_GENERATIONS = "generations"
STOP_STAGNATION = "stagnation"
STOP_TIME_LIMIT = "time_limit"


@dataclass(slots=True)
class TerminationPolicy:
    """When to stop the generation loop.

    Attributes:
        generations: Maximum number of generations (always applied).
        stagnation_generations: Stop after this many consecutive generations
            without improvement of the best profit seen so far. None disables.
        time_limit_ms: Wall-clock budget checked between generations. None
            disables.
    """

    generations: int
    stagnation_generations: int | None = None
    time_limit_ms: int | None = None

    def __post_init__(self) -> None:
        if self.generations < 0:
            raise InvalidInputError(f"generations must be >= 0, got {self.generations}")
        if self.stagnation_generations is not None and self.stagnation_generations < 1:
            raise InvalidInputError(
                f"stagnation_generations must be >= 1, got {self.stagnation_generations}"
            )
        if self.time_limit_ms is not None and self.time_limit_ms < 0:
            raise InvalidInputError(f"time_limit_ms must be >= 0, got {self.time_limit_ms}")


@dataclass
class GAState:
    """Mutable bookkeeping of a running search."""

    population: Population
    best_profit: int
    profit_history: List[int] = field(default_factory=list)
    start_time: float = 0.0
    generation: int = 0
    last_improvement: int = 0

    def record(self) -> bool:
        """Store the current fittest profit. Returns True if it improved."""
        profit = self.population.fittest().total_profit
        self.profit_history.append(profit)
        if profit > self.best_profit:
            self.best_profit = profit
            self.last_improvement = self.generation
            return True
        return False

    def elapsed_ms(self) -> int:
        return int((time.perf_counter() - self.start_time) * 1000)


@dataclass
class GAResult:
    best: Schedule
    best_profit: int
    generations_run: int
    profit_history: List[int]
    elapsed_s: float
    stop_reason: str
    population_size: int
    params: GAParams
    termination: TerminationPolicy
    seed: int | None = None


def _stop_reason(state: GAState, policy: TerminationPolicy) -> Optional[str]:
    if state.generation >= policy.generations:
        return STOP_GENERATIONS
    if (
        policy.stagnation_generations is not None
        and state.generation - state.last_improvement >= policy.stagnation_generations
    ):
        return STOP_STAGNATION
    if policy.time_limit_ms is not None and state.elapsed_ms() >= policy.time_limit_ms:
        return STOP_TIME_LIMIT
    return None


def run_genetic_algorithm(
    jobs: Iterable[Job],
    population_size: int,
    generations: int,
    params: Optional[GAParams] = None,
    rng: Optional[random.Random] = None,
    termination: Optional[TerminationPolicy] = None,
    seed: int | None = None,
) -> GAResult:
    """Evolve a random population and return the fittest schedule found.

    Args:
        jobs: Non-empty job list.
        population_size: Schedules per generation (>= 1).
        generations: Generation count (>= 0). Must equal
            ``termination.generations`` when a policy is given.
        params: Genetic operator settings.
        rng: Random generator (seeded for reproducible runs). If None a
            fresh ``random.Random(seed)`` is created.
        termination: Optional policy with stagnation / time limits.
        seed: Recorded in the result for traceability.

    Returns:
        GAResult with the best schedule, its profit and per-generation
        history (initial population first).

    Raises:
        InvalidInputError: On empty job list, population size < 1,
            negative generation count or a count that disagrees with
            ``termination``.
    """
    jobs = validate_jobs(jobs)
    if population_size < 1:
        raise InvalidInputError(f"population_size must be >= 1, got {population_size}")
    if termination is None:
        termination = TerminationPolicy(generations=generations)
    elif termination.generations != generations:
        raise InvalidInputError(
            f"generations={generations} conflicts with termination.generations="
            f"{termination.generations}"
        )
    if params is None:
        params = GAParams()
    if rng is None:
        rng = random.Random(seed)

    logger.info(
        "GA start: jobs=%d population=%d generations=%d mutation_rate=%.3f "
        "tournament=%d crossover=%s",
        len(jobs),
        population_size,
        termination.generations,
        params.mutation_rate,
        params.tournament_size,
        params.crossover,
    )
    t0 = time.perf_counter()
    population = Population(population_size, jobs, rng=rng)
    state = GAState(
        population=population,
        best_profit=population.fittest().total_profit,
        start_time=t0,
    )
    state.profit_history.append(state.best_profit)

    report_every = max(1, termination.generations // 10)
    while True:
        reason = _stop_reason(state, termination)
        if reason is not None:
            break
        state.population = evolve_population(state.population, params, rng=rng)
        state.generation += 1
        improved = state.record()
        logger.debug(
            "gen=%d fittest=%d best=%d improved=%s",
            state.generation,
            state.profit_history[-1],
            state.best_profit,
            improved,
        )
        if state.generation % report_every == 0:
            logger.info(
                "Progress %d/%d: best=%d",
                state.generation,
                termination.generations,
                state.best_profit,
            )

    best = state.population.fittest()
    elapsed = time.perf_counter() - t0
    logger.info(
        "GA stop (%s) after %d generations: best profit=%d (%.4fs)",
        reason,
        state.generation,
        best.total_profit,
        elapsed,
    )
    return GAResult(
        best=best,
        best_profit=best.total_profit,
        generations_run=state.generation,
        profit_history=state.profit_history,
        elapsed_s=elapsed,
        stop_reason=reason,
        population_size=population_size,
        params=params,
        termination=termination,
        seed=seed,
    )


def run_many(
    jobs: Iterable[Job],
    population_size: int,
    runs: int,
    termination: TerminationPolicy,
    params: Optional[GAParams] = None,
    seed: int | None = None,
) -> tuple[GAResult, List[GAResult]]:
    """Independent runs with seeds ``seed, seed + 1, ...``; returns (best, all).

    With ``seed`` None every run draws from its own unseeded generator.
    Ties on profit keep the earliest run.
    """
    if runs < 1:
        raise InvalidInputError(f"runs must be >= 1, got {runs}")
    jobs = validate_jobs(jobs)
    results: List[GAResult] = []
    for i in range(runs):
        run_seed = seed + i if seed is not None else None
        result = run_genetic_algorithm(
            jobs,
            population_size,
            termination.generations,
            params=params,
            rng=random.Random(run_seed),
            termination=termination,
            seed=run_seed,
        )
        results.append(result)
        logger.info("Run %d/%d: best profit=%d", i + 1, runs, result.best_profit)
    best = results[0]
    for result in results[1:]:
        if result.best_profit > best.best_profit:
            best = result
    return best, results
