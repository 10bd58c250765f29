"""Genetic operators and the single-generation evolution step.

Concepts
--------
Tournament selection
    Draw ``tournament_size`` schedules uniformly with replacement and keep
    the fittest of the draw. Gives rank-based selection pressure without
    sorting the whole population.
Crossover
    ``"append"``: the child takes parent1's order and then appends any job
    of parent2 it does not contain yet. Parents always span the full job
    set, so the child is a copy of parent1.
    ``"ordered"``: classic OX. A random slice of parent1 keeps its
    positions; the remaining positions are filled with parent2's jobs in
    parent2's order.
Mutation
    Each position is swapped, with probability ``mutation_rate``, with a
    uniformly random position (possibly itself).
"""

from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass
from typing import Optional

from jobga.models import InvalidInputError
from jobga.population import Population
from jobga.schedule import Schedule

MUTATION_RATE = 0.01
TOURNAMENT_SIZE = 5
CROSSOVER_MODES = ("append", "ordered")


@dataclass(slots=True)
class GAParams:
    """Hyper-parameters of one evolution step."""

    mutation_rate: float = MUTATION_RATE
    tournament_size: int = TOURNAMENT_SIZE
    crossover: str = "append"

    def __post_init__(self) -> None:
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise InvalidInputError(
                f"mutation_rate must be within [0, 1], got {self.mutation_rate}"
            )
        if self.tournament_size < 1:
            raise InvalidInputError(
                f"tournament_size must be >= 1, got {self.tournament_size}"
            )
        if self.crossover not in CROSSOVER_MODES:
            raise InvalidInputError(
                f"Unknown crossover={self.crossover!r}, expected one of {CROSSOVER_MODES}"
            )


def tournament_selection(
    population: Population,
    tournament_size: int = TOURNAMENT_SIZE,
    rng: Optional[random.Random] = None,
) -> Schedule:
    """Return the fittest of ``tournament_size`` random draws (with replacement)."""
    if rng is None:
        rng = random
    n = len(population)
    contenders = [population[rng.randrange(n)] for _ in range(tournament_size)]
    return Population.from_schedules(contenders).fittest()


def append_crossover(parent1: Schedule, parent2: Schedule) -> Schedule:
    child_jobs = list(parent1.jobs)
    present = set(child_jobs)
    for job in parent2:
        if job not in present:
            child_jobs.append(job)
            present.add(job)
    return Schedule.from_order(child_jobs)


def ordered_crossover(
    parent1: Schedule,
    parent2: Schedule,
    rng: Optional[random.Random] = None,
) -> Schedule:
    """OX crossover; keeps every job exactly as often as in the parents."""
    if rng is None:
        rng = random
    p1 = list(parent1.jobs)
    if len(p1) < 2:
        return Schedule.from_order(p1)
    a, b = sorted(rng.sample(range(len(p1)), 2))
    kept = p1[a:b]
    # multiset difference, so value-equal duplicate jobs survive
    pending = Counter(kept)
    remaining = []
    for job in parent2:
        if pending[job] > 0:
            pending[job] -= 1
        else:
            remaining.append(job)
    return Schedule.from_order(remaining[:a] + kept + remaining[a:])


def crossover(
    parent1: Schedule,
    parent2: Schedule,
    mode: str = "append",
    rng: Optional[random.Random] = None,
) -> Schedule:
    if mode == "append":
        return append_crossover(parent1, parent2)
    elif mode == "ordered":
        return ordered_crossover(parent1, parent2, rng=rng)
    else:
        raise InvalidInputError(f"Unknown crossover={mode!r}")


def mutate(
    schedule: Schedule,
    mutation_rate: float = MUTATION_RATE,
    rng: Optional[random.Random] = None,
) -> None:
    """Swap mutation applied in place."""
    if rng is None:
        rng = random
    n = len(schedule)
    for pos in range(n):
        if rng.random() < mutation_rate:
            schedule.swap(pos, rng.randrange(n))


def evolve_population(
    population: Population,
    params: Optional[GAParams] = None,
    rng: Optional[random.Random] = None,
) -> Population:
    """Produce the next generation; the input population is left untouched.

    Args:
        population: Current generation (non-empty).
        params: Operator settings; defaults to :class:`GAParams` defaults.
        rng: Random generator for selection, crossover and mutation. If None
            uses module-level random.

    Returns:
        New population of the same size.
    """
    if params is None:
        params = GAParams()
    if rng is None:
        rng = random
    if len(population) == 0:
        raise InvalidInputError("Cannot evolve an empty population")
    children: list[Schedule] = []
    for _ in range(len(population)):
        parent1 = tournament_selection(population, params.tournament_size, rng=rng)
        parent2 = tournament_selection(population, params.tournament_size, rng=rng)
        child = crossover(parent1, parent2, mode=params.crossover, rng=rng)
        mutate(child, params.mutation_rate, rng=rng)
        children.append(child)
    return Population.from_schedules(children)
