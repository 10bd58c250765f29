"""Population: the set of schedules evaluated in one generation."""

from __future__ import annotations

import random
from typing import Iterable, Iterator, Optional

from jobga.models import InvalidInputError, Job
from jobga.schedule import Schedule


class Population:
    """Fixed-size collection of schedules over one job set.

    Args:
        size: Number of schedules to create (must be >= 1).
        jobs: Job set every schedule is a permutation of.
        rng: Random generator used for the initial shuffles. If None uses
            module-level random.

    Raises:
        InvalidInputError: If ``size`` is below one.
    """

    def __init__(self, size: int, jobs: Iterable[Job], rng: Optional[random.Random] = None) -> None:
        if size < 1:
            raise InvalidInputError(f"Population size must be >= 1, got {size}")
        jobs = list(jobs)
        self._schedules: list[Schedule] = [Schedule(jobs, rng=rng) for _ in range(size)]

    @classmethod
    def from_schedules(cls, schedules: Iterable[Schedule]) -> Population:
        population = cls.__new__(cls)
        population._schedules = list(schedules)
        return population

    @property
    def schedules(self) -> list[Schedule]:
        return self._schedules

    def fittest(self) -> Schedule:
        """Return the schedule with the highest total profit.

        Linear scan with a strict comparison, so on ties the schedule met
        first wins.

        Raises:
            InvalidInputError: If the population is empty.
        """
        if not self._schedules:
            raise InvalidInputError("Cannot pick the fittest of an empty population")
        best = self._schedules[0]
        for schedule in self._schedules[1:]:
            if schedule.total_profit > best.total_profit:
                best = schedule
        return best

    def __len__(self) -> int:
        return len(self._schedules)

    def __iter__(self) -> Iterator[Schedule]:
        return iter(self._schedules)

    def __getitem__(self, index: int) -> Schedule:
        return self._schedules[index]
