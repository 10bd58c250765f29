"""Schedule: one candidate ordering of all jobs (a GA individual)."""

from __future__ import annotations

import random
from typing import Iterable, Iterator, Optional

from jobga.models import Job


class Schedule:
    """Permutation of the job set with its total profit.

    The constructor shuffles a copy of the given jobs, so every new schedule
    is a uniformly random permutation regardless of input order. Use
    :meth:`from_order` to keep an order as it is (crossover children).

    Total profit is computed once on construction; :meth:`swap` only
    reorders jobs and therefore never changes it.
    """

    __slots__ = ("_jobs", "_total_profit")

    def __init__(self, jobs: Iterable[Job], rng: Optional[random.Random] = None) -> None:
        if rng is None:
            rng = random
        self._jobs: list[Job] = list(jobs)
        rng.shuffle(self._jobs)
        self._total_profit = sum(job.profit for job in self._jobs)

    @classmethod
    def from_order(cls, jobs: Iterable[Job]) -> Schedule:
        schedule = cls.__new__(cls)
        schedule._jobs = list(jobs)
        schedule._total_profit = sum(job.profit for job in schedule._jobs)
        return schedule

    @property
    def jobs(self) -> tuple[Job, ...]:
        return tuple(self._jobs)

    @property
    def total_profit(self) -> int:
        return self._total_profit

    def swap(self, i: int, j: int) -> None:
        """Exchange the jobs at positions ``i`` and ``j`` (``i == j`` is a no-op)."""
        self._jobs[i], self._jobs[j] = self._jobs[j], self._jobs[i]

    def __len__(self) -> int:
        return len(self._jobs)

    def __iter__(self) -> Iterator[Job]:
        return iter(self._jobs)

    def __str__(self) -> str:
        return "[" + ", ".join(str(job) for job in self._jobs) + "]"

    def __repr__(self) -> str:
        return f"Schedule(total_profit={self._total_profit}, jobs={self._jobs!r})"
