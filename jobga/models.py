"""Core data structures for the job sequencing problem.

This module defines:
    Job               -- immutable record (name, deadline, profit).
    InvalidInputError -- raised at the boundary for malformed input.
"""

from dataclasses import dataclass


class InvalidInputError(ValueError):
    """Input rejected before it reaches the genetic algorithm."""


@dataclass(frozen=True)
class Job:
    """Single unit of work.

    Attributes:
        name: Job label shown in reports.
        deadline: Advisory deadline; never enforced as a constraint.
        profit: Gain contributed to a schedule's fitness.

    Equality and hashing are by value, so two jobs with the same name,
    deadline and profit are interchangeable inside a schedule.
    """

    name: str
    deadline: int
    profit: int

    def __str__(self) -> str:
        return f"{self.name} (D: {self.deadline}, P: {self.profit})"


def validate_jobs(jobs: list[Job]) -> list[Job]:
    """Check a job list before it is handed to the optimizer.

    Args:
        jobs: Candidate job list.

    Returns:
        The same jobs as a new list (convenient inside expressions).

    Raises:
        InvalidInputError: If the list is empty or a job has an empty name.
    """
    jobs = list(jobs)
    if not jobs:
        raise InvalidInputError("At least one job is required")
    for job in jobs:
        if not job.name:
            raise InvalidInputError(f"Job name must be non-empty: {job!r}")
        if any(
            isinstance(v, bool) or not isinstance(v, int) for v in (job.deadline, job.profit)
        ):
            raise InvalidInputError(f"Deadline and profit must be integers: {job!r}")
    return jobs
