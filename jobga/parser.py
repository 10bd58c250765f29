"""Job list input: ``name deadline profit`` lines and config entries."""

from __future__ import annotations

from typing import Any, Iterable

from jobga.models import InvalidInputError, Job, validate_jobs


def parse_int(value: Any, what: str) -> int:
    """Strict integer check for values read from YAML/JSON config.

    Only real ints pass; bools, floats, strings and None are rejected so
    that ``1.9``, ``true`` or ``"3"`` never turn into a different value.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise InvalidInputError(f"{what} must be an integer, got {value!r}")


def parse_job_line(line: str) -> Job:
    """Parse a single ``name deadline profit`` record.

    Raises:
        InvalidInputError: On wrong token count or non-integer numbers.
    """
    tokens = line.split()
    if len(tokens) != 3:
        raise InvalidInputError(
            f"Expected 'name deadline profit', got {len(tokens)} token(s): {line!r}"
        )
    name, deadline, profit = tokens
    try:
        return Job(name=name, deadline=int(deadline), profit=int(profit))
    except ValueError as e:
        raise InvalidInputError(f"Deadline and profit must be integers: {line!r}") from e


def parse_jobs(lines: Iterable[str]) -> list[Job]:
    jobs: list[Job] = []
    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        try:
            jobs.append(parse_job_line(line))
        except InvalidInputError as e:
            raise InvalidInputError(f"line {line_no}: {e}") from e
    return validate_jobs(jobs)


def load_jobs(file_path: str) -> list[Job]:
    with open(file_path, "r", encoding="utf-8") as f:
        return parse_jobs(f)


def jobs_from_config(entries: Any) -> list[Job]:
    """Build jobs from a config ``jobs`` list.

    Each entry is either a mapping with ``name``, ``deadline`` and ``profit``
    keys or a ``"name deadline profit"`` string.
    """
    if not isinstance(entries, list):
        raise InvalidInputError("'jobs' must be a list")
    jobs: list[Job] = []
    for idx, entry in enumerate(entries):
        if isinstance(entry, str):
            jobs.append(parse_job_line(entry))
        elif isinstance(entry, dict):
            missing = [k for k in ("name", "deadline", "profit") if k not in entry]
            if missing:
                raise InvalidInputError(f"jobs[{idx}] missing key(s): {', '.join(missing)}")
            name = entry["name"]
            if not isinstance(name, str) or not name:
                raise InvalidInputError(f"jobs[{idx}] name must be a non-empty string: {name!r}")
            jobs.append(
                Job(
                    name=name,
                    deadline=parse_int(entry["deadline"], f"jobs[{idx}].deadline"),
                    profit=parse_int(entry["profit"], f"jobs[{idx}].profit"),
                )
            )
        else:
            raise InvalidInputError(f"jobs[{idx}] has unsupported type {type(entry).__name__}")
    return validate_jobs(jobs)
