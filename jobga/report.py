"""Text and JSON rendering of a finished run."""

from __future__ import annotations

import json
import os
from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, Iterable, List

from jobga.models import Job
from jobga.runner import GAResult
from jobga.schedule import Schedule


def format_jobs(jobs: Iterable[Job]) -> str:
    lines = ["Given Jobs along with Name, Deadlines and Profit:"]
    lines.extend(str(job) for job in jobs)
    return "\n".join(lines)


def format_best_schedule(schedule: Schedule) -> str:
    return f"Best Schedule: \n{schedule}\nTotal Profit: {schedule.total_profit}"


def render_summary(jobs: Iterable[Job], result: GAResult) -> str:
    """Input listing followed by the best schedule, as one text block."""
    return format_jobs(jobs) + "\n\n\n" + format_best_schedule(result.best)


def _job_to_dict(job: Job) -> Dict[str, Any]:
    return {"name": job.name, "deadline": job.deadline, "profit": job.profit}


def result_to_dict(result: GAResult, jobs: Iterable[Job]) -> Dict[str, Any]:
    return {
        "jobs": [_job_to_dict(j) for j in jobs],
        "population_size": result.population_size,
        "seed": result.seed,
        "params": asdict(result.params),
        "termination": asdict(result.termination),
        "generations_run": result.generations_run,
        "stop_reason": result.stop_reason,
        "elapsed_s": result.elapsed_s,
        "best": {
            "total_profit": result.best_profit,
            "sequence": [job.name for job in result.best],
            "jobs": [_job_to_dict(j) for j in result.best],
        },
        "profit_history": list(result.profit_history),
    }


def write_result_json(
    result: GAResult,
    jobs: List[Job],
    out_dir: str,
    all_results: List[GAResult] | None = None,
) -> str:
    """Persist a run as ``ga_results_<timestamp>.json`` under ``out_dir``.

    Returns:
        Path of the written file.
    """
    os.makedirs(out_dir, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    payload = result_to_dict(result, jobs)
    payload["timestamp"] = stamp
    if all_results:
        payload["per_run"] = [
            {
                "run": idx + 1,
                "seed": r.seed,
                "best_profit": r.best_profit,
                "generations_run": r.generations_run,
                "elapsed_s": r.elapsed_s,
            }
            for idx, r in enumerate(all_results)
        ]
    path = os.path.join(out_dir, f"ga_results_{stamp}.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
    return path
