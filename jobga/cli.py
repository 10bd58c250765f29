"""Command-line entry point: config file or interactive prompts."""

import argparse
import json
import logging
import os
from datetime import datetime
from typing import Any, Callable, Dict, Optional

import yaml

from jobga.genetic import GAParams
from jobga.models import InvalidInputError
from jobga.parser import jobs_from_config, load_jobs, parse_int
from jobga.report import render_summary, write_result_json
from jobga.runner import GAResult, TerminationPolicy, run_many
from jobga.visualization import plot_profit_progress

logger = logging.getLogger("jobga.cli")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_config(config_file: str = "config.yaml") -> dict:
    """Load configuration from a YAML or JSON file."""
    if not os.path.isfile(config_file):
        raise FileNotFoundError(f"Config file not found: {config_file}")
    with open(config_file, "r", encoding="utf-8") as f:
        text = f.read()
    if config_file.endswith(".json"):
        cfg = json.loads(text)
    else:
        cfg = yaml.safe_load(text) or {}
    if not isinstance(cfg, dict):
        raise InvalidInputError(f"Config root must be a mapping: {config_file}")
    return cfg


def _ask_int(input_fn: Callable[[str], str], prompt: str) -> int:
    answer = input_fn(prompt).strip()
    try:
        return int(answer)
    except ValueError as e:
        raise InvalidInputError(f"Expected an integer, got {answer!r}") from e


def prompt_config(input_fn: Callable[[str], str] = input) -> dict:
    """Collect jobs and run size interactively; returns a config mapping."""
    num_jobs = _ask_int(input_fn, "Enter the number of jobs: ")
    jobs = [
        input_fn(f"Enter details for Job {i + 1} (name deadline profit): ")
        for i in range(num_jobs)
    ]
    return {
        "jobs": jobs,
        "population_size": _ask_int(input_fn, "Enter population size: "),
        "generations": _ask_int(input_fn, "Enter the number of generations: "),
    }


def _section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = cfg.get(name)
    return value if isinstance(value, dict) else {}


def _optional_int(value: Any, what: str) -> Optional[int]:
    return None if value is None else parse_int(value, what)


def run_from_config(
    cfg: Dict[str, Any],
    base_dir: str = ".",
    out: Callable[[str], None] = print,
) -> GAResult:
    """Run the optimizer described by ``cfg`` and report the result.

    Args:
        cfg: Parsed configuration (see ``config.yaml``).
        base_dir: Directory relative ``jobs_file`` paths are resolved from.
        out: Sink for the text summary.

    Returns:
        Best result across all runs.

    Raises:
        InvalidInputError: On missing or malformed settings.
    """
    if "jobs" in cfg:
        jobs = jobs_from_config(cfg["jobs"])
    elif cfg.get("jobs_file"):
        path = cfg["jobs_file"]
        if not os.path.isabs(path):
            path = os.path.join(base_dir, path)
        jobs = load_jobs(path)
    else:
        raise InvalidInputError("Config needs either 'jobs' or 'jobs_file'")

    for key in ("population_size", "generations"):
        if key not in cfg:
            raise InvalidInputError(f"Missing key '{key}' in config")
    population_size = parse_int(cfg["population_size"], "population_size")
    generations = parse_int(cfg["generations"], "generations")
    runs = parse_int(cfg.get("runs", 1), "runs")
    seed = _optional_int(cfg.get("seed"), "seed")

    ga_cfg = _section(cfg, "ga")
    term_cfg = _section(cfg, "termination")
    output_cfg = _section(cfg, "output")

    mutation_rate = ga_cfg.get("mutation_rate", 0.01)
    if isinstance(mutation_rate, bool) or not isinstance(mutation_rate, (int, float)):
        raise InvalidInputError(f"ga.mutation_rate must be a number, got {mutation_rate!r}")
    params = GAParams(
        mutation_rate=float(mutation_rate),
        tournament_size=parse_int(ga_cfg.get("tournament_size", 5), "ga.tournament_size"),
        crossover=str(ga_cfg.get("crossover", "append")),
    )
    termination = TerminationPolicy(
        generations=generations,
        stagnation_generations=_optional_int(
            term_cfg.get("stagnation_generations"), "termination.stagnation_generations"
        ),
        time_limit_ms=_optional_int(term_cfg.get("time_limit_ms"), "termination.time_limit_ms"),
    )

    best, results = run_many(
        jobs,
        population_size,
        runs,
        termination,
        params=params,
        seed=seed,
    )
    out(render_summary(jobs, best))

    out_dir = output_cfg.get("dir")
    if out_dir:
        if output_cfg.get("json", True):
            try:
                path = write_result_json(best, jobs, out_dir, all_results=results)
                logger.info("Saved results JSON to %s", path)
            except OSError as e:
                logger.warning("Failed to write results JSON: %s", e)
        if output_cfg.get("chart", False):
            stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            chart_path = os.path.join(out_dir, f"ga_progress_{stamp}.png")
            histories = {f"run_{i}": r.profit_history for i, r in enumerate(results)}
            try:
                plot_profit_progress(histories, save_path=chart_path)
                logger.info("Saved progress chart to %s", chart_path)
            except (OSError, ValueError) as e:
                logger.warning("Failed to create progress chart: %s", e)
    return best


def configure_logging(log_level: Any) -> None:
    level_name = str(log_level).upper()
    known = level_name in LOG_LEVELS
    logging.basicConfig(
        level=getattr(logging, level_name) if known else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not known:
        logger.warning("Unknown log_level %r, using INFO", log_level)


def main(argv: Optional[list] = None, input_fn: Callable[[str], str] = input) -> int:
    parser = argparse.ArgumentParser(description="Job scheduling with a genetic algorithm")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--config", help="Path to YAML/JSON config file")
    source.add_argument(
        "--interactive",
        action="store_true",
        help="Prompt for jobs, population size and generations",
    )
    parser.add_argument("--seed", type=int, default=None, help="Override RNG seed")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Override log level",
    )
    args = parser.parse_args(argv)

    cfg: Dict[str, Any] = {}
    base_dir = "."
    try:
        if args.config:
            cfg = load_config(args.config)
            base_dir = os.path.dirname(os.path.abspath(args.config))
        configure_logging(args.log_level or cfg.get("log_level", "INFO"))
        if args.interactive:
            cfg = prompt_config(input_fn)
        if args.seed is not None:
            cfg["seed"] = args.seed
        run_from_config(cfg, base_dir=base_dir)
    except InvalidInputError as e:
        # no-op when logging was already configured above
        configure_logging(args.log_level or "INFO")
        logger.error("Invalid input: %s", e)
        return 2
    return 0
