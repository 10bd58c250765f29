"""Genetic-algorithm job sequencing.

Exports the data model, genetic operators and the run driver.
"""

from jobga.genetic import GAParams, evolve_population  # noqa: F401
from jobga.models import InvalidInputError, Job  # noqa: F401
from jobga.population import Population  # noqa: F401
from jobga.runner import GAResult, TerminationPolicy, run_genetic_algorithm  # noqa: F401
from jobga.schedule import Schedule  # noqa: F401

__all__ = [
    "GAParams",
    "GAResult",
    "InvalidInputError",
    "Job",
    "Population",
    "Schedule",
    "TerminationPolicy",
    "evolve_population",
    "run_genetic_algorithm",
]
