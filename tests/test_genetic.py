import random
from collections import Counter

import pytest

from jobga.genetic import (
    GAParams,
    append_crossover,
    crossover,
    evolve_population,
    mutate,
    ordered_crossover,
    tournament_selection,
)
from jobga.models import InvalidInputError, Job
from jobga.population import Population
from jobga.schedule import Schedule


def test_append_crossover_is_copy_of_first_parent(wide_jobs):
    rng = random.Random(11)
    p1 = Schedule(wide_jobs, rng=rng)
    p2 = Schedule(wide_jobs, rng=rng)
    child = append_crossover(p1, p2)
    assert child.jobs == p1.jobs
    assert child is not p1


def test_crossover_with_itself_is_identity(wide_jobs):
    p1 = Schedule(wide_jobs, rng=random.Random(4))
    assert crossover(p1, p1).jobs == p1.jobs
    assert crossover(p1, p1, mode="ordered", rng=random.Random(4)).jobs == p1.jobs


def test_append_crossover_adds_missing_jobs_from_second_parent():
    a, b, c = Job("A", 1, 1), Job("B", 1, 2), Job("C", 1, 3)
    child = append_crossover(Schedule.from_order([a]), Schedule.from_order([c, a, b]))
    assert child.jobs == (a, c, b)


def test_ordered_crossover_keeps_permutation(wide_jobs):
    rng = random.Random(21)
    for _ in range(30):
        p1 = Schedule(wide_jobs, rng=rng)
        p2 = Schedule(wide_jobs, rng=rng)
        child = ordered_crossover(p1, p2, rng=rng)
        assert Counter(child.jobs) == Counter(wide_jobs)


def test_ordered_crossover_single_job():
    only = Schedule.from_order([Job("A", 1, 5)])
    assert ordered_crossover(only, only, rng=random.Random(0)).jobs == only.jobs


def test_ordered_crossover_keeps_value_equal_duplicates():
    dup = Job("A", 1, 5)
    jobs = [dup, dup, Job("B", 2, 7), Job("C", 3, 9)]
    rng = random.Random(8)
    for _ in range(20):
        child = ordered_crossover(Schedule(jobs, rng=rng), Schedule(jobs, rng=rng), rng=rng)
        assert Counter(child.jobs) == Counter(jobs)


def test_unknown_crossover_mode_raises(sample_jobs):
    p = Schedule.from_order(sample_jobs)
    with pytest.raises(InvalidInputError):
        crossover(p, p, mode="uniform")


def test_mutation_rate_zero_leaves_order(wide_jobs):
    sched = Schedule.from_order(wide_jobs)
    mutate(sched, 0.0, rng=random.Random(1))
    assert list(sched.jobs) == wide_jobs


def test_mutation_rate_one_keeps_permutation(wide_jobs):
    sched = Schedule.from_order(wide_jobs)
    mutate(sched, 1.0, rng=random.Random(1))
    assert Counter(sched.jobs) == Counter(wide_jobs)
    assert sched.total_profit == sum(j.profit for j in wide_jobs)


def test_tournament_on_single_member_population(sample_jobs):
    pop = Population(1, sample_jobs, rng=random.Random(0))
    assert tournament_selection(pop, 5, rng=random.Random(3)) is pop[0]


def test_tournament_returns_population_member():
    scheds = [Schedule.from_order([Job(f"J{i}", 1, i)]) for i in range(10)]
    pop = Population.from_schedules(scheds)
    rng = random.Random(9)
    for _ in range(20):
        winner = tournament_selection(pop, 3, rng=rng)
        assert any(winner is s for s in scheds)


def test_tournament_size_covers_population_picks_strong_member():
    scheds = [Schedule.from_order([Job(f"J{i}", 1, i)]) for i in range(4)]
    pop = Population.from_schedules(scheds)
    wins = Counter(
        tournament_selection(pop, 50, rng=random.Random(s)).total_profit for s in range(10)
    )
    assert wins == Counter({3: 10})


def test_evolve_preserves_size_and_input(wide_jobs):
    rng = random.Random(5)
    pop = Population(9, wide_jobs, rng=rng)
    before = [s.jobs for s in pop]
    nxt = evolve_population(pop, GAParams(mutation_rate=0.5), rng=rng)
    assert len(nxt) == len(pop)
    assert [s.jobs for s in pop] == before
    for sched in nxt:
        assert Counter(sched.jobs) == Counter(wide_jobs)
        assert all(sched is not old for old in pop)


def test_evolve_without_mutation_copies_parents(wide_jobs):
    rng = random.Random(6)
    pop = Population(7, wide_jobs, rng=rng)
    parent_orders = {s.jobs for s in pop}
    nxt = evolve_population(pop, GAParams(mutation_rate=0.0), rng=rng)
    assert all(s.jobs in parent_orders for s in nxt)


def test_evolve_ordered_mode_keeps_permutations(wide_jobs):
    rng = random.Random(12)
    pop = Population(6, wide_jobs, rng=rng)
    params = GAParams(crossover="ordered", tournament_size=3)
    for _ in range(5):
        pop = evolve_population(pop, params, rng=rng)
        assert len(pop) == 6
        assert all(Counter(s.jobs) == Counter(wide_jobs) for s in pop)


def test_evolve_is_reproducible(wide_jobs):
    def _run(seed):
        rng = random.Random(seed)
        pop = Population(5, wide_jobs, rng=rng)
        for _ in range(3):
            pop = evolve_population(pop, GAParams(mutation_rate=0.2), rng=rng)
        return [s.jobs for s in pop]

    assert _run(77) == _run(77)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"mutation_rate": -0.1},
        {"mutation_rate": 1.5},
        {"tournament_size": 0},
        {"crossover": "pmx"},
    ],
)
def test_ga_params_validation(kwargs):
    with pytest.raises(InvalidInputError):
        GAParams(**kwargs)


def test_ga_params_defaults():
    params = GAParams()
    assert params.mutation_rate == 0.01
    assert params.tournament_size == 5
    assert params.crossover == "append"
