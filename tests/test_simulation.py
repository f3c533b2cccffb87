import io
import re

import pytest

from philosophers.parsing import Settings
from philosophers.simulation import Philosopher, Simulation, Status

_ESCAPE = re.compile(r"\033\[[0-9;]*m")


def _lines(stream):
    result = []
    for raw in stream.getvalue().splitlines():
        stamp, ident, message = _ESCAPE.sub("", raw).split("\t")
        result.append((int(stamp), int(ident), message))
    return result


def _simulation(settings, start_delay=0):
    stream = io.StringIO()
    return Simulation(settings, stream=stream, start_delay=start_delay), stream


def test_forks_are_assigned_around_the_table():
    sim, _ = _simulation(Settings(5, 400, 100, 100))
    pairs = [(p.left_fork, p.right_fork) for p in sim.philosophers]
    assert pairs == [(0, 1), (1, 2), (2, 3), (3, 4), (4, 0)]
    assert [p.id for p in sim.philosophers] == [1, 2, 3, 4, 5]
    assert len(sim.forks) == 5


def test_fork_order_puts_lower_index_first():
    sim, _ = _simulation(Settings(5, 400, 100, 100))
    assert sim.philosophers[0].fork_order() == (0, 1)
    assert sim.philosophers[4].fork_order() == (0, 4)


def test_start_delay_sets_start_and_last_meal():
    sim, _ = _simulation(Settings(3, 400, 100, 100), start_delay=500)
    starts = {p.start_time for p in sim.philosophers}
    assert len(starts) == 1
    assert all(p.last_meal == p.start_time for p in sim.philosophers)


def test_report_format():
    sim, stream = _simulation(Settings(2, 400, 100, 100))
    sim.report(sim.philosophers[1], Status.THINK)
    text = stream.getvalue()
    assert text.startswith("\033[0;32m")
    assert text.endswith("\tis thinking\033[0m\n")
    [(stamp, ident, message)] = _lines(stream)
    assert ident == 2
    assert message == "is thinking"
    assert stamp >= 0


def test_report_after_stop_only_prints_death():
    sim, stream = _simulation(Settings(2, 400, 100, 100))
    assert sim.stopped() is False
    sim.stop()
    assert sim.stopped() is True
    sim.report(sim.philosophers[0], Status.EAT)
    sim.report(sim.philosophers[0], Status.DEAD)
    assert [line[2] for line in _lines(stream)] == ["died"]


def test_all_ate_enough_without_meal_limit_is_false():
    sim, _ = _simulation(Settings(2, 400, 100, 100))
    for philosopher in sim.philosophers:
        philosopher.meals_eaten = 100
    assert sim.all_ate_enough() is False


def test_all_ate_enough_counts_every_philosopher():
    sim, _ = _simulation(Settings(3, 400, 100, 100, num_meals=2))
    sim.philosophers[0].meals_eaten = 2
    sim.philosophers[1].meals_eaten = 3
    sim.philosophers[2].meals_eaten = 1
    assert sim.all_ate_enough() is False
    sim.philosophers[2].meals_eaten = 2
    assert sim.all_ate_enough() is True


def test_eat_after_stop_does_nothing():
    sim, stream = _simulation(Settings(2, 400, 10, 10))
    sim.stop()
    philosopher = sim.philosophers[0]
    philosopher.eat()
    assert philosopher.meals_eaten == 0
    assert stream.getvalue() == ""


def test_eat_reports_forks_and_meal():
    sim, stream = _simulation(Settings(2, 400, 5, 5))
    philosopher = sim.philosophers[0]
    philosopher.eat()
    assert philosopher.meals_eaten == 1
    assert philosopher.eating is False
    assert [line[2] for line in _lines(stream)] == [
        "has taken a fork",
        "has taken a fork",
        "is eating",
    ]
    assert all(not lock.locked() for lock in sim.forks)


def test_lone_philosopher_dies_after_time_to_die():
    sim, stream = _simulation(Settings(1, 50, 100, 100))
    sim.run()
    lines = _lines(stream)
    assert [line[2] for line in lines] == ["has taken a fork", "died"]
    assert lines[1][0] >= 50
    assert isinstance(sim.dead, Philosopher)
    assert sim.dead.id == 1


def test_run_stops_when_everyone_ate_enough():
    sim, stream = _simulation(Settings(4, 400, 30, 30, num_meals=3))
    sim.run()
    lines = _lines(stream)
    assert sim.stopped() is True
    assert sim.dead is None
    assert all(line[2] != "died" for line in lines)
    assert all(p.meals_eaten >= 3 for p in sim.philosophers)
    stamps = [line[0] for line in lines]
    assert stamps == sorted(stamps)


def test_run_ends_with_a_single_death():
    sim, stream = _simulation(Settings(2, 60, 200, 10))
    sim.run()
    lines = _lines(stream)
    deaths = [line for line in lines if line[2] == "died"]
    assert len(deaths) == 1
    assert lines[-1] == deaths[0]
    assert sim.dead is not None and deaths[0][1] == sim.dead.id
    assert deaths[0][0] >= 60


@pytest.mark.parametrize("status", list(Status))
def test_every_status_line_ends_with_reset(status):
    sim, stream = _simulation(Settings(2, 400, 100, 100))
    sim.report(sim.philosophers[0], status)
    text = stream.getvalue()
    assert text.startswith(status.color)
    assert text.endswith(f"\t{status.message}\033[0m\n")