"""Threaded dining-philosophers simulation with a monitoring thread."""

from __future__ import annotations

import sys
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import TextIO

from .parsing import Settings
from .timing import now_ms, sleep_ms

RED = "\033[0;31m"
GREEN = "\033[0;32m"
BLUE = "\033[0;34m"
WHITE = "\033[0;37m"
RESET = "\033[0m"

DEFAULT_START_DELAY = 1000

_START_POLL = 0.00005
_MONITOR_POLL = 0.00001


class Status(Enum):
    """Events a philosopher can report, with their message and colour."""

    FORK = ("has taken a fork", WHITE)
    EAT = ("is eating", RED)
    SLEEP = ("is sleeping", BLUE)
    THINK = ("is thinking", GREEN)
    DEAD = ("died", RESET)

    def __init__(self, message: str, color: str) -> None:
        self.message = message
        self.color = color


def _wait_until(moment: int) -> None:
    while now_ms() < moment:
        time.sleep(_START_POLL)


@dataclass(eq=False)
class Philosopher:
    """One diner seated between two forks."""

    id: int
    left_fork: int
    right_fork: int
    simulation: Simulation = field(repr=False)
    start_time: int = 0
    last_meal: int = 0
    meals_eaten: int = 0
    eating: bool = False

    def fork_order(self) -> tuple[int, int]:
        """Return the fork indices with the lower one first."""
        return (
            min(self.left_fork, self.right_fork),
            max(self.left_fork, self.right_fork),
        )

    def eat(self) -> None:
        """Take both forks, eat, then put the forks down."""
        sim = self.simulation
        if sim.stopped():
            return
        first, second = self.fork_order()
        with sim.forks[first]:
            sim.report(self, Status.FORK)
            with sim.forks[second]:
                sim.report(self, Status.FORK)
                with sim.meal_lock:
                    self.eating = True
                    self.last_meal = now_ms()
                    self.meals_eaten += 1
                sim.report(self, Status.EAT)
                sleep_ms(sim.settings.time_to_eat)
        with sim.meal_lock:
            self.eating = False

    def sleep(self) -> None:
        """Report sleeping and sleep for the configured time."""
        self.simulation.report(self, Status.SLEEP)
        sleep_ms(self.simulation.settings.time_to_sleep)

    def think(self) -> None:
        """Report thinking."""
        self.simulation.report(self, Status.THINK)

    def run(self) -> None:
        """Eat, sleep and think until the simulation stops."""
        sim = self.simulation
        _wait_until(self.start_time)
        sleep_ms((self.id % 2) * 10)
        while not sim.stopped():
            self.eat()
            if sim.stopped():
                break
            self.sleep()
            if sim.stopped():
                break
            self.think()


class Simulation:
    """A table of philosophers, their forks and the thread watching them."""

    def __init__(
        self,
        settings: Settings,
        stream: TextIO | None = None,
        start_delay: int = DEFAULT_START_DELAY,
    ) -> None:
        self.settings = settings
        self.stream = stream if stream is not None else sys.stdout
        self.meal_lock = threading.Lock()
        self._dead_lock = threading.Lock()
        self._write_lock = threading.Lock()
        self._stop_flag = False
        self.dead: Philosopher | None = None
        count = settings.num_philos
        self.forks = [threading.Lock() for _ in range(count)]
        start_time = now_ms() + start_delay
        self.philosophers = [
            Philosopher(
                id=index + 1,
                left_fork=index,
                right_fork=(index + 1) % count,
                simulation=self,
                start_time=start_time,
                last_meal=start_time,
            )
            for index in range(count)
        ]

    def stopped(self) -> bool:
        """Tell whether the simulation has been told to stop."""
        with self._dead_lock:
            return self._stop_flag

    def stop(self) -> None:
        """Tell every thread to stop."""
        with self._dead_lock:
            self._stop_flag = True

    def report(self, philosopher: Philosopher, status: Status) -> None:
        """Print a timestamped status line; only deaths print after a stop."""
        with self._dead_lock:
            if status is not Status.DEAD and self._stop_flag:
                return
            with self._write_lock:
                elapsed = now_ms() - philosopher.start_time
                self.stream.write(
                    f"{status.color}{elapsed}\t{philosopher.id}\t"
                    f"{status.message}{RESET}\n"
                )
                self.stream.flush()

    def all_ate_enough(self) -> bool:
        """Tell whether every philosopher reached the required meal count."""
        required = self.settings.num_meals
        if required <= 0:
            return False
        for philosopher in self.philosophers:
            with self.meal_lock:
                meals = philosopher.meals_eaten
            if meals < required:
                return False
        return True

    def _died(self, philosopher: Philosopher) -> bool:
        with self.meal_lock:
            last_meal = philosopher.last_meal
            eating = philosopher.eating
        if not eating and now_ms() - last_meal > self.settings.time_to_die:
            self.stop()
            self.dead = philosopher
            self.report(philosopher, Status.DEAD)
            return True
        return False

    def _ate_or_died(self) -> bool:
        if any(self._died(philosopher) for philosopher in self.philosophers):
            return True
        if self.all_ate_enough():
            self.stop()
            return True
        return False

    def monitor(self) -> None:
        """Watch for a death or for everyone having eaten enough, then stop."""
        _wait_until(self.philosophers[0].start_time)
        while not self._ate_or_died():
            time.sleep(_MONITOR_POLL)

    def _run_alone(self) -> None:
        philosopher = self.philosophers[0]
        philosopher.start_time = now_ms()
        self.report(philosopher, Status.FORK)
        sleep_ms(self.settings.time_to_die)
        self.dead = philosopher
        self.report(philosopher, Status.DEAD)

    def run(self) -> None:
        """Run the simulation to completion."""
        if self.settings.num_philos == 1:
            self._run_alone()
            return
        watcher = threading.Thread(target=self.monitor, name="monitor")
        diners = [
            threading.Thread(target=philosopher.run, name=f"philosopher-{philosopher.id}")
            for philosopher in self.philosophers
        ]
        watcher.start()
        for diner in diners:
            diner.start()
        watcher.join()
        for diner in diners:
            diner.join()