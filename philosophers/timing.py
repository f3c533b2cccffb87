"""Millisecond wall-clock helpers used to pace the simulation."""

import time

_POLL_INTERVAL = 0.00005


def now_ms() -> int:
    """Return the current wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000


def sleep_ms(duration: int) -> None:
    """Block for at least ``duration`` milliseconds.

    The wait polls in short steps so that it never overshoots by much,
    which keeps the simulation's timestamps tight.
    """
    start = now_ms()
    while now_ms() - start < duration:
        time.sleep(_POLL_INTERVAL)