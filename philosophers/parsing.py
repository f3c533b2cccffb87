"""Command-line argument validation for the dining philosophers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

ARG_NAMES = (
    "number_of_philosophers",
    "time_to_die",
    "time_to_eat",
    "time_to_sleep",
    "number_of_times_each_philosopher_must_eat",
)

MAX_PHILOSOPHERS = 200

_WHITESPACE = " \t\n\v\f\r"
_DIGITS = "0123456789"


class ArgumentError(ValueError):
    """Raised when the command-line arguments are invalid."""


@dataclass(frozen=True)
class Settings:
    """Validated simulation parameters; times are in milliseconds."""

    num_philos: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    num_meals: int = -1


def _wrap_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def atoi(text: str) -> int:
    """Convert the leading integer of ``text`` the way C's atoi does.

    Leading whitespace is skipped, one optional sign is accepted, and
    conversion stops at the first non-digit. The result wraps to a
    32-bit signed integer.
    """
    rest = text.lstrip(_WHITESPACE)
    sign = 1
    if rest[:1] in ("-", "+"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    value = 0
    for char in rest:
        if char not in _DIGITS:
            break
        value = _wrap_int32(value * 10 + int(char))
    return _wrap_int32(value * sign)


def is_number(text: str) -> bool:
    """Tell whether ``text`` is an optional sign followed only by digits."""
    body = text[1:] if text[:1] in ("-", "+") else text
    return all(char in _DIGITS for char in body)


def _validate(text: str, index: int, with_meals: bool) -> int:
    name = ARG_NAMES[index]
    if not is_number(text):
        raise ArgumentError(f"argument {name} must be a number")
    value = atoi(text)
    if index == 0 and value > MAX_PHILOSOPHERS:
        raise ArgumentError(f"{name} must be <= {MAX_PHILOSOPHERS}")
    if index == 4 and with_meals:
        if value < 0:
            raise ArgumentError(f"{name} must be >= 0")
    elif value <= 0:
        raise ArgumentError(f"{name} must be > 0")
    return value


def parse_arguments(args: Sequence[str]) -> Settings:
    """Validate the arguments (program name excluded) into ``Settings``.

    Raises ``ArgumentError`` describing the first problem found.
    """
    if not 4 <= len(args) <= 5:
        raise ArgumentError("wrong number of arguments")
    with_meals = len(args) == 5
    values = [_validate(text, index, with_meals) for index, text in enumerate(args)]
    return Settings(*values) if with_meals else Settings(*values, num_meals=-1)