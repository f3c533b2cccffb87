"""Command-line entry point for the dining philosophers simulation."""

from __future__ import annotations

import sys
from typing import Sequence

from .parsing import ArgumentError, parse_arguments
from .simulation import Simulation


def main(argv: Sequence[str] | None = None) -> int:
    """Validate the arguments and run the simulation; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        settings = parse_arguments(args)
    except ArgumentError as error:
        print(f"Error: {error}")
        return 1
    Simulation(settings).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())