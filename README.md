# philosophers

A simulation of the dining philosophers problem. Each philosopher runs in
its own thread and shares one fork with each of its two neighbours. A
philosopher must hold both forks to eat. It always picks up the fork with
the lower index first. A monitor thread watches for starvation. It also
watches for every philosopher having eaten the required number of meals.

## Installation

```
pip install .
```

## Usage

```
philosophers number_of_philosophers time_to_die time_to_eat time_to_sleep [number_of_times_each_philosopher_must_eat]
```

You can also run it as `python -m philosophers.cli` with the same
arguments.

- `number_of_philosophers`: from 1 to 200.
- `time_to_die`: the number of milliseconds a philosopher can go without
  starting a meal. After that it dies, unless it is eating at that moment.
- `time_to_eat`: the number of milliseconds a meal takes. The philosopher
  holds both forks for the whole meal.
- `time_to_sleep`: the number of milliseconds spent sleeping after each meal.
- `number_of_times_each_philosopher_must_eat` (optional): the simulation stops
  once every philosopher has eaten at least this many meals. A value of 0
  means there is no meal limit.

Every argument must be a whole number with an optional sign. The program
checks the arguments in order. It prints an `Error: ...` line for the first
bad one and exits with status 1.

Example:

```
philosophers 5 800 200 200 7
```

The philosophers start one second after launch. Odd-numbered philosophers
wait a further 10 ms. Each event is printed on one line, with its fields
separated by tabs:

```
<milliseconds since start>	<philosopher id>	<action>
```

The action is one of `has taken a fork`, `is eating`, `is sleeping`,
`is thinking` or `died`. Output is coloured with ANSI escape codes. Once the
simulation stops, it prints no more events apart from the death line.

If there is only one philosopher, it takes its single fork and waits
`time_to_die` milliseconds. Then it dies.

## Library use

```python
import sys

from philosophers.parsing import parse_arguments
from philosophers.simulation import Simulation

settings = parse_arguments(["4", "410", "200", "200", "3"])
simulation = Simulation(settings, sys.stdout, 1000)
simulation.run()
print(simulation.dead)  # the Philosopher that died, or None
```

`parse_arguments` takes the argument list without the program name. It
returns a `Settings` value. It raises `ArgumentError`, a `ValueError`,
when the arguments are invalid.

`Simulation` takes three arguments:

- the settings;
- an optional text stream to write to (standard output by default);
- the delay in milliseconds before the philosophers start (1000 by default).

`Simulation.run()` returns when the simulation has finished.

The `philosophers.timing` module provides `now_ms()` and `sleep_ms(duration)`.
These are the millisecond clock and the wait that the simulation uses.