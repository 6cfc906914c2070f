"""Where obstacle gaps get their randomness.

The simulation draws two numbers per spawned obstacle, gap size first and
gap position second. Anything with a ``random()`` method works, so
``random.Random(seed)`` gives a reproducible run and tests can hand in a
fixed sequence.
"""

from typing import Protocol


class RandomSource(Protocol):
    """Uniform floats in [0, 1), one per call."""

    def random(self) -> float:
        ...
