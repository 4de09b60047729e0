from __future__ import annotations
import random
from typing import Protocol


class RandomSource(Protocol):
    """Anything that returns a uniform integer in the closed range [a, b].

    ``random.Random`` and ``random.SystemRandom`` both qualify.
    """

    def randint(self, a: int, b: int) -> int:
        ...


def make_source(seed: int | None = None) -> random.Random:
    """Private generator for one batch; seeded for reproducible picks."""
    # a fresh instance, so seeding never touches the module-level generator
    return random.Random(seed)
