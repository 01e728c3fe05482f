"""RandomSource — the single sequential random stream of a simulation.

Every stochastic decision draws bounded integers from one source, in a
fixed order per tick.  Reordering draws changes outcomes even with the
same seed, so behaviours only ever call ``below`` (directly or through
the helpers built on it).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

import numpy as np
from numpy.random import Generator

from formicary.errors import EmptySelectionError

T = TypeVar("T")


class RandomSource:
    """Bounded-integer stream backed by a seeded NumPy generator.

    Attributes:
        seed: Seed used to build the generator (None = OS entropy).
        draws: Number of values drawn so far.
    """

    def __init__(self, seed: int | None = None) -> None:
        """Create a source seeded for ``numpy.random.default_rng``."""
        self.seed = seed
        self._rng: Generator = np.random.default_rng(seed)
        self.draws = 0

    def below(self, bound: int) -> int:
        """Return a uniform integer in ``[0, bound)``.

        Raises:
            ValueError: If ``bound`` is not positive.
        """
        if bound <= 0:
            msg = f"bound must be positive, got {bound}"
            raise ValueError(msg)
        self.draws += 1
        return int(self._rng.integers(bound))

    def choice(self, items: Sequence[T]) -> T:
        """Pick one element uniformly at random.

        Raises:
            EmptySelectionError: If ``items`` is empty.
        """
        if not items:
            msg = "cannot pick uniformly from an empty set"
            raise EmptySelectionError(msg)
        return items[self.below(len(items))]

    def percent_chance(self, percent: int) -> bool:
        """Return True with probability ``percent`` / 100 (one draw)."""
        return self.below(100) < percent
