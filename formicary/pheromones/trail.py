"""Trail pheromone arithmetic.

Pheromone is a single integer channel per cell.  Returning foragers
deposit it and searching foragers follow it; every cell halves its
level once per tick regardless of traffic.
"""

from __future__ import annotations

PHEROMONE_MAX = 1000
PHEROMONE_DEPOSIT = 10


def clamp(level: int) -> int:
    """Limit a pheromone level to ``[0, PHEROMONE_MAX]``."""
    return max(0, min(PHEROMONE_MAX, level))


def decay(level: int) -> int:
    """Return the level after one tick of evaporation (integer halving)."""
    return level // 2


def deposit(level: int, amount: int = PHEROMONE_DEPOSIT) -> int:
    """Return the level after adding ``amount``, clamped at the maximum."""
    return clamp(level + amount)
