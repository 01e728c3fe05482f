"""Scout — wanders the whole grid and reveals the cells it enters.

A scout ignores discovery when it moves.  The first time it steps onto
a hidden cell it decides whether the cell holds food and reveals it, so
foragers and soldiers can use the cell from the next tick on.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from formicary.colony import lifecycle

if TYPE_CHECKING:
    from formicary.colony.agent import Agent
    from formicary.colony.registry import AgentRegistry
    from formicary.simulation.random_source import RandomSource
    from formicary.world.grid import GridState

FOOD_PERCENT = 25
FOOD_MIN = 500
FOOD_MAX = 1000


def act(
    agent: Agent,
    grid: GridState,
    registry: AgentRegistry,
    rng: RandomSource,
) -> None:
    """Run one tick of a scout: age, pick any neighbour, reveal it, move."""
    if not lifecycle.grow_older(agent, grid, registry):
        return

    destination = rng.choice(grid[agent.position].adjacency)
    if not grid[destination].discovered:
        grid.set_food(destination, stock_food(rng))
        grid.reveal(destination)
    grid.move(agent, destination)


def stock_food(rng: RandomSource) -> int:
    """Draw the food found on a newly revealed cell.

    One cell in four holds between ``FOOD_MIN`` and ``FOOD_MAX`` units
    (inclusive); the rest are empty.
    """
    if rng.percent_chance(FOOD_PERCENT):
        return FOOD_MIN + rng.below(FOOD_MAX - FOOD_MIN + 1)
    return 0

