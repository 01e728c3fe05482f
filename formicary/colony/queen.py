"""Queen — the colony's only reproducer.

She never moves.  Every tick she eats one unit of food from her cell and
starves the moment her cell runs dry.  A fed queen draws the role of a
hatchling every tick, and hatches it only every ``HATCH_RATE`` ticks.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from formicary.colony import lifecycle
from formicary.colony.roles import Role

if TYPE_CHECKING:
    from formicary.colony.agent import Agent
    from formicary.colony.registry import AgentRegistry
    from formicary.simulation.random_source import RandomSource
    from formicary.world.grid import GridState

logger = logging.getLogger(__name__)

HATCH_RATE = 10

# Cumulative hatch weights out of 100: forager 50, scout 25, soldier 25.
HATCH_WEIGHTS: tuple[tuple[Role, int], ...] = (
    (Role.FORAGER, 50),
    (Role.SCOUT, 25),
    (Role.SOLDIER, 25),
)


def act(
    queen: Agent,
    grid: GridState,
    registry: AgentRegistry,
    rng: RandomSource,
) -> Agent | None:
    """Run one tick of the queen.

    Returns:
        The agent hatched this tick, if any.
    """
    if not lifecycle.grow_older(queen, grid, registry):
        return None
    if not eat(queen, grid, registry):
        return None
    role = draw_role(rng)
    if queen.age % HATCH_RATE != 0:
        return None
    return hatch(queen, registry, role)


def eat(queen: Agent, grid: GridState, registry: AgentRegistry) -> bool:
    """Consume one unit of food, or starve.

    Returns:
        True if the queen ate and is still alive.
    """
    cell = grid[queen.position]
    if cell.food > 0:
        grid.set_food(queen.position, cell.food - 1)
        return True
    lifecycle.die(queen, grid, registry, cause="starvation")
    return False


def draw_role(rng: RandomSource) -> Role:
    """Draw the role of the next hatchling from ``HATCH_WEIGHTS``."""
    total = sum(weight for _, weight in HATCH_WEIGHTS)
    roll = rng.below(total)
    for role, weight in HATCH_WEIGHTS:
        if roll < weight:
            return role
        roll -= weight
    return HATCH_WEIGHTS[-1][0]


def hatch(queen: Agent, registry: AgentRegistry, role: Role) -> Agent:
    """Create one new ``role`` colony member on the queen's cell."""
    agent = registry.create(role, queen.position)
    logger.debug("queen hatched %s #%d", role.name.lower(), agent.agent_id)
    return agent
