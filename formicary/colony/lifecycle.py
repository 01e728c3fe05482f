"""Lifecycle — aging and the one-way ``Alive -> Dead`` transition.

Shared by every role.  Death unregisters the agent from its cell and
from the registry in the same step; role-specific side effects (a
forager's dropped food, the queen's flag) happen here too.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from formicary.colony.roles import Role

if TYPE_CHECKING:
    from formicary.colony.agent import Agent
    from formicary.colony.registry import AgentRegistry
    from formicary.world.grid import GridState

logger = logging.getLogger(__name__)


def grow_older(agent: Agent, grid: GridState, registry: AgentRegistry) -> bool:
    """Age ``agent`` by one tick, killing it at its lifespan.

    Returns:
        True if the agent is still alive and may act this tick.
    """
    agent.age += 1
    if agent.age >= agent.lifespan:
        die(agent, grid, registry, cause="old age")
    return agent.alive


def die(
    agent: Agent,
    grid: GridState,
    registry: AgentRegistry,
    *,
    cause: str = "unknown",
) -> None:
    """Fire the death transition of ``agent``.

    A no-op for an agent that is already dead.

    Args:
        agent: The dying agent.
        grid: Grid holding the agent's cell.
        registry: Registry the agent is removed from.
        cause: Short reason, for logging.
    """
    if not agent.alive:
        return
    agent.alive = False
    position = agent.position
    registry.destroy(agent)

    if agent.role is Role.FORAGER:
        # The corpse leaves one unit of food behind.
        grid.set_food(position, grid[position].food + 1)

    if agent.role is Role.QUEEN:
        logger.info("the queen died at %s (%s) after %d ticks", position, cause, agent.age)
    else:
        logger.debug(
            "%s #%d died at %s (%s)",
            agent.role.name.lower(),
            agent.agent_id,
            position,
            cause,
        )
