"""Soldier — defends the colony by hunting invaders on discovered ground."""

from __future__ import annotations

from typing import TYPE_CHECKING

from formicary.colony import lifecycle
from formicary.colony.combat import CombatResolver
from formicary.colony.roles import Role

if TYPE_CHECKING:
    from formicary.colony.agent import Agent, Position
    from formicary.colony.registry import AgentRegistry
    from formicary.simulation.random_source import RandomSource
    from formicary.world.grid import GridState


def act(
    agent: Agent,
    grid: GridState,
    registry: AgentRegistry,
    rng: RandomSource,
    resolver: CombatResolver | None = None,
) -> None:
    """Run one tick of a soldier: age, then fight here or move.

    Args:
        agent: The soldier.
        grid: Shared cell state.
        registry: Live agents.
        rng: The simulation's random stream.
        resolver: Combat rules (defaults to the standard resolver).
    """
    if not lifecycle.grow_older(agent, grid, registry):
        return

    resolver = resolver or CombatResolver()
    if resolver.engage(agent, grid, registry, rng) is not None:
        return

    destination = choose_next(agent, grid, rng)
    if destination != agent.position:
        grid.move(agent, destination)


def choose_next(agent: Agent, grid: GridState, rng: RandomSource) -> Position:
    """Head for a neighbouring invader if one is known, else patrol.

    Only discovered neighbours are considered.  A soldier with no
    discovered neighbour holds its position.
    """
    known = grid[agent.position].discovered_neighbours
    if not known:
        return agent.position
    hunted = [pos for pos in known if grid[pos].count(Role.INVADER) > 0]
    return rng.choice(hunted or known)
