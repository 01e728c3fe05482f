"""Invader — a hostile raider that attacks any colony member it meets.

Invaders ignore discovery: they roam every cell of the grid, and attack
the queen, foragers, scouts and soldiers sharing their cell.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from formicary.colony import lifecycle
from formicary.colony.combat import CombatResolver

if TYPE_CHECKING:
    from formicary.colony.agent import Agent
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
    """Run one tick of an invader: age, then fight here or wander."""
    if not lifecycle.grow_older(agent, grid, registry):
        return

    resolver = resolver or CombatResolver()
    if resolver.engage(agent, grid, registry, rng) is not None:
        return

    grid.move(agent, rng.choice(grid[agent.position].adjacency))
