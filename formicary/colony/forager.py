"""Forager — finds food on discovered cells and carries it to the queen.

Key movement model:

- **Searching**: the forager walks over discovered cells only.  With one
  way out it takes it; with two it never doubles back; with more it
  avoids the cell it just left and follows the strongest trail
  pheromone, falling back to a uniform random pick on an unmarked
  frontier.
- **Loop breaking**: an eight-tick repeating cycle in the recent-move
  buffer overrides the trail rule with a random pick, so two strong
  neighbouring cells cannot trap a forager forever.
- **Returning**: a loaded forager retraces its move history one cell per
  tick, marking each cell it leaves with pheromone, and hands the food
  to the queen when the history brings it back to her cell.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from formicary.colony import lifecycle
from formicary.colony.roles import Role
from formicary.errors import InvalidRoleError
from formicary.pheromones import trail

if TYPE_CHECKING:
    from formicary.colony.agent import Agent, ForagerMemory, Position
    from formicary.colony.registry import AgentRegistry
    from formicary.simulation.random_source import RandomSource
    from formicary.world.grid import GridState


def act(
    agent: Agent,
    grid: GridState,
    registry: AgentRegistry,
    rng: RandomSource,
) -> None:
    """Run one tick of a forager: age, choose, move, remember.

    Args:
        agent: The forager.
        grid: Shared cell state.
        registry: Live agents (for the death transition).
        rng: The simulation's random stream.
    """
    if agent.role is not Role.FORAGER or agent.forager is None:
        msg = f"forager behaviour given a {agent.role.name.lower()}"
        raise InvalidRoleError(msg)

    if not lifecycle.grow_older(agent, grid, registry):
        return

    destination = choose_next(agent, grid, rng)
    if destination != agent.position:
        grid.move(agent, destination)
    agent.forager.recent_moves.append(destination)


def choose_next(agent: Agent, grid: GridState, rng: RandomSource) -> Position:
    """Pick the forager's next cell, picking up or delivering food on the way."""
    memory = agent.forager
    if memory is None:
        msg = f"{agent.role.name.lower()} #{agent.agent_id} has no forager memory"
        raise InvalidRoleError(msg)

    if memory.carrying_food:
        return _return_to_nest(agent, memory, grid)

    last = memory.move_history[-1] if memory.move_history else None
    destination = _search(agent, memory, grid, rng, last)
    if destination == agent.position:
        return destination
    memory.move_history.append(agent.position)

    target = grid[destination]
    if target.food > 0 and not target.queen_present:
        grid.set_food(destination, target.food - 1)
        memory.carrying_food = True
    return destination


def _search(
    agent: Agent,
    memory: ForagerMemory,
    grid: GridState,
    rng: RandomSource,
    last: Position | None,
) -> Position:
    """Choose a destination among the discovered neighbours."""
    here = grid[agent.position]
    candidates = list(here.discovered_neighbours)

    if not candidates:
        return agent.position
    if len(candidates) == 1:
        return candidates[0]
    if len(candidates) == 2:
        first, second = candidates
        return second if first == last else first

    if not here.queen_present and last in candidates:
        candidates.remove(last)

    if memory.in_loop():
        return rng.choice(candidates)

    marked = [pos for pos in candidates if grid[pos].pheromone != 0]
    if marked:
        # Stable ascending sort: among equal levels the later neighbour wins.
        return sorted(marked, key=lambda pos: grid[pos].pheromone)[-1]
    return rng.choice(candidates)


def _return_to_nest(agent: Agent, memory: ForagerMemory, grid: GridState) -> Position:
    """Retrace one step of the move history toward the queen."""
    here = grid[agent.position]
    if not here.queen_present and here.pheromone < trail.PHEROMONE_MAX:
        grid.set_pheromone(here.position, trail.deposit(here.pheromone))

    if not memory.move_history:
        # No way home: leave the load where the forager stands.
        grid.set_food(here.position, here.food + 1)
        memory.carrying_food = False
        return agent.position

    destination = memory.move_history.pop()
    nest = grid[destination]
    if nest.queen_present:
        grid.set_food(destination, nest.food + 1)
        memory.carrying_food = False
    return destination
