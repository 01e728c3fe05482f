"""AgentRegistry — authoritative owner of every live agent.

Agents are keyed by a unique increasing id and partitioned into one
collection per role so each scheduler phase iterates only its own role.
The queen is a singleton held outside the partitions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from formicary.colony.agent import Agent, ForagerMemory, Position
from formicary.colony.roles import COUNTED_ROLES, Role
from formicary.errors import InvalidRoleError, UnknownAgentError

if TYPE_CHECKING:
    from formicary.world.grid import GridState

logger = logging.getLogger(__name__)


@dataclass
class AgentRegistry:
    """Live agents of one simulation.

    Attributes:
        grid: The grid agents are placed on when created.
        queen: The colony queen, or None before founding / after death.
        queen_died: True once the queen's death transition has fired.
    """

    grid: GridState
    queen: Agent | None = None
    queen_died: bool = False
    _next_id: int = field(default=0, repr=False)
    _groups: dict[Role, dict[int, Agent]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Create one empty collection per mobile role."""
        self._groups = {role: {} for role in COUNTED_ROLES}

    @property
    def colony_alive(self) -> bool:
        """True while a live queen exists."""
        return self.queen is not None and self.queen.alive

    def create(self, role: Role | str | int, position: Position) -> Agent:
        """Create an agent of ``role`` at ``position`` and place it.

        Args:
            role: The role, its name, or its numeric code.
            position: ``(row, col)`` of the spawn cell.

        Returns:
            The new agent.

        Raises:
            InvalidRoleError: If the role is unknown, or a queen is
                requested while one already lives.
            IndexError: If ``position`` is off the grid.
        """
        role = Role.parse(role)
        self.grid.cell_at(*position)
        if role is Role.QUEEN and self.queen is not None:
            msg = "a colony has exactly one queen; cannot create another"
            raise InvalidRoleError(msg)

        agent = Agent(
            agent_id=self._next_id,
            role=role,
            row=position[0],
            col=position[1],
        )
        self._next_id += 1
        if role is Role.FORAGER:
            agent.forager = ForagerMemory.starting_at(position)

        if role is Role.QUEEN:
            self.queen = agent
            self.queen_died = False
            self.grid.reveal(position)
        else:
            self._groups[role][agent.agent_id] = agent
        self.grid.place(agent)
        logger.debug("created %s #%d at %s", role.name.lower(), agent.agent_id, position)
        return agent

    def destroy(self, agent: Agent) -> None:
        """Remove ``agent`` from its cell and from the registry.

        Raises:
            UnknownAgentError: If the agent is not registered.
        """
        if agent.role is Role.QUEEN:
            if self.queen is not agent:
                msg = f"queen #{agent.agent_id} is not the registered queen"
                raise UnknownAgentError(msg)
            self.grid.remove(agent)
            self.queen = None
            self.queen_died = True
            return

        group = self._groups[agent.role]
        if agent.agent_id not in group:
            msg = f"{agent.role.name.lower()} #{agent.agent_id} is not registered"
            raise UnknownAgentError(msg)
        self.grid.remove(agent)
        del group[agent.agent_id]

    def get(self, agent_id: int) -> Agent:
        """Return the live agent with ``agent_id``.

        Raises:
            UnknownAgentError: If no live agent has that id.
        """
        if self.queen is not None and self.queen.agent_id == agent_id:
            return self.queen
        for group in self._groups.values():
            agent = group.get(agent_id)
            if agent is not None:
                return agent
        msg = f"no live agent with id {agent_id}"
        raise UnknownAgentError(msg)

    def role_of(self, agent_id: int) -> Role:
        """Return the role of a live agent."""
        return self.get(agent_id).role

    def snapshot(self, role: Role) -> list[Agent]:
        """Return the agents of ``role`` as a list frozen at call time."""
        if role is Role.QUEEN:
            return [self.queen] if self.queen is not None else []
        return list(self._groups[role].values())

    def population(self, role: Role) -> int:
        """Number of live agents of ``role``."""
        if role is Role.QUEEN:
            return int(self.colony_alive)
        return len(self._groups[role])

    def __len__(self) -> int:
        return sum(len(g) for g in self._groups.values()) + int(self.queen is not None)
