"""CombatResolver — prey selection and attack resolution.

Shared by the two offensive roles.  An attacker only ever fights on its
own cell: it checks the cell's tallies for prey, lists the eligible
occupants in arrival order, picks one uniformly, and wins half of its
attacks.  A won attack kills the target on the spot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from formicary.colony import lifecycle
from formicary.colony.roles import COLONY_ROLES, Role
from formicary.errors import InvalidRoleError

if TYPE_CHECKING:
    from formicary.colony.agent import Agent
    from formicary.colony.registry import AgentRegistry
    from formicary.simulation.random_source import RandomSource
    from formicary.world.cell import Cell
    from formicary.world.grid import GridState


def _default_prey() -> dict[Role, frozenset[Role]]:
    return {
        Role.SOLDIER: frozenset({Role.INVADER}),
        Role.INVADER: COLONY_ROLES,
    }


@dataclass
class CombatResolver:
    """Who hunts whom, and how often an attack lands.

    Attributes:
        prey: Roles each offensive role may attack.
        odds: Attack succeeds when ``rng.below(odds) == 0``.
    """

    prey: dict[Role, frozenset[Role]] = field(default_factory=_default_prey)
    odds: int = 2

    def prey_roles(self, attacker: Role) -> frozenset[Role]:
        """Return the roles ``attacker`` may target.

        Raises:
            InvalidRoleError: If ``attacker`` is not an offensive role.
        """
        try:
            return self.prey[attacker]
        except KeyError:
            msg = f"{attacker.name.lower()} is not an offensive role"
            raise InvalidRoleError(msg) from None

    def has_prey(self, attacker: Role, cell: Cell) -> bool:
        """Return True if the cell's tallies show prey for ``attacker``."""
        return any(cell.count(role) > 0 for role in self.prey_roles(attacker))

    def find_prey(
        self,
        attacker: Agent,
        cell: Cell,
        registry: AgentRegistry,
        rng: RandomSource,
    ) -> Agent:
        """Pick one eligible occupant of ``cell`` uniformly at random.

        Raises:
            EmptySelectionError: If no occupant is eligible prey.
        """
        targets = self.prey_roles(attacker.role)
        eligible = [
            agent_id
            for agent_id in cell.occupants
            if registry.role_of(agent_id) in targets
        ]
        return registry.get(rng.choice(eligible))

    def attack(
        self,
        target: Agent,
        grid: GridState,
        registry: AgentRegistry,
        rng: RandomSource,
    ) -> bool:
        """Resolve one attack on ``target``; kill it on success.

        Returns:
            True if the target was killed.
        """
        if rng.below(self.odds) != 0:
            return False
        lifecycle.die(target, grid, registry, cause="combat")
        return True

    def engage(
        self,
        attacker: Agent,
        grid: GridState,
        registry: AgentRegistry,
        rng: RandomSource,
    ) -> bool | None:
        """Fight on the attacker's cell if there is prey.

        Returns:
            None if there was no prey, otherwise whether the attack won.
        """
        cell = grid[attacker.position]
        if not self.has_prey(attacker.role, cell):
            return None
        target = self.find_prey(attacker, cell, registry, rng)
        return self.attack(target, grid, registry, rng)
