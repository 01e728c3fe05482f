"""Roles — the closed set of agent kinds and their capabilities."""

from __future__ import annotations

from enum import Enum

from formicary.errors import InvalidRoleError


class Role(Enum):
    """Agent role.  Values are the numeric codes accepted by ``parse``."""

    QUEEN = 0
    FORAGER = 1
    SCOUT = 2
    SOLDIER = 3
    INVADER = 4

    @property
    def is_mobile(self) -> bool:
        """Return True if agents of this role move between cells."""
        return self in MOBILE_ROLES

    @property
    def is_offensive(self) -> bool:
        """Return True if agents of this role hunt prey."""
        return self in OFFENSIVE_ROLES

    @property
    def lifespan(self) -> int:
        """Maximum age in ticks before natural death."""
        return QUEEN_LIFESPAN if self is Role.QUEEN else MOBILE_LIFESPAN

    @classmethod
    def parse(cls, value: object) -> Role:
        """Resolve a role from a Role, its name, or its numeric code.

        Raises:
            InvalidRoleError: If ``value`` names no role.
        """
        if isinstance(value, Role):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        elif isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        msg = f"unknown agent role: {value!r}"
        raise InvalidRoleError(msg)


QUEEN_LIFESPAN = 73000
MOBILE_LIFESPAN = 3650

MOBILE_ROLES = frozenset({Role.FORAGER, Role.SCOUT, Role.SOLDIER, Role.INVADER})
OFFENSIVE_ROLES = frozenset({Role.SOLDIER, Role.INVADER})

# Roles tallied per cell; the queen is tracked by a flag instead.
COUNTED_ROLES = (Role.FORAGER, Role.SCOUT, Role.SOLDIER, Role.INVADER)

# Colony members an invader may attack.
COLONY_ROLES = frozenset({Role.QUEEN, Role.FORAGER, Role.SCOUT, Role.SOLDIER})
