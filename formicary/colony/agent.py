"""Agent — one member of the simulation, of any role.

Agents hold their location as a ``(row, col)`` index into the grid
arena rather than a reference to a cell.  Role-specific state lives in
an optional payload so every role shares the same record type.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from formicary.colony.roles import Role

Position = tuple[int, int]

RECENT_MOVES = 8


@dataclass
class ForagerMemory:
    """Navigation memory carried by a forager.

    Attributes:
        carrying_food: Whether the forager is bringing food home.
        move_history: Stack of cells visited while searching; popped to
            retrace the path to the queen.
        recent_moves: The last eight destinations, oldest first.  Used
            to detect an eight-tick movement cycle.
    """

    carrying_food: bool = False
    move_history: list[Position] = field(default_factory=list)
    recent_moves: deque[Position] = field(
        default_factory=lambda: deque(maxlen=RECENT_MOVES),
    )

    @classmethod
    def starting_at(cls, position: Position) -> ForagerMemory:
        """Create memory whose loop detector is primed with ``position``."""
        memory = cls()
        memory.recent_moves.extend([position] * RECENT_MOVES)
        return memory

    def in_loop(self) -> bool:
        """Return True if the last four moves repeat the four before them."""
        moves = list(self.recent_moves)
        if len(moves) < RECENT_MOVES:
            return False
        return moves[:4] == moves[4:]


@dataclass
class Agent:
    """A single agent.

    Attributes:
        agent_id: Unique identifier assigned by the registry.
        role: What kind of agent this is.
        row: Current grid row.
        col: Current grid column.
        age: Ticks lived so far.
        alive: False once the death transition has fired.
        forager: Navigation memory, present only for foragers.
    """

    agent_id: int
    role: Role
    row: int
    col: int
    age: int = 0
    alive: bool = True
    forager: ForagerMemory | None = None

    @property
    def position(self) -> Position:
        """Current ``(row, col)``."""
        return (self.row, self.col)

    @property
    def lifespan(self) -> int:
        """Age at which this agent dies."""
        return self.role.lifespan
