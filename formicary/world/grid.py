"""GridState — the arena of cells the colony lives on.

The grid owns every ``Cell``, addresses them by ``(row, col)``, and is
the only place cell state changes.  Each mutator pushes one
notification to the observer so an external view stays consistent; the
notification never feeds back into simulation logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from formicary.colony.roles import Role
from formicary.pheromones import trail
from formicary.world.cell import Cell, Position
from formicary.world.observer import GridObserver, NullObserver

if TYPE_CHECKING:
    from formicary.colony.agent import Agent


@dataclass
class GridState:
    """A fixed R×C grid of cells.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        observer: Receiver of cell-change notifications.
        cells: 2D list of cells indexed as ``cells[row][col]``.
    """

    rows: int
    cols: int
    observer: GridObserver = field(default_factory=NullObserver)
    cells: list[list[Cell]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Build every cell in its initial state and wire adjacency."""
        if self.rows <= 0 or self.cols <= 0:
            msg = f"grid must be at least 1x1, got {self.rows}x{self.cols}"
            raise ValueError(msg)
        self.cells = [
            [Cell(row=r, col=c) for c in range(self.cols)] for r in range(self.rows)
        ]
        for cell in self:
            self._announce(cell)
        for cell in self:
            cell.adjacency = self._find_adjacent(cell.row, cell.col)
            cell.discovered_neighbours = self._find_discovered(cell)

    def __iter__(self):
        """Iterate cells in row-major order."""
        for row in self.cells:
            yield from row

    # -- Topology ---------------------------------------------------------

    def in_bounds(self, row: int, col: int) -> bool:
        """Return True if ``(row, col)`` lies on the grid."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell_at(self, row: int, col: int) -> Cell:
        """Return the cell at ``(row, col)``.

        Raises:
            IndexError: If coordinates are out of bounds.
        """
        if not self.in_bounds(row, col):
            msg = f"({row}, {col}) out of bounds for {self.rows}x{self.cols}"
            raise IndexError(msg)
        return self.cells[row][col]

    def __getitem__(self, position: Position) -> Cell:
        return self.cell_at(*position)

    def neighbours(self, position: Position) -> list[Position]:
        """Return all in-bounds neighbours of ``position``."""
        return list(self[position].adjacency)

    def discovered_neighbours(self, position: Position) -> list[Position]:
        """Return the neighbours of ``position`` discovered at the last refresh."""
        return list(self[position].discovered_neighbours)

    def center(self) -> Position:
        """Return the middle cell of the grid."""
        return (self.rows // 2, self.cols // 2)

    def _find_adjacent(self, row: int, col: int) -> list[Position]:
        result: list[Position] = []
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                r, c = row + dr, col + dc
                if self.in_bounds(r, c):
                    result.append((r, c))
        return result

    def _find_discovered(self, cell: Cell) -> list[Position]:
        return [pos for pos in cell.adjacency if self[pos].discovered]

    # -- Per-tick update --------------------------------------------------

    def refresh(self) -> None:
        """Recompute discovered-neighbour caches and halve all pheromone.

        Runs once at the start of every tick so cells revealed last tick
        become eligible for pathing.
        """
        for cell in self:
            cell.discovered_neighbours = self._find_discovered(cell)
            self.set_pheromone(cell.position, trail.decay(cell.pheromone))

    # -- Mutators ---------------------------------------------------------

    def reveal(self, position: Position) -> None:
        """Mark a cell discovered."""
        cell = self[position]
        cell.discovered = True
        self.observer.reveal_cell(cell.row, cell.col)

    def hide(self, position: Position) -> None:
        """Mark a cell undiscovered."""
        cell = self[position]
        cell.discovered = False
        self.observer.hide_cell(cell.row, cell.col)

    def reveal_around(self, position: Position) -> None:
        """Reveal a cell and every neighbour of it."""
        self.reveal(position)
        for pos in self[position].adjacency:
            self.reveal(pos)

    def set_queen(self, position: Position, present: bool) -> None:
        """Set or clear the queen-present flag of a cell."""
        cell = self[position]
        cell.queen_present = present
        self.observer.set_queen(cell.row, cell.col, present)

    def set_count(self, position: Position, role: Role, count: int) -> None:
        """Set the number of ``role`` agents at a cell.

        Raises:
            ValueError: If ``count`` is negative or ``role`` is the queen.
        """
        if role is Role.QUEEN:
            msg = "the queen is tracked by set_queen, not by a count"
            raise ValueError(msg)
        if count < 0:
            msg = f"{role.name.lower()} count at {position} would be {count}"
            raise ValueError(msg)
        cell = self[position]
        cell.counts[role] = count
        self.observer.set_count(cell.row, cell.col, role, count)

    def set_food(self, position: Position, amount: int) -> None:
        """Set the food on a cell.

        Raises:
            ValueError: If ``amount`` is negative.
        """
        if amount < 0:
            msg = f"food at {position} would be {amount}"
            raise ValueError(msg)
        cell = self[position]
        cell.food = amount
        self.observer.set_food(cell.row, cell.col, amount)

    def set_pheromone(self, position: Position, level: int) -> None:
        """Set the pheromone of a cell, clamped to ``[0, PHEROMONE_MAX]``."""
        cell = self[position]
        cell.pheromone = trail.clamp(level)
        self.observer.set_pheromone(cell.row, cell.col, cell.pheromone)

    # -- Occupancy --------------------------------------------------------

    def place(self, agent: Agent) -> None:
        """Register ``agent`` on the cell at its position."""
        cell = self[agent.position]
        cell.occupants.append(agent.agent_id)
        if agent.role is Role.QUEEN:
            self.set_queen(cell.position, True)
        else:
            self.set_count(cell.position, agent.role, cell.counts[agent.role] + 1)

    def remove(self, agent: Agent) -> None:
        """Unregister ``agent`` from the cell at its position."""
        cell = self[agent.position]
        if agent.agent_id in cell.occupants:
            cell.occupants.remove(agent.agent_id)
        if agent.role is Role.QUEEN:
            self.set_queen(cell.position, False)
        else:
            self.set_count(cell.position, agent.role, cell.counts[agent.role] - 1)

    def move(self, agent: Agent, destination: Position) -> None:
        """Move ``agent`` from its current cell to ``destination``."""
        self.remove(agent)
        agent.row, agent.col = destination
        self.place(agent)

    # -- Snapshots --------------------------------------------------------

    def population(self, role: Role) -> int:
        """Total number of ``role`` agents across all cells."""
        return sum(cell.count(role) for cell in self)

    def pheromone_levels(self) -> NDArray[np.int64]:
        """Return pheromone levels as a ``(rows, cols)`` array."""
        return np.array(
            [[cell.pheromone for cell in row] for row in self.cells],
            dtype=np.int64,
        )

    def food_levels(self) -> NDArray[np.int64]:
        """Return food amounts as a ``(rows, cols)`` array."""
        return np.array(
            [[cell.food for cell in row] for row in self.cells],
            dtype=np.int64,
        )

    def _announce(self, cell: Cell) -> None:
        """Push a cell's full initial state to the observer."""
        obs = self.observer
        if cell.discovered:
            obs.reveal_cell(cell.row, cell.col)
        else:
            obs.hide_cell(cell.row, cell.col)
        obs.set_queen(cell.row, cell.col, cell.queen_present)
        for role, count in cell.counts.items():
            obs.set_count(cell.row, cell.col, role, count)
        obs.set_food(cell.row, cell.col, cell.food)
        obs.set_pheromone(cell.row, cell.col, cell.pheromone)
