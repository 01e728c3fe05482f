"""Cell — a single position in the grid arena.

Cells are plain state.  All mutation goes through ``GridState`` so the
observer sees every change; code outside the world package should treat
these fields as read-only.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from formicary.colony.roles import COUNTED_ROLES, Role

Position = tuple[int, int]


def _zero_counts() -> dict[Role, int]:
    return dict.fromkeys(COUNTED_ROLES, 0)


@dataclass
class Cell:
    """A single tile in the grid.

    Attributes:
        row: Row index.
        col: Column index.
        discovered: Whether a scout (or the colony founding) revealed it.
        queen_present: Whether the queen lives here.
        counts: Number of agents of each mobile role located here.
        food: Units of food lying on the cell.
        pheromone: Trail pheromone level in ``[0, 1000]``.
        adjacency: In-bounds neighbour positions, row-major order.
        discovered_neighbours: Subset of ``adjacency`` that was
            discovered at the last refresh.
        occupants: Ids of the agents located here, in arrival order.
    """

    row: int
    col: int
    discovered: bool = False
    queen_present: bool = False
    counts: dict[Role, int] = field(default_factory=_zero_counts)
    food: int = 0
    pheromone: int = 0
    adjacency: list[Position] = field(default_factory=list, repr=False)
    discovered_neighbours: list[Position] = field(default_factory=list, repr=False)
    occupants: list[int] = field(default_factory=list)

    @property
    def position(self) -> Position:
        """``(row, col)`` of this cell."""
        return (self.row, self.col)

    def count(self, role: Role) -> int:
        """Number of agents of ``role`` here (queen counts as 0 or 1)."""
        if role is Role.QUEEN:
            return int(self.queen_present)
        return self.counts[role]
