"""GridObserver — the push interface a view implements.

The core never queries a view.  Each cell mutation results in exactly
one notification, in mutation order, so a view that replays them holds
the same picture as the grid.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from formicary.colony.roles import Role


class GridObserver(Protocol):
    """Receiver of cell-state deltas and colony-level signals."""

    def reveal_cell(self, row: int, col: int) -> None: ...

    def hide_cell(self, row: int, col: int) -> None: ...

    def set_queen(self, row: int, col: int, present: bool) -> None: ...

    def set_count(self, row: int, col: int, role: Role, count: int) -> None: ...

    def set_food(self, row: int, col: int, amount: int) -> None: ...

    def set_pheromone(self, row: int, col: int, level: int) -> None: ...

    def set_clock(self, days: int, turns: int) -> None: ...

    def colony_collapsed(self, tick: int) -> None: ...


class NullObserver:
    """Observer that ignores every notification (headless runs)."""

    def reveal_cell(self, row: int, col: int) -> None:
        pass

    def hide_cell(self, row: int, col: int) -> None:
        pass

    def set_queen(self, row: int, col: int, present: bool) -> None:
        pass

    def set_count(self, row: int, col: int, role: Role, count: int) -> None:
        pass

    def set_food(self, row: int, col: int, amount: int) -> None:
        pass

    def set_pheromone(self, row: int, col: int, level: int) -> None:
        pass

    def set_clock(self, days: int, turns: int) -> None:
        pass

    def colony_collapsed(self, tick: int) -> None:
        pass
