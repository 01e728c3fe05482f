"""Pygame 2D visualization for the Formicary simulation.

The renderer is the simulation's observer: it keeps its own per-cell
view model, fed only by the scheduler's push notifications, and draws
that model.  Keyboard input is translated into the scheduler's control
commands (run/stop, step, re-initialize, debug spawns).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

import numpy as np
import pygame

from formicary.colony.roles import COUNTED_ROLES, Role
from formicary.simulation.scheduler import Scheduler, SchedulerState

# Colour palette
_BG = (30, 20, 10)
_HIDDEN = (15, 10, 5)
_GROUND = (80, 60, 40)
_QUEEN = (230, 60, 200)
_TEXT = (200, 200, 200)

_ROLE_COLOURS: dict[Role, tuple[int, int, int]] = {
    Role.FORAGER: (100, 200, 100),
    Role.SCOUT: (100, 150, 255),
    Role.SOLDIER: (255, 200, 50),
    Role.INVADER: (255, 80, 80),
}

# Food colour range (dark green -> bright green)
_FOOD_LO = np.array([20, 60, 10], dtype=np.float64)
_FOOD_HI = np.array([50, 200, 30], dtype=np.float64)
_FOOD_FULL = 1000.0

# Trail pheromone colour (cyan glow)
_TRAIL_COLOUR = np.array([0, 180, 255], dtype=np.float64)
_TRAIL_FULL = 1000.0


@dataclass
class CellView:
    """What the view knows about one cell."""

    visible: bool = False
    queen: bool = False
    counts: dict[Role, int] = field(
        default_factory=lambda: dict.fromkeys(COUNTED_ROLES, 0),
    )
    food: int = 0
    pheromone: int = 0


class PygameRenderer:
    """Renders simulation state into a Pygame window.

    Attributes:
        rows: Grid rows shown.
        cols: Grid columns shown.
        cell_size: Pixel size of each grid cell.
        cells: View model, ``cells[(row, col)]``.
        scheduler: The scheduler driven by keyboard input.
        screen: The Pygame display surface.
    """

    _SPAWN_KEYS: ClassVar[dict[int, Role]] = {
        pygame.K_1: Role.FORAGER,
        pygame.K_2: Role.SCOUT,
        pygame.K_3: Role.SOLDIER,
        pygame.K_4: Role.INVADER,
    }

    def __init__(self, rows: int, cols: int, cell_size: int = 24) -> None:
        """Initialise the renderer and open the window.

        Args:
            rows: Grid rows.
            cols: Grid columns.
            cell_size: Pixel width/height per grid cell.
        """
        self.cell_size = cell_size
        self.scheduler: Scheduler | None = None
        self.cells: dict[tuple[int, int], CellView] = {}
        self.clock_text = "0 days, 0 turns"
        self.collapsed_at: int | None = None
        self._resize(rows, cols)

        pygame.init()
        self._panel_width = 220
        self.screen = pygame.display.set_mode(
            (cols * cell_size + self._panel_width, rows * cell_size),
        )
        pygame.display.set_caption("Formicary")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.small_font = pygame.font.SysFont("monospace", max(8, cell_size // 3))
        self.running = True

    def _resize(self, rows: int, cols: int) -> None:
        self.rows = rows
        self.cols = cols
        self.cells = {(r, c): CellView() for r in range(rows) for c in range(cols)}

    def attach(self, scheduler: Scheduler) -> None:
        """Take keyboard control of ``scheduler``."""
        self.scheduler = scheduler

    # -- GridObserver -----------------------------------------------------

    def _cell(self, row: int, col: int) -> CellView:
        view = self.cells.get((row, col))
        if view is None:
            view = self.cells[(row, col)] = CellView()
        return view

    def reveal_cell(self, row: int, col: int) -> None:
        self._cell(row, col).visible = True

    def hide_cell(self, row: int, col: int) -> None:
        self._cell(row, col).visible = False

    def set_queen(self, row: int, col: int, present: bool) -> None:
        self._cell(row, col).queen = present

    def set_count(self, row: int, col: int, role: Role, count: int) -> None:
        self._cell(row, col).counts[role] = count

    def set_food(self, row: int, col: int, amount: int) -> None:
        self._cell(row, col).food = amount

    def set_pheromone(self, row: int, col: int, level: int) -> None:
        self._cell(row, col).pheromone = level

    def set_clock(self, days: int, turns: int) -> None:
        self.clock_text = f"{days} days, {turns} turns"

    def colony_collapsed(self, tick: int) -> None:
        self.collapsed_at = tick

    # -- Main loop --------------------------------------------------------

    def run(self, fps: int = 30) -> None:
        """Main loop: handle events, let the scheduler tick, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            dt = self.clock.tick(fps) / 1000.0  # seconds elapsed
            self._handle_events()
            if self.scheduler is not None:
                self.scheduler.update(dt)
            self._draw()

        pygame.quit()

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event.key)

    def _handle_key(self, key: int) -> None:
        sched = self.scheduler
        if key == pygame.K_ESCAPE:
            self.running = False
        elif sched is None:
            return
        elif key == pygame.K_SPACE:
            if sched.state is SchedulerState.RUNNING:
                sched.stop()
            else:
                sched.run()
        elif key == pygame.K_s:
            sched.step()
        elif key == pygame.K_n:
            self.collapsed_at = None
            self._resize(sched.config.rows, sched.config.cols)
            sched.initialize()
        elif key in self._SPAWN_KEYS:
            sched.spawn_test(self._SPAWN_KEYS[key])

    # -- Drawing ----------------------------------------------------------

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_cells()
        self._draw_info_panel()
        pygame.display.flip()

    def _draw_cells(self) -> None:
        """Draw ground, food, trail, the queen and per-role tallies."""
        cs = self.cell_size
        overlay = pygame.Surface((self.cols * cs, self.rows * cs), pygame.SRCALPHA)
        for (row, col), view in self.cells.items():
            rect = (col * cs, row * cs, cs - 1, cs - 1)
            if not view.visible:
                pygame.draw.rect(self.screen, _HIDDEN, rect)
                continue

            if view.food > 0:
                t = min(view.food / _FOOD_FULL, 1.0)
                colour = _FOOD_LO + t * (_FOOD_HI - _FOOD_LO)
                pygame.draw.rect(self.screen, colour.astype(int).tolist(), rect)
            else:
                pygame.draw.rect(self.screen, _GROUND, rect)

            if view.pheromone > 0:
                alpha = int(min(view.pheromone / _TRAIL_FULL, 1.0) * 160)
                colour = _TRAIL_COLOUR.astype(int).tolist()
                pygame.draw.rect(overlay, (*colour, alpha), rect)

            if view.queen:
                pygame.draw.circle(
                    self.screen,
                    _QUEEN,
                    (col * cs + cs // 2, row * cs + cs // 2),
                    max(3, cs // 3),
                )
            self._draw_tallies(view, col * cs, row * cs)

        self.screen.blit(overlay, (0, 0))

    def _draw_tallies(self, view: CellView, x: int, y: int) -> None:
        """Draw one small coloured number per role present, in the corners."""
        cs = self.cell_size
        corners = ((1, 0), (cs // 2, 0), (1, cs // 2), (cs // 2, cs // 2))
        for role, (dx, dy) in zip(COUNTED_ROLES, corners, strict=True):
            count = view.counts[role]
            if count <= 0:
                continue
            surf = self.small_font.render(str(count), True, _ROLE_COLOURS[role])
            self.screen.blit(surf, (x + dx, y + dy))

    def _draw_info_panel(self) -> None:
        """Draw a stats panel on the right side of the window."""
        panel_x = self.cols * self.cell_size + 10
        y = 10

        state = self.scheduler.state.name if self.scheduler is not None else "-"
        totals = dict.fromkeys(COUNTED_ROLES, 0)
        for view in self.cells.values():
            for role in COUNTED_ROLES:
                totals[role] += view.counts[role]

        lines = [
            self.clock_text,
            state,
            "",
            "--- Colony ---",
        ]
        lines += [f"{role.name.title()}s: {totals[role]}" for role in COUNTED_ROLES]
        if self.collapsed_at is not None:
            lines += ["", f"QUEEN DIED (tick {self.collapsed_at})"]

        lines += [
            "",
            "--- Controls ---",
            "SPACE: run/stop",
            "S: step",
            "N: new colony",
            "1-4: spawn F/Sc/So/I",
            "ESC: quit",
        ]

        for line in lines:
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18
