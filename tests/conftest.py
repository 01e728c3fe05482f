"""Shared fixtures for the Formicary test suite."""

from __future__ import annotations

from collections.abc import Callable, Iterable

import pytest

from formicary.colony.registry import AgentRegistry
from formicary.colony.roles import Role
from formicary.simulation.config import SimulationConfig
from formicary.simulation.random_source import RandomSource
from formicary.world.grid import GridState


class ScriptedRandom(RandomSource):
    """A random source that replays a fixed list of draws.

    Each ``below`` call consumes the next value; running out, or a value
    outside ``[0, bound)``, fails the test.
    """

    def __init__(self, values: Iterable[int] = ()) -> None:
        super().__init__(seed=0)
        self.values = list(values)

    def below(self, bound: int) -> int:
        assert self.values, f"unexpected draw below({bound})"
        value = self.values.pop(0)
        assert 0 <= value < bound, f"scripted {value} not in [0, {bound})"
        self.draws += 1
        return value


class RecordingObserver:
    """Observer that records every notification as a tuple."""

    def __init__(self) -> None:
        self.events: list[tuple] = []

    def reveal_cell(self, row: int, col: int) -> None:
        self.events.append(("reveal", row, col))

    def hide_cell(self, row: int, col: int) -> None:
        self.events.append(("hide", row, col))

    def set_queen(self, row: int, col: int, present: bool) -> None:
        self.events.append(("queen", row, col, present))

    def set_count(self, row: int, col: int, role: Role, count: int) -> None:
        self.events.append(("count", row, col, role, count))

    def set_food(self, row: int, col: int, amount: int) -> None:
        self.events.append(("food", row, col, amount))

    def set_pheromone(self, row: int, col: int, level: int) -> None:
        self.events.append(("pheromone", row, col, level))

    def set_clock(self, days: int, turns: int) -> None:
        self.events.append(("clock", days, turns))

    def colony_collapsed(self, tick: int) -> None:
        self.events.append(("collapsed", tick))

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture
def rng() -> RandomSource:
    """A deterministic random source for reproducible tests."""
    return RandomSource(seed=12345)


@pytest.fixture
def scripted() -> Callable[..., ScriptedRandom]:
    """Factory for random sources that replay the given draws."""

    def make(*values: int) -> ScriptedRandom:
        return ScriptedRandom(values)

    return make


@pytest.fixture
def observer() -> RecordingObserver:
    """An observer that records notifications."""
    return RecordingObserver()


@pytest.fixture
def small_grid() -> GridState:
    """A small 5x5 grid for fast tests, nothing discovered."""
    return GridState(rows=5, cols=5)


@pytest.fixture
def open_grid() -> GridState:
    """A 5x5 grid with every cell discovered and caches refreshed."""
    grid = GridState(rows=5, cols=5)
    for cell in grid:
        grid.reveal(cell.position)
    grid.refresh()
    return grid


@pytest.fixture
def registry(small_grid: GridState) -> AgentRegistry:
    """An empty registry on ``small_grid``."""
    return AgentRegistry(grid=small_grid)


@pytest.fixture
def open_registry(open_grid: GridState) -> AgentRegistry:
    """An empty registry on ``open_grid``."""
    return AgentRegistry(grid=open_grid)


@pytest.fixture
def quiet_config() -> SimulationConfig:
    """A 5x5 config with a fixed seed and no invader raids."""
    return SimulationConfig(seed=42, rows=5, cols=5, invader_spawn_percent=0)
