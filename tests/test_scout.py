"""Tests for scout exploration and food stocking."""

from formicary.colony import scout
from formicary.colony.registry import AgentRegistry
from formicary.colony.roles import Role
from formicary.simulation.random_source import RandomSource
from formicary.world.grid import GridState


class TestScout:
    """Tests for scout movement and reveal."""

    def test_reveals_empty_cell(
        self,
        small_grid: GridState,
        registry: AgentRegistry,
        scripted,
    ) -> None:
        ant = registry.create(Role.SCOUT, (2, 2))
        rng = scripted(0, 80)
        scout.act(ant, small_grid, registry, rng)
        assert ant.position == (1, 1)
        assert small_grid[(1, 1)].discovered
        assert small_grid[(1, 1)].food == 0
        assert rng.draws == 2

    def test_reveals_food_cell(
        self,
        small_grid: GridState,
        registry: AgentRegistry,
        scripted,
    ) -> None:
        ant = registry.create(Role.SCOUT, (2, 2))
        scout.act(ant, small_grid, registry, scripted(7, 10, 250))
        assert ant.position == (3, 3)
        assert small_grid[(3, 3)].food == 750

    def test_known_cell_is_not_restocked(
        self,
        open_grid: GridState,
        open_registry: AgentRegistry,
        scripted,
    ) -> None:
        open_grid.set_food((1, 2), 33)
        ant = open_registry.create(Role.SCOUT, (2, 2))
        rng = scripted(1)
        scout.act(ant, open_grid, open_registry, rng)
        assert ant.position == (1, 2)
        assert open_grid[(1, 2)].food == 33
        assert rng.draws == 1

    def test_ignores_discovery_when_moving(
        self,
        small_grid: GridState,
        registry: AgentRegistry,
        scripted,
    ) -> None:
        small_grid.reveal((0, 1))
        small_grid.refresh()
        ant = registry.create(Role.SCOUT, (0, 0))
        scout.act(ant, small_grid, registry, scripted(2, 99))
        assert ant.position == (1, 1)

    def test_reveal_is_announced(
        self,
        small_grid: GridState,
        registry: AgentRegistry,
        scripted,
        observer,
    ) -> None:
        ant = registry.create(Role.SCOUT, (0, 0))
        small_grid.observer = observer
        scout.act(ant, small_grid, registry, scripted(0, 0, 0))
        assert ("food", 0, 1, 500) in observer.events
        assert ("reveal", 0, 1) in observer.events

    def test_dead_scout_does_not_move(
        self,
        small_grid: GridState,
        registry: AgentRegistry,
        scripted,
    ) -> None:
        ant = registry.create(Role.SCOUT, (2, 2))
        ant.age = ant.lifespan - 1
        rng = scripted()
        scout.act(ant, small_grid, registry, rng)
        assert not ant.alive
        assert small_grid.population(Role.SCOUT) == 0
        assert rng.draws == 0


class TestStockFood:
    """Tests for the food drawn on first discovery."""

    def test_bounds(self, scripted) -> None:
        assert scout.stock_food(scripted(24, 0)) == scout.FOOD_MIN
        assert scout.stock_food(scripted(24, 500)) == scout.FOOD_MAX
        assert scout.stock_food(scripted(25)) == 0

    def test_about_a_quarter_of_cells_hold_food(self) -> None:
        rng = RandomSource(seed=2024)
        trials = 8000
        stocked = [scout.stock_food(rng) for _ in range(trials)]
        share = sum(1 for amount in stocked if amount > 0) / trials
        assert 0.22 < share < 0.28
        assert all(
            scout.FOOD_MIN <= amount <= scout.FOOD_MAX
            for amount in stocked
            if amount > 0
        )
