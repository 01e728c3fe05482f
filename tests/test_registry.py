"""Tests for formicary.colony — roles, registry, lifecycle."""

import pytest

from formicary.colony import lifecycle
from formicary.colony.registry import AgentRegistry
from formicary.colony.roles import MOBILE_LIFESPAN, QUEEN_LIFESPAN, Role
from formicary.errors import InvalidRoleError, UnknownAgentError
from formicary.world.grid import GridState


class TestRole:
    """Tests for role parsing and capabilities."""

    def test_parse_variants(self) -> None:
        assert Role.parse(Role.SCOUT) is Role.SCOUT
        assert Role.parse("invader") is Role.INVADER
        assert Role.parse(" Forager ") is Role.FORAGER
        assert Role.parse(3) is Role.SOLDIER

    @pytest.mark.parametrize("bad", ["drone", 9, None, True])
    def test_parse_rejects_unknown(self, bad: object) -> None:
        with pytest.raises(InvalidRoleError):
            Role.parse(bad)

    def test_capabilities(self) -> None:
        assert not Role.QUEEN.is_mobile
        assert Role.SCOUT.is_mobile
        assert Role.SOLDIER.is_offensive
        assert Role.INVADER.is_offensive
        assert not Role.FORAGER.is_offensive

    def test_lifespans(self) -> None:
        assert Role.QUEEN.lifespan == QUEEN_LIFESPAN == 73000
        assert Role.INVADER.lifespan == MOBILE_LIFESPAN == 3650


class TestAgentRegistry:
    """Tests for creating, finding and destroying agents."""

    def test_ids_increase(self, registry: AgentRegistry) -> None:
        a = registry.create(Role.SCOUT, (0, 0))
        b = registry.create("soldier", (0, 0))
        assert (a.agent_id, b.agent_id) == (0, 1)

    def test_create_places_on_grid(
        self,
        registry: AgentRegistry,
        small_grid: GridState,
    ) -> None:
        ant = registry.create(Role.FORAGER, (1, 3))
        cell = small_grid[(1, 3)]
        assert cell.counts[Role.FORAGER] == 1
        assert cell.occupants == [ant.agent_id]
        assert registry.population(Role.FORAGER) == 1

    def test_forager_memory_primed(self, registry: AgentRegistry) -> None:
        ant = registry.create(Role.FORAGER, (2, 2))
        assert ant.forager is not None
        assert list(ant.forager.recent_moves) == [(2, 2)] * 8
        assert ant.forager.move_history == []
        assert not ant.forager.carrying_food

    def test_non_foragers_have_no_memory(self, registry: AgentRegistry) -> None:
        assert registry.create(Role.SCOUT, (0, 0)).forager is None

    def test_queen_is_singleton(self, registry: AgentRegistry) -> None:
        queen = registry.create(Role.QUEEN, (2, 2))
        assert registry.queen is queen
        assert registry.colony_alive
        with pytest.raises(InvalidRoleError):
            registry.create(Role.QUEEN, (1, 1))

    def test_queen_reveals_her_cell(
        self,
        registry: AgentRegistry,
        small_grid: GridState,
    ) -> None:
        registry.create(Role.QUEEN, (2, 2))
        assert small_grid[(2, 2)].discovered
        assert small_grid[(2, 2)].queen_present

    def test_unknown_role_rejected(self, registry: AgentRegistry) -> None:
        with pytest.raises(InvalidRoleError):
            registry.create("drone", (0, 0))
        assert len(registry) == 0

    def test_off_grid_rejected(self, registry: AgentRegistry) -> None:
        with pytest.raises(IndexError):
            registry.create(Role.SCOUT, (9, 9))

    def test_get_and_role_of(self, registry: AgentRegistry) -> None:
        ant = registry.create(Role.INVADER, (0, 0))
        assert registry.get(ant.agent_id) is ant
        assert registry.role_of(ant.agent_id) is Role.INVADER

    def test_get_unknown(self, registry: AgentRegistry) -> None:
        with pytest.raises(UnknownAgentError):
            registry.get(42)

    def test_destroy_twice_fails(self, registry: AgentRegistry) -> None:
        ant = registry.create(Role.SCOUT, (0, 0))
        registry.destroy(ant)
        with pytest.raises(UnknownAgentError):
            registry.destroy(ant)

    def test_snapshot_is_frozen(self, registry: AgentRegistry) -> None:
        registry.create(Role.SCOUT, (0, 0))
        snap = registry.snapshot(Role.SCOUT)
        registry.create(Role.SCOUT, (0, 0))
        assert len(snap) == 1
        assert registry.population(Role.SCOUT) == 2


class TestLifecycle:
    """Tests for aging and the death transition."""

    def test_aging_increments(
        self,
        registry: AgentRegistry,
        small_grid: GridState,
    ) -> None:
        ant = registry.create(Role.SCOUT, (0, 0))
        assert lifecycle.grow_older(ant, small_grid, registry)
        assert ant.age == 1

    def test_dies_exactly_at_lifespan(
        self,
        registry: AgentRegistry,
        small_grid: GridState,
    ) -> None:
        ant = registry.create(Role.SOLDIER, (1, 1))
        ant.age = MOBILE_LIFESPAN - 2
        assert lifecycle.grow_older(ant, small_grid, registry)
        assert not lifecycle.grow_older(ant, small_grid, registry)
        assert ant.age == MOBILE_LIFESPAN
        assert not ant.alive
        assert small_grid[(1, 1)].counts[Role.SOLDIER] == 0
        assert registry.population(Role.SOLDIER) == 0

    def test_die_is_idempotent(
        self,
        registry: AgentRegistry,
        small_grid: GridState,
    ) -> None:
        ant = registry.create(Role.SCOUT, (0, 0))
        lifecycle.die(ant, small_grid, registry)
        lifecycle.die(ant, small_grid, registry)
        assert small_grid[(0, 0)].counts[Role.SCOUT] == 0

    def test_forager_corpse_drops_food(
        self,
        registry: AgentRegistry,
        small_grid: GridState,
    ) -> None:
        ant = registry.create(Role.FORAGER, (3, 3))
        small_grid.set_food((3, 3), 4)
        lifecycle.die(ant, small_grid, registry)
        assert small_grid[(3, 3)].food == 5
        assert small_grid[(3, 3)].occupants == []

    def test_queen_death_is_recorded(
        self,
        registry: AgentRegistry,
        small_grid: GridState,
    ) -> None:
        queen = registry.create(Role.QUEEN, (2, 2))
        lifecycle.die(queen, small_grid, registry, cause="test")
        assert registry.queen_died
        assert not registry.colony_alive
        assert registry.queen is None
        assert not small_grid[(2, 2)].queen_present
