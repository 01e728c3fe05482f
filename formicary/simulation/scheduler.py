"""Scheduler — the main tick loop and its run/step control.

Owns the grid, the agent registry and the random stream, and advances
them in the canonical tick order:

1. Refresh cells (discovered-neighbour caches, pheromone halving)
2. Scouts
3. Foragers
4. Soldiers
5. Invaders, then maybe one new invader at the origin
6. Queen

The order is load-bearing: foragers read discovery and pheromone state
refreshed this tick, and fighters see the tallies left by the movement
phases before them.  Each phase works on a snapshot of its role taken at
phase start, so deaths never skip or repeat an agent and hatchlings wait
for the next tick.
"""

from __future__ import annotations

import logging
from dataclasses import InitVar, dataclass, field
from enum import Enum, auto

from formicary.colony import forager, invader, queen, scout, soldier
from formicary.colony.agent import Agent, Position
from formicary.colony.combat import CombatResolver
from formicary.colony.registry import AgentRegistry
from formicary.colony.roles import Role
from formicary.errors import ColonyCollapsedError, InvalidRoleError, SimulationError
from formicary.simulation.config import ColonyPreset, SimulationConfig
from formicary.simulation.random_source import RandomSource
from formicary.world.grid import GridState
from formicary.world.observer import GridObserver, NullObserver

logger = logging.getLogger(__name__)

INVADER_ORIGIN: Position = (0, 0)


class Phase(Enum):
    """One step of a tick."""

    REFRESH = auto()
    SCOUTS = auto()
    FORAGERS = auto()
    SOLDIERS = auto()
    INVADERS = auto()
    QUEEN = auto()


PHASE_ORDER: tuple[Phase, ...] = (
    Phase.REFRESH,
    Phase.SCOUTS,
    Phase.FORAGERS,
    Phase.SOLDIERS,
    Phase.INVADERS,
    Phase.QUEEN,
)

PHASE_ROLES: dict[Phase, Role] = {
    Phase.SCOUTS: Role.SCOUT,
    Phase.FORAGERS: Role.FORAGER,
    Phase.SOLDIERS: Role.SOLDIER,
    Phase.INVADERS: Role.INVADER,
    Phase.QUEEN: Role.QUEEN,
}


class SchedulerState(Enum):
    """Control state of the tick loop."""

    STOPPED = auto()
    RUNNING = auto()
    HALTED = auto()


@dataclass
class Scheduler:
    """Drives the simulation forward tick by tick.

    Attributes:
        config: Loaded simulation configuration.
        observer: Receiver of every cell change and colony signal.
        random_source: Optional random stream to use instead of one
            seeded from ``config.seed``.
        rng: The single random stream.
        resolver: Combat rules shared by soldiers and invaders.
        grid: The cell arena.
        registry: All live agents.
        home: Position of the colony (the queen's cell).
        state: Run/step control state.
        tick: Number of ticks performed since ``initialize``.
    """

    config: SimulationConfig
    observer: GridObserver = field(default_factory=NullObserver)
    random_source: InitVar[RandomSource | None] = None
    resolver: CombatResolver = field(default_factory=CombatResolver)
    grid: GridState = field(init=False)
    registry: AgentRegistry = field(init=False)
    home: Position = field(init=False)
    rng: RandomSource = field(init=False)
    state: SchedulerState = SchedulerState.STOPPED
    tick: int = 0
    _elapsed: float = field(default=0.0, repr=False)

    def __post_init__(self, random_source: RandomSource | None) -> None:
        """Build the random stream and an empty grid and registry from config."""
        self.rng = (
            random_source if random_source is not None else RandomSource(self.config.seed)
        )
        self._reset(self.config.rows, self.config.cols)

    # -- Control commands -------------------------------------------------

    def initialize(
        self,
        rows: int | None = None,
        cols: int | None = None,
        preset: str | ColonyPreset | None = None,
    ) -> Agent:
        """Build a fresh grid and found a colony on it.

        The queen is placed at the colony position, her cell and its
        neighbours are revealed, the preset's population hatches on her
        cell, and her cell is stocked with the preset's food.

        Args:
            rows: Grid rows (default from config).
            cols: Grid columns (default from config).
            preset: Preset name or instance (default from config).

        Returns:
            The queen.
        """
        rows = rows or self.config.rows
        cols = cols or self.config.cols
        if not isinstance(preset, ColonyPreset):
            preset = self.config.colony_preset(preset)

        self._reset(rows, cols)
        self.home = self.config.home(rows, cols)

        the_queen = self.registry.create(Role.QUEEN, self.home)
        self.grid.reveal_around(self.home)
        for role, number in (
            (Role.FORAGER, preset.foragers),
            (Role.SCOUT, preset.scouts),
            (Role.SOLDIER, preset.soldiers),
        ):
            for _ in range(number):
                self.registry.create(role, self.home)
        self.grid.set_food(self.home, preset.food)
        self.grid.set_pheromone(self.home, 0)

        logger.info(
            "colony founded at %s on a %dx%d grid: %d foragers, %d scouts, "
            "%d soldiers, %d food",
            self.home,
            rows,
            cols,
            preset.foragers,
            preset.scouts,
            preset.soldiers,
            preset.food,
        )
        return the_queen

    def run(self) -> None:
        """Start continuous ticking at ``config.ms_per_turn`` intervals."""
        if self.state is SchedulerState.HALTED:
            logger.warning("run ignored: the colony has collapsed")
            return
        if self.state is not SchedulerState.RUNNING:
            logger.info("simulation running")
        self.state = SchedulerState.RUNNING

    def stop(self) -> None:
        """Stop continuous ticking after the current tick."""
        if self.state is SchedulerState.RUNNING:
            self.state = SchedulerState.STOPPED
            logger.info("simulation stopped at tick %d", self.tick)

    def step(self) -> bool:
        """Stop continuous ticking and advance exactly one tick.

        Returns:
            True if a tick was performed.
        """
        if self.state is SchedulerState.HALTED:
            logger.warning("step ignored: the colony has collapsed")
            return False
        self.stop()
        self.advance_tick()
        return True

    def spawn_test(
        self,
        role: Role | str | int,
        position: Position | None = None,
    ) -> Agent | None:
        """Inject one agent for debugging.

        Args:
            role: Role, role name, or numeric code.
            position: Spawn cell; defaults to the configured debug
                position for the role, else the colony.

        Returns:
            The new agent, or None if the request was rejected.  The
            queen comes only from ``initialize``, and nothing spawns
            once the colony has collapsed.
        """
        if self.state is SchedulerState.HALTED:
            logger.warning("spawn test rejected: the colony has collapsed")
            return None
        try:
            parsed = Role.parse(role)
            if parsed is Role.QUEEN:
                msg = "the queen is only founded by initialize"
                raise InvalidRoleError(msg)
            if position is None:
                position = self.config.test_spawn_position(parsed) or self.home
            agent = self.registry.create(parsed, position)
        except (InvalidRoleError, IndexError) as exc:
            logger.warning("spawn test rejected: %s", exc)
            return None
        logger.debug("spawn test: %s #%d at %s", parsed.name.lower(), agent.agent_id, position)
        return agent

    # -- Tick loop --------------------------------------------------------

    def update(self, elapsed: float) -> int:
        """Advance wall-clock time while running; tick when due.

        Args:
            elapsed: Seconds since the previous call.

        Returns:
            Number of ticks performed.
        """
        if self.state is not SchedulerState.RUNNING:
            self._elapsed = 0.0
            return 0
        interval = self.config.ms_per_turn / 1000.0
        if interval <= 0:
            self.advance_tick()
            return 1

        self._elapsed += elapsed
        performed = 0
        while self._elapsed >= interval and self.state is SchedulerState.RUNNING:
            self._elapsed -= interval
            self.advance_tick()
            performed += 1
        return performed

    def advance(self, ticks: int) -> int:
        """Run a fixed number of ticks, stopping early on collapse.

        Args:
            ticks: Number of ticks to advance.

        Returns:
            Number of ticks actually performed.
        """
        performed = 0
        for _ in range(ticks):
            if self.state is SchedulerState.HALTED:
                break
            self.advance_tick()
            performed += 1
        return performed

    def advance_tick(self) -> None:
        """Perform one tick in ``PHASE_ORDER``.

        Raises:
            ColonyCollapsedError: If the queen is already dead.
        """
        if self.state is SchedulerState.HALTED:
            msg = f"the colony collapsed at tick {self.tick}"
            raise ColonyCollapsedError(msg)

        self.tick += 1
        self.observer.set_clock(*self.clock())
        for phase in PHASE_ORDER:
            self._run_phase(phase)
            if self.registry.queen_died:
                self._collapse()
                return

    def _run_phase(self, phase: Phase) -> None:
        if phase is Phase.REFRESH:
            self.grid.refresh()
            return

        for agent in self.registry.snapshot(PHASE_ROLES[phase]):
            if not agent.alive:
                continue
            self._act(agent)
            if self.registry.queen_died:
                return

        if phase is Phase.INVADERS:
            self._maybe_spawn_invader()

    def _act(self, agent: Agent) -> None:
        """Dispatch one agent's behaviour, isolating its failures."""
        try:
            match agent.role:
                case Role.SCOUT:
                    scout.act(agent, self.grid, self.registry, self.rng)
                case Role.FORAGER:
                    forager.act(agent, self.grid, self.registry, self.rng)
                case Role.SOLDIER:
                    soldier.act(agent, self.grid, self.registry, self.rng, self.resolver)
                case Role.INVADER:
                    invader.act(agent, self.grid, self.registry, self.rng, self.resolver)
                case Role.QUEEN:
                    queen.act(agent, self.grid, self.registry, self.rng)
        except SimulationError:
            logger.exception(
                "%s #%d failed on tick %d",
                agent.role.name.lower(),
                agent.agent_id,
                self.tick,
            )

    def _maybe_spawn_invader(self) -> None:
        if self.rng.percent_chance(self.config.invader_spawn_percent):
            agent = self.registry.create(Role.INVADER, INVADER_ORIGIN)
            logger.debug("invader #%d appeared on tick %d", agent.agent_id, self.tick)

    def _collapse(self) -> None:
        self.state = SchedulerState.HALTED
        logger.warning("the queen is dead; colony collapsed on tick %d", self.tick)
        self.observer.colony_collapsed(self.tick)

    # -- Queries ----------------------------------------------------------

    @property
    def colony_alive(self) -> bool:
        """True while the queen lives."""
        return self.registry.colony_alive

    @property
    def halted(self) -> bool:
        """True once the colony has collapsed."""
        return self.state is SchedulerState.HALTED

    def clock(self) -> tuple[int, int]:
        """Return elapsed time as ``(days, turns)``."""
        per_day = max(1, self.config.turns_per_day)
        return divmod(self.tick, per_day)

    def clock_text(self) -> str:
        """Elapsed time as shown to the operator."""
        days, turns = self.clock()
        return f"{days} days, {turns} turns"

    def population(self, role: Role) -> int:
        """Number of live agents of ``role``."""
        return self.registry.population(role)

    def _reset(self, rows: int, cols: int) -> None:
        self.grid = GridState(rows=rows, cols=cols, observer=self.observer)
        self.registry = AgentRegistry(grid=self.grid)
        self.home = self.config.home(rows, cols)
        self.state = SchedulerState.STOPPED
        self.tick = 0
        self._elapsed = 0.0
