"""Config — load simulation parameters from YAML files.

Grid size, timing, the invader spawn rate, colony presets and debug
spawn positions live in YAML and are parsed into typed dataclasses here.
The per-role behaviour constants stay in their behaviour modules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from formicary.colony.roles import Role

Position = tuple[int, int]


@dataclass(frozen=True)
class ColonyPreset:
    """Starting population of a freshly founded colony.

    Attributes:
        foragers: Foragers hatched at the queen's cell.
        scouts: Scouts hatched at the queen's cell.
        soldiers: Soldiers hatched at the queen's cell.
        food: Food stocked on the queen's cell.
    """

    foragers: int = 0
    scouts: int = 0
    soldiers: int = 0
    food: int = 1000

    @classmethod
    def from_dict(cls, data: dict[str, int]) -> ColonyPreset:
        """Build a preset from a YAML mapping (missing keys use defaults)."""
        return cls(
            foragers=int(data.get("foragers", cls.foragers)),
            scouts=int(data.get("scouts", cls.scouts)),
            soldiers=int(data.get("soldiers", cls.soldiers)),
            food=int(data.get("food", cls.food)),
        )


def _default_presets() -> dict[str, ColonyPreset]:
    return {
        "normal": ColonyPreset(foragers=50, scouts=4, soldiers=10, food=1000),
        "empty": ColonyPreset(food=1000),
    }


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: RNG seed for deterministic replay (None = OS entropy).
        rows: Number of grid rows.
        cols: Number of grid columns.
        ms_per_turn: Milliseconds between ticks while running.
        turns_per_day: Ticks per simulated day (for the clock).
        invader_spawn_percent: Chance per tick, in percent, that one
            invader appears at the grid origin.
        colony_position: ``(row, col)`` of the queen; None centres her.
        preset: Name of the preset used by ``initialize``.
        presets: Available colony presets by name.
        test_spawns: Debug spawn position per role name; roles without
            an entry spawn at the colony position.
    """

    seed: int | None = None
    rows: int = 27
    cols: int = 27
    ms_per_turn: int = 1000
    turns_per_day: int = 10
    invader_spawn_percent: int = 3
    colony_position: Position | None = None
    preset: str = "normal"
    presets: dict[str, ColonyPreset] = field(default_factory=_default_presets)
    test_spawns: dict[str, Position] = field(
        default_factory=lambda: {"soldier": (3, 3), "invader": (0, 0)},
    )

    def colony_preset(self, name: str | None = None) -> ColonyPreset:
        """Return the preset called ``name`` (default: ``self.preset``).

        Raises:
            KeyError: If no preset has that name.
        """
        name = name or self.preset
        try:
            return self.presets[name]
        except KeyError:
            known = ", ".join(sorted(self.presets))
            msg = f"unknown colony preset {name!r} (known: {known})"
            raise KeyError(msg) from None

    def home(self, rows: int | None = None, cols: int | None = None) -> Position:
        """Return the queen's position on a ``rows`` x ``cols`` grid."""
        if self.colony_position is not None:
            return self.colony_position
        return ((rows or self.rows) // 2, (cols or self.cols) // 2)

    def test_spawn_position(self, role: Role) -> Position | None:
        """Return where a debug spawn of ``role`` goes (None = the colony)."""
        return self.test_spawns.get(role.name.lower())

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        presets = _default_presets()
        for name, values in (data.get("presets") or {}).items():
            presets[name] = ColonyPreset.from_dict(values or {})

        defaults = cls()
        test_spawns = dict(defaults.test_spawns)
        for name, pos in (data.get("test_spawns") or {}).items():
            test_spawns[Role.parse(name).name.lower()] = _position(pos)

        colony_position = data.get("colony_position")
        return cls(
            seed=data.get("seed", defaults.seed),
            rows=data.get("rows", defaults.rows),
            cols=data.get("cols", defaults.cols),
            ms_per_turn=data.get("ms_per_turn", defaults.ms_per_turn),
            turns_per_day=data.get("turns_per_day", defaults.turns_per_day),
            invader_spawn_percent=data.get(
                "invader_spawn_percent",
                defaults.invader_spawn_percent,
            ),
            colony_position=(
                _position(colony_position) if colony_position is not None else None
            ),
            preset=data.get("preset", defaults.preset),
            presets=presets,
            test_spawns=test_spawns,
        )


def _position(value: list[int] | tuple[int, int]) -> Position:
    row, col = value
    return (int(row), int(col))
