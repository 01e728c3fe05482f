"""Errors raised by the simulation core.

Every error the core raises on purpose derives from ``SimulationError``
so the scheduler can isolate a failing agent without swallowing
programming errors.
"""

from __future__ import annotations


class SimulationError(Exception):
    """Base class for recoverable simulation failures."""


class InvalidRoleError(SimulationError):
    """An agent role that cannot be created or destroyed here."""


class UnknownAgentError(SimulationError):
    """An agent id that is not registered."""


class EmptySelectionError(SimulationError):
    """A uniform random pick was requested from an empty set."""


class ColonyCollapsedError(SimulationError):
    """The queen is dead; the simulation can no longer tick."""
