"""Exceptions raised by the fire spread automaton."""


class FireSimulationError(Exception):
    """Base class for all simulation errors."""


class InvalidDimension(FireSimulationError, ValueError):
    """Grid width or height is not a positive integer."""


class OutOfBounds(FireSimulationError, IndexError):
    """A coordinate lies outside the grid."""

    def __init__(self, position: tuple[int, int], shape: tuple[int, int]):
        self.position = position
        self.shape = shape
        super().__init__(f"Position {position} is outside grid of shape {shape}")


class DegenerateSweep(FireSimulationError, ValueError):
    """Sweep configuration that would run forever or produce no runs."""


class NoBurnedCells(FireSimulationError, ValueError):
    """Statistic requested on a grid where no cell ever burned."""
