"""Ignition probability model and the one-step fire spread update."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Callable

from .cell import FireGrid, WeightTable
from .config import (
    DEFAULT_BASE_PROB,
    DEFAULT_C1,
    DEFAULT_C2,
    DEFAULT_MAX_BURN,
    DEFAULT_VEG_WEIGHTS,
    DENSITY_WEIGHTS,
)
from .front import FireFront, Position

logger = logging.getLogger(__name__)

# Row offset, column offset and the angle of the wind blowing from that
# neighbour towards the burning cell.
NEIGHBOURS: tuple[tuple[int, int, float], ...] = (
    (-1, -1, 3 * math.pi / 4),
    (-1, 0, math.pi / 2),
    (-1, 1, math.pi / 4),
    (0, 1, 0.0),
    (1, 1, -math.pi / 4),
    (1, 0, -math.pi / 2),
    (1, -1, -3 * math.pi / 4),
    (0, -1, math.pi),
)


@dataclass(frozen=True)
class SimulationParams:
    """Parameters of a single run. Never mutated; use dataclasses.replace."""

    base_prob: float = DEFAULT_BASE_PROB
    c1: float = DEFAULT_C1
    c2: float = DEFAULT_C2
    wind_speed: float = 0.0
    wind_dir: float = 0.0  # radians
    veg_weights: WeightTable = field(default=DEFAULT_VEG_WEIGHTS)
    density_weights: WeightTable = field(default=DENSITY_WEIGHTS)
    max_burn: int = DEFAULT_MAX_BURN

    def __post_init__(self):
        if self.max_burn < 1:
            raise ValueError(f"max_burn must be at least 1, got {self.max_burn}")

    @property
    def burnt_out(self) -> int:
        """Terminal burn degree."""
        return self.max_burn + 1


@dataclass
class StepReport:
    """Cells whose burn degree changed in one step."""

    ignited: list[Position] = field(default_factory=list)
    burnt_out: list[Position] = field(default_factory=list)
    advanced: list[Position] = field(default_factory=list)


def wind_effect(wind_speed: float, wind_dir: float, angle: float, c1: float, c2: float) -> float:
    '''Directional wind multiplier for a neighbour at the given incidence angle.'''
    return math.exp(wind_speed * (c1 + c2 * (math.cos(wind_dir - angle) - 1)))


def ignition_probability(
    params: SimulationParams,
    vegetation: int,
    density: int,
    angle: float,
    clamp: bool = True,
) -> float:
    """
    Probability that a burning cell ignites one unburnt neighbour this step.

    Args:
        params: Run parameters
        vegetation: Vegetation ordinal of the neighbour
        density: Density ordinal of the neighbour
        angle: Wind incidence angle of the neighbour offset
        clamp: Clamp the product to [0, 1]. Spread decisions compare the
            value against a draw in [0, 1), so the outcome is the same
            either way.
    """
    slope_effect = 1.0
    prob = (
        params.base_prob
        * (1 + params.veg_weights[vegetation])
        * (1 + params.density_weights[density])
        * wind_effect(params.wind_speed, params.wind_dir, angle, params.c1, params.c2)
        * slope_effect
    )
    if clamp:
        return max(0.0, min(1.0, prob))
    return prob


def advance_one_step(
    grid: FireGrid,
    front: FireFront,
    params: SimulationParams,
    draw: Callable[[], float],
) -> StepReport:
    """
    Advance the automaton by one time step.

    Only the cells on the front when the step starts are processed: cells
    ignited during the step join the live front and are first visited in
    the following step. After trying to ignite its neighbours, each burning
    cell moves to its next burn stage and leaves the front once burnt out.

    Args:
        grid: Grid mutated in place
        front: Live fire front, mutated in place
        params: Run parameters
        draw: Uniform random source in [0, 1)

    Returns:
        The cells ignited, advanced and burnt out during this step
    """
    report = StepReport()
    height, width = grid.shape
    burn_degree = grid.burn_degree
    vegetation = grid.vegetation
    density = grid.density
    burnt_out = params.burnt_out

    for row, col in front.snapshot():
        for row_offset, col_offset, angle in NEIGHBOURS:
            n_row = row + row_offset
            n_col = col + col_offset
            if n_row < 0 or n_row >= height or n_col < 0 or n_col >= width:
                continue
            if burn_degree[n_row, n_col] != 0:
                continue

            prob = ignition_probability(
                params, vegetation[n_row, n_col], density[n_row, n_col], angle, clamp=False
            )
            if prob > draw():
                burn_degree[n_row, n_col] = 1
                front.ignite((n_row, n_col))
                report.ignited.append((n_row, n_col))

        burn_degree[row, col] += 1
        if burn_degree[row, col] >= burnt_out:
            front.extinguish((row, col))
            report.burnt_out.append((row, col))
        else:
            report.advanced.append((row, col))

    logger.debug(
        f"Step ignited {len(report.ignited)} cells, burnt out {len(report.burnt_out)}, "
        f"front size {front.size()}"
    )
    return report
