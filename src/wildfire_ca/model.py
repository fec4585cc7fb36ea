"""Fire spread model implementation."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np
from mesa import Model
from mesa.datacollection import DataCollector

from .cell import FireGrid, Vegetation
from .errors import OutOfBounds
from .front import FireFront, Position
from .spread import SimulationParams, StepReport, advance_one_step

logger = logging.getLogger(__name__)

StepObserver = Callable[["FireModel", StepReport], None]


@dataclass(frozen=True)
class SimulationSummary:
    """Outcome of running a model until the fire is out."""

    step_count: int
    elapsed: float  # seconds


class FireModel(Model):
    """Main model for fire spread simulation using cellular automata."""

    def __init__(self, grid: FireGrid, params: Optional[SimulationParams] = None, seed: Optional[int] = None):
        """
        Initialize the fire spread model.

        The grid is used as is and mutated by every step; pass ``grid.copy()``
        to keep the original untouched.

        Args:
            grid: Terrain grid the fire spreads over
            params: Run parameters, defaults if None
            seed: Seed for the model's random stream
        """
        super().__init__(seed=seed)
        self.grid = grid
        self.params = params if params is not None else SimulationParams()
        self.front = FireFront()
        self.step_count = 0
        self.last_report: Optional[StepReport] = None

        self.datacollector = DataCollector(
            model_reporters={
                "Burning": lambda m: m.front.size(),
                "Burnt": lambda m: int(np.count_nonzero(m.grid.burn_degree)),
            }
        )

    def set_fire(self, position: Optional[Position] = None) -> Position:
        """
        Start a new fire, putting out any fire currently burning.

        Args:
            position: (row, col) to ignite, the grid centre if None

        Returns:
            The ignited position

        Raises:
            OutOfBounds: If the position is outside the grid
        """
        if position is None:
            position = (self.grid.height // 2, self.grid.width // 2)
        row, col = int(position[0]), int(position[1])
        if not self.grid.in_bounds(row, col):
            raise OutOfBounds((row, col), self.grid.shape)

        for burning_row, burning_col in self.front.snapshot():
            self.grid.burn_degree[burning_row, burning_col] = 0
        self.front.clear()

        self.grid.burn_degree[row, col] = 1
        self.front.ignite((row, col))
        self.running = True

        if self.params.veg_weights[self.grid.vegetation[row, col]] <= -1:
            logger.warning(
                f"Ignited cell {(row, col)} has non-flammable vegetation "
                f"{Vegetation(int(self.grid.vegetation[row, col])).name}, it could not catch fire by spreading"
            )
        logger.info(f"Fire started at {(row, col)}")
        return (row, col)

    def step(self) -> None:
        """
        Execute one step of the simulation.

        The cells changed by the step are kept in ``last_report``.
        """
        self.last_report = advance_one_step(self.grid, self.front, self.params, self.random.random)
        self.step_count += 1
        self.datacollector.collect(self)

        if not self.front:
            self.running = False

    def simulate(
        self,
        observer: Optional[StepObserver] = None,
        step_interval: float = 0.0,
    ) -> SimulationSummary:
        """
        Run steps until the fire front is empty.

        Args:
            observer: Called with (model, report) after every step
            step_interval: Seconds to wait between steps, for animation

        Returns:
            Number of steps taken and wall-clock duration
        """
        start = time.perf_counter()
        steps = 0

        while self.front:
            self.step()
            steps += 1
            if observer is not None:
                observer(self, self.last_report)
            if step_interval > 0:
                time.sleep(step_interval)

        self.running = False
        elapsed = time.perf_counter() - start
        logger.info(f"Fire extinguished after {steps} steps ({elapsed:.3f}s)")
        return SimulationSummary(step_count=steps, elapsed=elapsed)

    def history(self):
        """Per-step front size and burnt count as a pandas DataFrame."""
        return self.datacollector.get_model_vars_dataframe()

    def log_parameters(self) -> None:
        p = self.params
        logger.info(
            f"Model parameters: base_prob={p.base_prob}, c1={p.c1}, c2={p.c2}, "
            f"wind_speed={p.wind_speed}, wind_dir={p.wind_dir:.3f} rad, max_burn={p.max_burn}"
        )

    def __str__(self):
        return f"FireModel({self.grid}, front={self.front.size()}, steps={self.step_count})"


def simulate(
    grid: FireGrid,
    params: Optional[SimulationParams] = None,
    fire_pos: Optional[Position] = None,
    seed: Optional[int] = None,
    observer: Optional[StepObserver] = None,
    step_interval: float = 0.0,
) -> SimulationSummary:
    """Ignite ``fire_pos`` (or the centre) on ``grid`` and run until the fire is out."""
    model = FireModel(grid, params, seed=seed)
    model.set_fire(fire_pos)
    return model.simulate(observer=observer, step_interval=step_interval)
