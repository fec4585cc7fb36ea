"""
Wildfire spread simulation using a probabilistic cellular automaton.

Each cell of a square terrain grid is ignited by its burning neighbours
with a probability combining vegetation, density and wind. Parameter
sweeps run many independent simulations to study the model's
sensitivity to wind and vegetation.
"""

from .cell import Cell, Density, FireGrid, Vegetation, WeightTable
from .errors import (
    DegenerateSweep,
    FireSimulationError,
    InvalidDimension,
    NoBurnedCells,
    OutOfBounds,
)
from .experiment import (
    ExperimentConfig,
    ExperimentResults,
    RunResult,
    ScalarField,
    VegetationWeight,
    WindDirection,
    WindSpeed,
    parse_target,
    run_experiment,
)
from .front import FireFront
from .model import FireModel, SimulationSummary, simulate
from .spread import SimulationParams, StepReport, advance_one_step, ignition_probability

__version__ = "0.1.0"

__all__ = [
    "Cell",
    "Density",
    "FireGrid",
    "Vegetation",
    "WeightTable",
    "FireFront",
    "SimulationParams",
    "StepReport",
    "advance_one_step",
    "ignition_probability",
    "FireModel",
    "SimulationSummary",
    "simulate",
    "ExperimentConfig",
    "ExperimentResults",
    "RunResult",
    "ScalarField",
    "VegetationWeight",
    "WindDirection",
    "WindSpeed",
    "parse_target",
    "run_experiment",
    "FireSimulationError",
    "InvalidDimension",
    "OutOfBounds",
    "DegenerateSweep",
    "NoBurnedCells",
]
