"""Parameter sweeps: many independent simulations varying one parameter.

A sweep is described by an ``ExperimentConfig``. Each test value gets its
own copy of the base grid and of the run parameters, so runs can execute
concurrently. Long sweeps are paginated: a page runs at most ``nb_iters``
values and returns the start value of the next page, or ``None`` once the
maximum is reached.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import pandas as pd

from .cell import Density, FireGrid, Vegetation, WeightTable
from .config import DEFAULT_NB_ITERS
from .errors import DegenerateSweep, NoBurnedCells, OutOfBounds
from .front import Position
from .model import FireModel
from .results import VegetationBurn, burn_percentage, burnt_by_vegetation, fire_centre
from .spread import SimulationParams

logger = logging.getLogger(__name__)


# ============================================================================
# SWEEP TARGETS
# ============================================================================

class SweepTarget:
    """A run parameter that a sweep varies."""

    name: str = ""

    def get(self, params: SimulationParams) -> float:
        raise NotImplementedError

    def apply(self, params: SimulationParams, value: float) -> SimulationParams:
        """Return a copy of ``params`` with the swept value set."""
        raise NotImplementedError


@dataclass(frozen=True)
class WindSpeed(SweepTarget):
    name: str = field(default="wind_speed", init=False)

    def get(self, params: SimulationParams) -> float:
        return params.wind_speed

    def apply(self, params: SimulationParams, value: float) -> SimulationParams:
        return dataclasses.replace(params, wind_speed=float(value))


@dataclass(frozen=True)
class WindDirection(SweepTarget):
    """Wind direction, swept in degrees by default and stored in radians."""

    degrees: bool = True
    name: str = field(default="wind_dir", init=False)

    def get(self, params: SimulationParams) -> float:
        return math.degrees(params.wind_dir) if self.degrees else params.wind_dir

    def apply(self, params: SimulationParams, value: float) -> SimulationParams:
        radians = math.radians(value) if self.degrees else float(value)
        return dataclasses.replace(params, wind_dir=radians)


@dataclass(frozen=True)
class VegetationWeight(SweepTarget):
    vegetation: Vegetation = Vegetation.FOREST

    @property
    def name(self) -> str:
        return f"veg_weights.{self.vegetation.name}"

    def get(self, params: SimulationParams) -> float:
        return params.veg_weights[self.vegetation]

    def apply(self, params: SimulationParams, value: float) -> SimulationParams:
        return dataclasses.replace(
            params, veg_weights=params.veg_weights.with_weight(self.vegetation, value)
        )


SCALAR_FIELDS = ("base_prob", "c1", "c2", "wind_speed", "wind_dir", "max_burn")


@dataclass(frozen=True)
class ScalarField(SweepTarget):
    """Any other scalar field of SimulationParams, set as is."""

    field_name: str = "base_prob"

    def __post_init__(self):
        if self.field_name not in SCALAR_FIELDS:
            raise ValueError(
                f"Cannot sweep '{self.field_name}', expected one of {', '.join(SCALAR_FIELDS)}"
            )

    @property
    def name(self) -> str:
        return self.field_name

    def get(self, params: SimulationParams) -> float:
        return getattr(params, self.field_name)

    def apply(self, params: SimulationParams, value: float) -> SimulationParams:
        if self.field_name == "max_burn":
            if not float(value).is_integer():
                raise ValueError(f"max_burn must be a whole number, got {value}")
            return dataclasses.replace(params, max_burn=int(value))
        return dataclasses.replace(params, **{self.field_name: float(value)})


_TARGET_ALIASES = {
    "wind_speed": WindSpeed,
    "windSpeed": WindSpeed,
    "wind_dir": WindDirection,
    "windDir": WindDirection,
}


def parse_target(text: str) -> SweepTarget:
    """
    Build a sweep target from its name.

    Accepts ``wind_speed``, ``wind_dir``, ``veg_weights.<VEGETATION>`` and
    any name in SCALAR_FIELDS.
    """
    if text in _TARGET_ALIASES:
        return _TARGET_ALIASES[text]()

    prefix, _, member = text.partition(".")
    if prefix in ("veg_weights", "vegWeights"):
        try:
            return VegetationWeight(Vegetation[member.upper()])
        except KeyError:
            names = ", ".join(veg.name for veg in Vegetation)
            raise ValueError(f"Unknown vegetation '{member}', expected one of {names}") from None

    return ScalarField(text)


# ============================================================================
# CONFIGURATION AND RESULTS
# ============================================================================

@dataclass(frozen=True)
class ExperimentConfig:
    """
    One page of a parameter sweep.

    Attributes:
        target: Parameter being swept
        step: Increment between consecutive test values
        start: First test value of this page
        nb_iters: Maximum number of runs in this page
        max_value: Optional exclusive upper bound of the whole sweep
        label_format: Format string for run labels, e.g. "{} m/s"
        params: Base run parameters, never mutated
        fire_pos: Ignition (row, col), the grid centre if None
        seed: Run i is seeded with seed + i; unseeded if None
        max_workers: Runs executed concurrently
    """

    target: SweepTarget
    step: float
    start: float = 0.0
    nb_iters: int = DEFAULT_NB_ITERS
    max_value: Optional[float] = None
    label_format: str = "{}"
    params: SimulationParams = field(default_factory=SimulationParams)
    fire_pos: Optional[Position] = None
    seed: Optional[int] = None
    max_workers: int = 1

    def __post_init__(self):
        if self.nb_iters < 1:
            raise DegenerateSweep(f"nb_iters must be at least 1, got {self.nb_iters}")
        if self.max_value is not None and self.step <= 0:
            raise DegenerateSweep(
                f"Sweep towards max_value={self.max_value} needs a positive step, got {self.step}"
            )
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> "ExperimentConfig":
        """
        Build a config from a plain mapping, filling in defaults.

        Recognised keys: variable, step, start, nb_iters, max, label_format,
        sim_options, fire_pos, seed, max_workers. ``sim_options`` overrides
        SimulationParams fields; its ``veg_weights`` entry may be a partial
        mapping of vegetation names to weights.
        """
        target = config["variable"]
        if isinstance(target, str):
            target = parse_target(target)

        fire_pos = config.get("fire_pos")
        return cls(
            target=target,
            step=float(config["step"]),
            start=float(config.get("start", 0.0)),
            nb_iters=int(config.get("nb_iters", DEFAULT_NB_ITERS)),
            max_value=config.get("max"),
            label_format=config.get("label_format", "{}"),
            params=build_params(config.get("sim_options") or {}),
            fire_pos=tuple(fire_pos) if fire_pos is not None else None,
            seed=config.get("seed"),
            max_workers=int(config.get("max_workers", 1)),
        )

    def next_page(self, next_start: float) -> "ExperimentConfig":
        """Same sweep, resumed from a continuation value."""
        return dataclasses.replace(self, start=next_start)


def build_params(options: Mapping[str, Any]) -> SimulationParams:
    """SimulationParams from a mapping of overrides; missing fields keep defaults."""
    options = dict(options)
    defaults = SimulationParams()

    veg = options.pop("veg_weights", None)
    if veg is not None and not isinstance(veg, WeightTable):
        weights = defaults.veg_weights.as_dict()
        for key, value in veg.items():
            weights[key if isinstance(key, Vegetation) else Vegetation[str(key).upper()]] = value
        veg = WeightTable(Vegetation, weights)

    dens = options.pop("density_weights", None)
    if dens is not None and not isinstance(dens, WeightTable):
        weights = defaults.density_weights.as_dict()
        for key, value in dens.items():
            weights[key if isinstance(key, Density) else Density[str(key).upper()]] = value
        dens = WeightTable(Density, weights)

    unknown = set(options) - set(SCALAR_FIELDS)
    if unknown:
        raise ValueError(f"Unknown simulation options: {', '.join(sorted(unknown))}")

    overrides: dict[str, Any] = dict(options)
    if veg is not None:
        overrides["veg_weights"] = veg
    if dens is not None:
        overrides["density_weights"] = dens
    return dataclasses.replace(defaults, **overrides)


@dataclass(frozen=True)
class RunResult:
    """Summary of one simulation in a sweep."""

    step_count: int
    burn_percentage: float
    burnt_by_vegetation: list[VegetationBurn]
    fire_centre: Optional[tuple[float, float]]  # None if nothing burned


@dataclass
class ExperimentResults:
    runs: list[RunResult]
    labels: list[str]
    values: list[float]
    next_start: Optional[float] = None

    @property
    def complete(self) -> bool:
        return self.next_start is None

    def to_frame(self) -> pd.DataFrame:
        """One row per run, with a burnt_<VEGETATION> column per vegetation type."""
        rows = []
        for label, value, run in zip(self.labels, self.values, self.runs):
            centre_row, centre_col = run.fire_centre if run.fire_centre is not None else (math.nan, math.nan)
            row = {
                "label": label,
                "value": value,
                "step_count": run.step_count,
                "burn_percentage": run.burn_percentage,
                "centre_row": centre_row,
                "centre_col": centre_col,
            }
            for name, _, fraction in run.burnt_by_vegetation:
                row[f"burnt_{name}"] = math.nan if fraction is None else fraction
            rows.append(row)
        return pd.DataFrame(rows)


# ============================================================================
# SWEEP RUNNER
# ============================================================================

def sweep_values(
    start: float,
    step: float,
    nb_iters: int,
    max_value: Optional[float] = None,
) -> tuple[list[float], Optional[float]]:
    """
    Test values of one sweep page and the start of the next page.

    Values are ``start + step * i`` for ``i < nb_iters``. With a maximum,
    values at or above it are dropped and, once the maximum is reached,
    the continuation is None.

    Raises:
        DegenerateSweep: On a non-positive step with a maximum, or nb_iters < 1
    """
    if nb_iters < 1:
        raise DegenerateSweep(f"nb_iters must be at least 1, got {nb_iters}")

    values = [start + step * i for i in range(nb_iters)]
    next_start = start + step * nb_iters
    if max_value is None:
        return values, next_start

    if step <= 0:
        raise DegenerateSweep(f"Sweep towards max={max_value} needs a positive step, got {step}")

    # tolerate float drift such as 0.1 * 3 > 0.3
    eps = abs(step) * 1e-9
    values = [v for v in values if v < max_value - eps]
    if next_start >= max_value - eps:
        return values, None
    return values, next_start


def format_label(label_format: str, value: float) -> str:
    """Insert ``value`` rounded half up to 2 decimals, dropping a trailing .0."""
    rounded = math.floor(float(value) * 100 + 0.5) / 100
    text = str(int(rounded)) if rounded.is_integer() else str(rounded)
    return label_format.format(text)


def _run_single(index: int, value: float, config: ExperimentConfig, base_grid: FireGrid) -> RunResult:
    params = config.target.apply(config.params, value)
    grid = base_grid.copy()
    seed = None if config.seed is None else config.seed + index

    model = FireModel(grid, params, seed=seed)
    model.set_fire(config.fire_pos)
    summary = model.simulate()

    try:
        centre = fire_centre(grid)
    except NoBurnedCells:
        centre = None

    logger.debug(f"Run {index} ({config.target.name}={value}) finished in {summary.step_count} steps")
    return RunResult(
        step_count=summary.step_count,
        burn_percentage=burn_percentage(grid),
        burnt_by_vegetation=burnt_by_vegetation(grid),
        fire_centre=centre,
    )


def run_experiment(config: ExperimentConfig, base_grid: FireGrid) -> ExperimentResults:
    """
    Run one page of a sweep.

    ``base_grid`` is shared by all runs and is never modified; every run
    works on its own copy.

    Returns:
        Per-run results, labels and test values in sweep order, and the
        start value of the next page (None once the sweep is complete)
    """
    values, next_start = sweep_values(config.start, config.step, config.nb_iters, config.max_value)
    if config.fire_pos is not None and not base_grid.in_bounds(*config.fire_pos):
        raise OutOfBounds(tuple(config.fire_pos), base_grid.shape)

    logger.info(
        f"Sweeping {config.target.name} over {len(values)} values from {config.start} "
        f"(step {config.step}, workers {config.max_workers})"
    )

    if config.max_workers > 1 and len(values) > 1:
        with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
            futures = [
                executor.submit(_run_single, i, value, config, base_grid)
                for i, value in enumerate(values)
            ]
            runs = [future.result() for future in futures]
    else:
        runs = [_run_single(i, value, config, base_grid) for i, value in enumerate(values)]

    if next_start is None:
        logger.info(f"Sweep of {config.target.name} complete")
    else:
        logger.info(f"Sweep of {config.target.name} continues from {next_start}")

    return ExperimentResults(
        runs=runs,
        labels=[format_label(config.label_format, v) for v in values],
        values=values,
        next_start=next_start,
    )


# ============================================================================
# PRESETS
# ============================================================================

WIND_SPEED_SWEEP = ExperimentConfig(
    target=WindSpeed(),
    start=0.0,
    step=0.5,
    nb_iters=5,
    label_format="{} m/s",
)

WIND_DIRECTION_SWEEP = ExperimentConfig(
    target=WindDirection(),
    start=0.0,
    step=10.0,
    nb_iters=5,
    max_value=360.0,
    label_format="{}°",
    params=SimulationParams(wind_speed=5.0),
)

PRESETS: dict[str, ExperimentConfig] = {
    "wind_speed": WIND_SPEED_SWEEP,
    "wind_dir": WIND_DIRECTION_SWEEP,
}
