from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
import pandas as pd

from .cell import FireGrid, Vegetation
from .errors import NoBurnedCells

# (vegetation name, ordinal, burnt fraction or None when the type is absent)
VegetationBurn = tuple[str, int, Optional[float]]


def burnt_mask(grid: FireGrid) -> np.ndarray:
    """Cells that caught fire at some point (burning or burnt out)."""
    return grid.burn_degree > 0


def count_burnt(grid: FireGrid) -> int:
    return int(np.count_nonzero(burnt_mask(grid)))


def burn_percentage(grid: FireGrid) -> float:
    """Share of the grid that caught fire, in percent."""
    return 100.0 * count_burnt(grid) / grid.size


def burnt_by_vegetation(grid: FireGrid) -> list[VegetationBurn]:
    """Burnt fraction of each vegetation type present on the grid.

    Types with no cell on the grid get ``None`` rather than 0/0.
    """
    burnt = burnt_mask(grid)
    out: list[VegetationBurn] = []
    for veg in Vegetation:
        of_type = grid.vegetation == veg
        total = int(np.count_nonzero(of_type))
        if total == 0:
            out.append((veg.name, int(veg), None))
        else:
            out.append((veg.name, int(veg), int(np.count_nonzero(burnt & of_type)) / total))
    return out


def fire_centre(grid: FireGrid) -> tuple[float, float]:
    """
    Mean (row, col) of all cells that caught fire.

    Raises:
        NoBurnedCells: If no cell ever burned
    """
    rows, cols = np.nonzero(burnt_mask(grid))
    if rows.size == 0:
        raise NoBurnedCells("Fire centre is undefined: no cell has burned")
    return float(rows.mean()), float(cols.mean())


def moving_average(values: Sequence[float], window: int = 3) -> list[float]:
    """Centred rolling mean, shrinking the window at both ends.

    NaN entries are ignored inside each window.
    """
    if window < 1:
        raise ValueError(f"window must be at least 1, got {window}")
    series = pd.Series(values, dtype=float)
    return series.rolling(window, center=True, min_periods=1).mean().tolist()
