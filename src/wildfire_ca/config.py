"""Default constants for the fire spread automaton.

Weights are signed: a cell's spread probability is multiplied by
``1 + weight``, so -1 removes spread entirely and positive values favour it.
"""

from .cell import Density, Vegetation, WeightTable

# ============================================================================
# IGNITION PROBABILITY
# ============================================================================

DEFAULT_BASE_PROB: float = 0.4                      # 0.58 gives near-critical spread
DEFAULT_C1: float = 0.045                           # wind curve, overall strength
DEFAULT_C2: float = 0.131                           # wind curve, directional bias

# ============================================================================
# BURN STAGES
# ============================================================================

# Last active burning stage; a cell is burnt out at MAX_BURN + 1
DEFAULT_MAX_BURN: int = 1

# ============================================================================
# WEIGHT TABLES
# ============================================================================

DEFAULT_VEG_WEIGHTS = WeightTable(Vegetation, {
    Vegetation.NO_VEGETATION: -1.0,
    Vegetation.AGRICULTURE: -0.4,
    Vegetation.FOREST: 0.4,
    Vegetation.SHRUBLAND: 0.4,
    Vegetation.PRIMARY_ROAD: -0.7,
    Vegetation.SECONDARY_ROAD: -0.6,
    Vegetation.TERTIARY_ROAD: -0.5,
    Vegetation.WATERLINE: -0.8,
})

DENSITY_WEIGHTS = WeightTable(Density, {
    Density.NO_VEGETATION: -1.0,
    Density.SPARSE: -0.3,
    Density.NORMAL: 0.0,
    Density.DENSE: 0.3,
})

ZERO_VEG_WEIGHTS = WeightTable(Vegetation, {veg: 0.0 for veg in Vegetation})
ZERO_DENSITY_WEIGHTS = WeightTable(Density, {dens: 0.0 for dens in Density})

# ============================================================================
# DEFAULT GRID / EXPERIMENT PARAMETERS
# ============================================================================

DEFAULT_WIDTH: int = 100                            # Grid width in cells
DEFAULT_HEIGHT: int = 100                           # Grid height in cells
DEFAULT_NB_ITERS: int = 5                           # Runs per sweep page
