"""Unit tests for the cell and grid model."""

import numpy as np
import pytest

from wildfire_ca.cell import Cell, Density, FireGrid, Vegetation, WeightTable
from wildfire_ca.config import DEFAULT_VEG_WEIGHTS, DENSITY_WEIGHTS
from wildfire_ca.errors import InvalidDimension, OutOfBounds


class TestEnums:
    """Test cases for Vegetation and Density enums."""

    def test_vegetation_values(self):
        """Test vegetation ordinals used as table indices."""
        assert len(Vegetation) == 8
        assert Vegetation.NO_VEGETATION == 0
        assert Vegetation.FOREST == 2
        assert Vegetation.WATERLINE == 7

    def test_density_values(self):
        """Test density ordinals."""
        assert [d.value for d in Density] == [0, 1, 2, 3]


class TestWeightTable:
    """Test cases for WeightTable."""

    def test_lookup_by_member_and_ordinal(self):
        """Test that weights are indexed by enum ordinal."""
        assert DEFAULT_VEG_WEIGHTS[Vegetation.FOREST] == 0.4
        assert DEFAULT_VEG_WEIGHTS[2] == 0.4
        assert DENSITY_WEIGHTS[Density.SPARSE] == -0.3
        assert len(DEFAULT_VEG_WEIGHTS) == 8
        assert len(DENSITY_WEIGHTS) == 4

    def test_missing_entry_rejected(self):
        """Test that a partial mapping fails at construction."""
        with pytest.raises(ValueError, match="WATERLINE"):
            WeightTable(Vegetation, {veg: 0.0 for veg in Vegetation if veg != Vegetation.WATERLINE})

    def test_unexpected_key_rejected(self):
        """Test that keys outside the enum are rejected."""
        weights = {veg: 0.0 for veg in Vegetation}
        weights["bogus"] = 1.0
        with pytest.raises(ValueError, match="Unexpected"):
            WeightTable(Vegetation, weights)

    def test_density_table_too_short_for_vegetation(self):
        """Test that a 4-entry mapping cannot fill an 8-entry table."""
        with pytest.raises(ValueError, match="Missing"):
            WeightTable(Vegetation, {dens: 0.0 for dens in Density})

    def test_with_weight_returns_new_table(self):
        """Test that replacing a weight leaves the original untouched."""
        changed = DEFAULT_VEG_WEIGHTS.with_weight(Vegetation.FOREST, -1.0)
        assert changed[Vegetation.FOREST] == -1.0
        assert DEFAULT_VEG_WEIGHTS[Vegetation.FOREST] == 0.4
        assert changed[Vegetation.SHRUBLAND] == DEFAULT_VEG_WEIGHTS[Vegetation.SHRUBLAND]
        assert changed != DEFAULT_VEG_WEIGHTS


class TestFireGrid:
    """Test cases for FireGrid."""

    def test_create_uniform(self, sample_grid_size):
        """Test creating a uniform grid."""
        width, height = sample_grid_size
        grid = FireGrid.create(width, height, Vegetation.FOREST, Density.DENSE)
        assert grid.shape == (height, width)
        assert grid.size == width * height
        assert np.all(grid.vegetation == Vegetation.FOREST)
        assert np.all(grid.density == Density.DENSE)
        assert np.all(grid.burn_degree == 0)
        assert grid.burn_degree.dtype == np.int64
        assert grid.copy().burn_degree.dtype == np.int64

    def test_create_defaults(self):
        """Test default vegetation and density."""
        cell = FireGrid.create(3, 2).cell(1, 2)
        assert cell == Cell(Vegetation.NO_VEGETATION, Density.NORMAL, 0)
        assert cell.is_unburnt()

    @pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-1, 3)])
    def test_invalid_dimensions(self, width, height):
        """Test that non-positive sizes are rejected."""
        with pytest.raises(InvalidDimension):
            FireGrid.create(width, height)

    def test_from_arrays(self):
        """Test wrapping classified arrays."""
        veg = [[Vegetation.FOREST, Vegetation.WATERLINE], [Vegetation.AGRICULTURE, Vegetation.FOREST]]
        dens = [[Density.DENSE, Density.NO_VEGETATION], [Density.SPARSE, Density.NORMAL]]
        grid = FireGrid.from_arrays(veg, dens)
        assert grid.shape == (2, 2)
        assert grid.cell(0, 1).vegetation == Vegetation.WATERLINE
        assert grid.cell(1, 0).density == Density.SPARSE

    def test_from_arrays_shape_mismatch(self):
        """Test that mismatched arrays are rejected."""
        with pytest.raises(InvalidDimension):
            FireGrid.from_arrays(np.zeros((2, 3)), np.zeros((3, 2)))

    def test_cell_out_of_bounds(self):
        """Test reading a cell outside the grid."""
        grid = FireGrid.create(3, 3)
        with pytest.raises(OutOfBounds):
            grid.cell(3, 0)

    def test_paint_region_square(self):
        """Test painting a 3x3 square around the centre."""
        grid = FireGrid.create(5, 5, Vegetation.FOREST)
        grid.burn_degree[2, 2] = 2
        grid.paint_region(2, 2, Vegetation.WATERLINE, Density.NO_VEGETATION, thickness=2)

        painted = grid.vegetation == Vegetation.WATERLINE
        assert painted.sum() == 9
        assert painted[1:4, 1:4].all()
        assert grid.burn_degree[2, 2] == 0
        assert grid.density[1, 1] == Density.NO_VEGETATION

    def test_paint_region_clamped(self):
        """Test that a square near a corner is clamped to the grid."""
        grid = FireGrid.create(5, 5, Vegetation.FOREST)
        grid.paint_region(0, 0, Vegetation.PRIMARY_ROAD, Density.NORMAL, thickness=2)
        assert (grid.vegetation == Vegetation.PRIMARY_ROAD).sum() == 4

    def test_paint_single_cell(self):
        """Test that thickness 1 paints exactly one cell."""
        grid = FireGrid.create(4, 4)
        grid.paint_region(3, 3, Vegetation.SHRUBLAND, Density.DENSE)
        assert (grid.vegetation == Vegetation.SHRUBLAND).sum() == 1

    def test_fill_no_vegetation(self):
        """Test replacing empty cells with forest."""
        grid = FireGrid.create(3, 3)
        grid.paint_region(0, 0, Vegetation.WATERLINE, Density.NORMAL)
        changed = grid.fill_no_vegetation()
        assert changed == 8
        assert grid.cell(0, 0).vegetation == Vegetation.WATERLINE
        assert grid.cell(2, 2).vegetation == Vegetation.FOREST

    def test_copy_is_independent(self):
        """Test that a copy shares no state with the original."""
        grid = FireGrid.create(4, 4, Vegetation.FOREST)
        clone = grid.copy()
        clone.burn_degree[1, 1] = 1
        clone.paint_region(0, 0, Vegetation.WATERLINE, Density.NORMAL)
        assert grid.burn_degree[1, 1] == 0
        assert grid.cell(0, 0).vegetation == Vegetation.FOREST
