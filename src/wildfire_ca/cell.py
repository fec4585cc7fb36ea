"""Cell and grid model for the fire spread automaton."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Mapping, Type

import numpy as np

from .errors import InvalidDimension, OutOfBounds


class Vegetation(IntEnum):
    """Land cover of a cell. The value is the weight table index."""
    NO_VEGETATION = 0
    AGRICULTURE = 1
    FOREST = 2
    SHRUBLAND = 3
    PRIMARY_ROAD = 4
    SECONDARY_ROAD = 5
    TERTIARY_ROAD = 6
    WATERLINE = 7


class Density(IntEnum):
    """Vegetation density of a cell."""
    NO_VEGETATION = 0
    SPARSE = 1
    NORMAL = 2
    DENSE = 3


@dataclass(frozen=True)
class Cell:
    """Read-only view of a single grid cell."""

    vegetation: Vegetation
    density: Density
    burn_degree: int

    def is_unburnt(self) -> bool:
        return self.burn_degree == 0

    def __str__(self) -> str:
        return f"{self.vegetation.name}/{self.density.name}, burn degree: {self.burn_degree}"


class WeightTable:
    """Immutable weight per enum member, stored by ordinal.

    Every member of the enum must be given a weight; a partial mapping is
    rejected at construction time.
    """

    __slots__ = ("enum", "_weights")

    def __init__(self, enum: Type[IntEnum], weights: Mapping[IntEnum, float]):
        missing = [member.name for member in enum if member not in weights]
        if missing:
            raise ValueError(f"Missing {enum.__name__} weights for: {', '.join(missing)}")
        extra = [key for key in weights if not isinstance(key, enum)]
        if extra:
            raise ValueError(f"Unexpected keys for {enum.__name__} weights: {extra}")

        ordered = sorted(enum, key=int)
        self.enum = enum
        self._weights: tuple[float, ...] = tuple(float(weights[member]) for member in ordered)

    def __getitem__(self, member: int) -> float:
        return self._weights[int(member)]

    def __len__(self) -> int:
        return len(self._weights)

    def __iter__(self) -> Iterator[float]:
        return iter(self._weights)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeightTable):
            return NotImplemented
        return self.enum is other.enum and self._weights == other._weights

    def __hash__(self) -> int:
        return hash((self.enum, self._weights))

    def __repr__(self) -> str:
        pairs = ", ".join(f"{member.name}={self[member]}" for member in self.enum)
        return f"WeightTable({self.enum.__name__}: {pairs})"

    def as_dict(self) -> dict[IntEnum, float]:
        return {member: self[member] for member in self.enum}

    def with_weight(self, member: IntEnum, value: float) -> "WeightTable":
        """Return a copy of the table with one entry replaced."""
        weights = self.as_dict()
        weights[self.enum(member)] = float(value)
        return WeightTable(self.enum, weights)


class FireGrid:
    """Rectangular grid of cells, addressed by (row, col).

    Cell attributes are held in three ``(height, width)`` numpy arrays so
    that copying a grid for an independent run is a plain array copy.

    Attributes:
        vegetation: Vegetation ordinal per cell.
        density: Density ordinal per cell.
        burn_degree: 0 for unburnt, 1..max_burn while burning,
            max_burn + 1 once burnt out. Burning stages therefore map to
            ``burn_degree - 1`` in ``range(max_burn)``; any degree above
            ``max_burn`` is burnt out.
    """

    def __init__(self, vegetation: np.ndarray, density: np.ndarray, burn_degree: np.ndarray):
        self.vegetation = vegetation
        self.density = density
        self.burn_degree = burn_degree

    @classmethod
    def create(
        cls,
        width: int,
        height: int,
        vegetation: Vegetation = Vegetation.NO_VEGETATION,
        density: Density = Density.NORMAL,
    ) -> "FireGrid":
        """
        Create a uniform grid.

        Args:
            width: Number of columns
            height: Number of rows
            vegetation: Vegetation of every cell
            density: Density of every cell

        Raises:
            InvalidDimension: If width or height is not positive
        """
        if width <= 0 or height <= 0:
            raise InvalidDimension(f"Grid dimensions must be positive, got {width}x{height}")

        shape = (height, width)
        return cls(
            np.full(shape, int(vegetation), dtype=np.int8),
            np.full(shape, int(density), dtype=np.int8),
            np.zeros(shape, dtype=np.int64),
        )

    @classmethod
    def from_arrays(cls, vegetation, density) -> "FireGrid":
        """Build an unburnt grid from already classified vegetation/density arrays."""
        veg = np.array(vegetation, dtype=np.int8)
        dens = np.array(density, dtype=np.int8)
        if veg.ndim != 2 or veg.shape != dens.shape:
            raise InvalidDimension(
                f"Expected two 2D arrays of equal shape, got {veg.shape} and {dens.shape}"
            )
        if veg.size == 0:
            raise InvalidDimension(f"Grid dimensions must be positive, got shape {veg.shape}")
        return cls(veg, dens, np.zeros(veg.shape, dtype=np.int64))

    @property
    def height(self) -> int:
        return self.burn_degree.shape[0]

    @property
    def width(self) -> int:
        return self.burn_degree.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self.burn_degree.shape

    @property
    def size(self) -> int:
        return self.burn_degree.size

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def cell(self, row: int, col: int) -> Cell:
        if not self.in_bounds(row, col):
            raise OutOfBounds((row, col), self.shape)
        return Cell(
            Vegetation(int(self.vegetation[row, col])),
            Density(int(self.density[row, col])),
            int(self.burn_degree[row, col]),
        )

    def paint_region(
        self,
        row: int,
        col: int,
        vegetation: Vegetation,
        density: Density,
        thickness: int = 1,
    ) -> None:
        """
        Overwrite a square of side ``2 * thickness - 1`` centred on (row, col).

        The square is clamped to the grid and every painted cell is reset to
        unburnt.
        """
        if thickness < 1:
            raise ValueError(f"thickness must be at least 1, got {thickness}")

        start_row = max(0, row - thickness + 1)
        end_row = min(self.height, row + thickness)
        start_col = max(0, col - thickness + 1)
        end_col = min(self.width, col + thickness)
        if start_row >= end_row or start_col >= end_col:
            return

        region = (slice(start_row, end_row), slice(start_col, end_col))
        self.vegetation[region] = int(vegetation)
        self.density[region] = int(density)
        self.burn_degree[region] = 0

    def fill_no_vegetation(self, vegetation: Vegetation = Vegetation.FOREST) -> int:
        """Replace every NO_VEGETATION cell's vegetation. Returns how many changed."""
        empty = self.vegetation == Vegetation.NO_VEGETATION
        self.vegetation[empty] = int(vegetation)
        return int(np.count_nonzero(empty))

    def copy(self) -> "FireGrid":
        return FireGrid(self.vegetation.copy(), self.density.copy(), self.burn_degree.copy())

    def __str__(self) -> str:
        return f"FireGrid {self.width}x{self.height}, burning or burnt: {int(np.count_nonzero(self.burn_degree))}"
