"""
Uniform acceleration grid for minimum-distance checks.

The cell size is ``minimum_distance / sqrt(2)``, so a cell's diagonal equals
the minimum distance. Two accepted points can therefore never share a cell,
and any point closer than the minimum distance to a candidate sits at most
two cells away from the candidate's own cell on either axis.
"""

import math
from enum import Enum
from typing import Iterator, List, Sequence, Tuple

import numpy as np

from .geometry import EMPTY_POINT, MapDimensions, Point, inside_rectangle

Cell = Tuple[int, int]

# Half the width of the square block of cells inspected around a candidate.
WINDOW_RADIUS = 2


class CellOccupiedError(RuntimeError):
    """Raised when placing a point into a cell that already holds one."""


class OutsideGridError(IndexError):
    """Raised when a point maps to a cell outside the grid."""


class NeighborWindow(str, Enum):
    """Which cells of the 5x5 block around a candidate get inspected."""

    # 5x5 block minus its four corner cells (21 cells). A point in a corner
    # cell is at least one full cell diagonal, i.e. the minimum distance, away.
    TRIMMED = "trimmed"
    FULL = "full"

    def offsets(self) -> List[Cell]:
        """Cell offsets relative to the center cell, row by row."""
        span = range(-WINDOW_RADIUS, WINDOW_RADIUS + 1)
        offsets = [(dx, dy) for dy in span for dx in span]
        if self is NeighborWindow.TRIMMED:
            offsets = [
                (dx, dy) for dx, dy in offsets
                if abs(dx) != WINDOW_RADIUS or abs(dy) != WINDOW_RADIUS
            ]
        return offsets


def cell_of(point: Sequence[int], cell_size: float) -> Cell:
    """Return the cell a point falls in, truncating toward zero."""
    return int(point[0] / cell_size), int(point[1] / cell_size)


class SpatialGrid:
    """
    Grid of accepted points, at most one per cell.

    Cells are stored in a ``(cells_x, cells_y, 2)`` integer array. Unset cells
    hold ``EMPTY_POINT``. A cell is written once and never changes afterwards.
    """

    def __init__(self, dimensions: MapDimensions, minimum_distance: float,
                 window: NeighborWindow = NeighborWindow.TRIMMED):
        self.dimensions = MapDimensions(*dimensions)
        self.minimum_distance = minimum_distance
        self.cell_size = minimum_distance / math.sqrt(2)
        self.window = NeighborWindow(window)
        self._offsets = self.window.offsets()

        cells_x = int(math.ceil(self.dimensions.width / self.cell_size))
        cells_y = int(math.ceil(self.dimensions.height / self.cell_size))
        self.shape = MapDimensions(cells_x, cells_y)

        self.cells = np.full((cells_x, cells_y, 2), EMPTY_POINT, dtype=np.int64)
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def cell_of(self, point: Sequence[int]) -> Cell:
        return cell_of(point, self.cell_size)

    def in_grid(self, cell: Cell) -> bool:
        return inside_rectangle(cell, (0, 0), self.shape)

    def is_set(self, cell: Cell) -> bool:
        return self.in_grid(cell) and self.cells[cell[0], cell[1], 0] != EMPTY_POINT[0]

    def get(self, cell: Cell) -> Point:
        """Return the content of a cell, ``EMPTY_POINT`` when unset."""
        x, y = self.cells[cell[0], cell[1]]
        return int(x), int(y)

    def place(self, point: Sequence[int]) -> Cell:
        """
        Record a point in the cell it falls in.

        Returns:
            The cell the point was placed in

        Raises:
            OutsideGridError: the point is not on the grid
            CellOccupiedError: the cell already holds a point
        """
        cell = self.cell_of(point)
        if point[0] < 0 or point[1] < 0 or not self.in_grid(cell):
            raise OutsideGridError(f"Point {tuple(point)} is outside grid {self.shape}")
        if self.is_set(cell):
            raise CellOccupiedError(
                f"Cell {cell} already holds {self.get(cell)}, cannot place {tuple(point)}"
            )
        self.cells[cell[0], cell[1]] = point
        self._count += 1
        return cell

    def neighbors_of(self, center: Cell) -> List[Point]:
        """
        Return the contents of the window of cells around ``center``.

        Cells outside the grid are skipped. Unset cells come back as
        ``EMPTY_POINT``; callers filter those out.
        """
        neighbors = []
        for dx, dy in self._offsets:
            cell = (center[0] + dx, center[1] + dy)
            if not self.in_grid(cell):
                continue
            neighbors.append(self.get(cell))
        return neighbors

    def is_within_minimum_distance(self, candidate: Sequence[int]) -> bool:
        """Check whether any placed point is closer than the minimum distance."""
        for other in self.neighbors_of(self.cell_of(candidate)):
            if other == EMPTY_POINT:
                continue
            distance = math.hypot(other[0] - candidate[0], other[1] - candidate[1])
            if distance < self.minimum_distance:
                return True
        return False

    def points(self) -> Iterator[Point]:
        """Yield every placed point, in cell order."""
        occupied = np.argwhere(self.cells[:, :, 0] != EMPTY_POINT[0])
        for cx, cy in occupied:
            yield self.get((cx, cy))
