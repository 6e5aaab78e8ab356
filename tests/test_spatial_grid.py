"""Tests for the spatial acceleration grid."""

import math

import pytest

from py_poisson.core.alea_prng import AleaPRNG
from py_poisson.core.geometry import EMPTY_POINT, MapDimensions
from py_poisson.core.spatial_grid import (
    CellOccupiedError,
    NeighborWindow,
    OutsideGridError,
    SpatialGrid,
    cell_of,
)


class TestGridLayout:
    """Test grid dimensions and cell lookup."""

    def test_cell_size(self):
        grid = SpatialGrid(MapDimensions(100, 100), 10)
        assert grid.cell_size == pytest.approx(10 / math.sqrt(2))
        # The diagonal of a cell is the minimum distance
        assert grid.cell_size * math.sqrt(2) == pytest.approx(10)

    def test_shape(self):
        grid = SpatialGrid(MapDimensions(100, 50), 10)
        assert grid.shape == (15, 8)
        assert grid.cells.shape == (15, 8, 2)

    def test_starts_empty(self):
        grid = SpatialGrid((30, 30), 5)
        assert len(grid) == 0
        assert list(grid.points()) == []
        assert grid.get((0, 0)) == EMPTY_POINT

    def test_cell_of_truncates(self):
        cell_size = 10 / math.sqrt(2)
        assert cell_of((0, 0), cell_size) == (0, 0)
        assert cell_of((7, 7), cell_size) == (0, 0)
        assert cell_of((8, 14), cell_size) == (1, 1)
        assert cell_of((99, 15), cell_size) == (14, 2)

    def test_every_map_point_has_a_cell(self):
        """Test that the last map row and column still fall inside the grid."""
        grid = SpatialGrid((100, 37), 10)
        assert grid.in_grid(grid.cell_of((99, 36)))


class TestPlace:
    """Test recording points."""

    def test_place_and_get(self):
        grid = SpatialGrid((100, 100), 10)
        cell = grid.place((50, 50))
        assert cell == grid.cell_of((50, 50))
        assert grid.get(cell) == (50, 50)
        assert grid.is_set(cell)
        assert len(grid) == 1

    def test_cell_never_overwritten(self):
        grid = SpatialGrid((100, 100), 10)
        grid.place((50, 50))
        with pytest.raises(CellOccupiedError):
            grid.place((51, 51))
        assert grid.get(grid.cell_of((50, 50))) == (50, 50)

    def test_outside_grid(self):
        grid = SpatialGrid((20, 20), 10)
        with pytest.raises(OutsideGridError):
            grid.place((200, 5))
        with pytest.raises(OutsideGridError):
            grid.place((-3, 5))

    def test_points(self):
        grid = SpatialGrid((100, 100), 10)
        placed = [(5, 5), (50, 50), (90, 20)]
        for p in placed:
            grid.place(p)
        assert sorted(grid.points()) == sorted(placed)


class TestNeighbors:
    """Test the neighbour window."""

    def test_trimmed_window_size(self):
        grid = SpatialGrid((100, 100), 10)
        assert len(grid.neighbors_of((7, 7))) == 21

    def test_full_window_size(self):
        grid = SpatialGrid((100, 100), 10, window=NeighborWindow.FULL)
        assert len(grid.neighbors_of((7, 7))) == 25

    def test_trimmed_window_skips_corners(self):
        offsets = NeighborWindow.TRIMMED.offsets()
        for corner in [(-2, -2), (2, -2), (-2, 2), (2, 2)]:
            assert corner not in offsets
        assert (0, 0) in offsets
        assert (2, 1) in offsets

    def test_out_of_grid_cells_skipped(self):
        grid = SpatialGrid((100, 100), 10)
        # 3x3 block in the grid, minus the far corner
        assert len(grid.neighbors_of((0, 0))) == 8
        full = SpatialGrid((100, 100), 10, window="full")
        assert len(full.neighbors_of((0, 0))) == 9

    def test_sentinels_returned(self):
        grid = SpatialGrid((100, 100), 10)
        grid.place((50, 50))
        neighbors = grid.neighbors_of(grid.cell_of((50, 50)))
        assert (50, 50) in neighbors
        assert neighbors.count(EMPTY_POINT) == 20


class TestMinimumDistance:
    """Test the rejection check."""

    def test_close_point_detected(self):
        grid = SpatialGrid((100, 100), 10)
        grid.place((50, 50))
        assert grid.is_within_minimum_distance((55, 55))
        assert grid.is_within_minimum_distance((59, 50))

    def test_exact_distance_is_not_too_close(self):
        grid = SpatialGrid((100, 100), 10)
        grid.place((50, 50))
        assert not grid.is_within_minimum_distance((60, 50))
        assert not grid.is_within_minimum_distance((56, 58))

    def test_empty_grid(self):
        grid = SpatialGrid((100, 100), 10)
        assert not grid.is_within_minimum_distance((50, 50))

    @pytest.mark.parametrize("window", list(NeighborWindow))
    def test_matches_brute_force(self, window):
        """Test the windowed check against comparing with every point."""
        prng = AleaPRNG("grid_brute_force")
        minimum_distance = 7
        grid = SpatialGrid((60, 60), minimum_distance, window=window)
        placed = []
        for _ in range(400):
            p = (int(prng.random() * 60), int(prng.random() * 60))
            if not grid.is_within_minimum_distance(p) and not grid.is_set(grid.cell_of(p)):
                grid.place(p)
                placed.append(p)

        assert len(placed) > 20
        for _ in range(1000):
            c = (int(prng.random() * 60), int(prng.random() * 60))
            expected = any(
                math.hypot(c[0] - p[0], c[1] - p[1]) < minimum_distance for p in placed
            )
            assert grid.is_within_minimum_distance(c) == expected
