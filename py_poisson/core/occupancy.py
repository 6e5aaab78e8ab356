"""Console view of which map tiles hold a generated point."""

from typing import Iterable, Sequence

import numpy as np

from .geometry import MapDimensions, Point, inside_rectangle


def occupancy_grid(points: Iterable[Point], dimensions: Sequence[int]) -> np.ndarray:
    """
    Mark every tile that holds a point.

    Returns:
        uint8 array of shape (height, width), 1 for occupied tiles.
        Points outside the map are ignored.
    """
    dimensions = MapDimensions(*dimensions)
    grid = np.zeros((max(dimensions.height, 0), max(dimensions.width, 0)), dtype=np.uint8)
    for x, y in points:
        if inside_rectangle((x, y), (0, 0), dimensions):
            grid[y, x] = 1
    return grid


def render_occupancy(points: Iterable[Point], dimensions: Sequence[int],
                     filled: str = "1", empty: str = "0") -> str:
    """
    Render the occupancy grid as text, one line per map row.

    The y axis is reversed so the top line is the highest row and the map
    doesn't print upside down.
    """
    grid = occupancy_grid(points, dimensions)
    lines = [
        "".join(filled if cell else empty for cell in row)
        for row in grid[::-1]
    ]
    return "\n".join(lines)
