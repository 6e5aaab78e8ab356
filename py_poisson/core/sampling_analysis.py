"""
Quality metrics for a generated point set.

Used by the tests and the demo to check the minimum-distance property and
to describe how densely a map was filled.
"""

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np
import structlog
from scipy.spatial import cKDTree

from .geometry import MapDimensions, Point

logger = structlog.get_logger()


@dataclass
class SamplingReport:
    """Summary statistics for a point set."""

    count: int
    min_distance: float
    mean_nearest_distance: float
    violating_pairs: int
    total_pairs: int
    coverage: float

    @property
    def violation_ratio(self) -> float:
        """Fraction of point pairs closer than the minimum distance."""
        if self.total_pairs == 0:
            return 0.0
        return self.violating_pairs / self.total_pairs


def _as_array(points: Sequence[Point]) -> np.ndarray:
    return np.asarray(points, dtype=np.float64).reshape(-1, 2)


def nearest_neighbor_distances(points: Sequence[Point]) -> np.ndarray:
    """
    Distance from every point to its nearest other point.

    Returns an empty array for fewer than two points.
    """
    coords = _as_array(points)
    if len(coords) < 2:
        return np.empty(0, dtype=np.float64)
    tree = cKDTree(coords)
    # k=2: the closest hit is the point itself
    distances, _ = tree.query(coords, k=2)
    return distances[:, 1]


def find_violations(points: Sequence[Point],
                    minimum_distance: float) -> List[Tuple[int, int]]:
    """Index pairs ``(i, j)``, ``i < j``, closer than ``minimum_distance``."""
    coords = _as_array(points)
    if len(coords) < 2:
        return []
    tree = cKDTree(coords)
    # query_pairs is inclusive of r, keep only strictly closer pairs
    pairs = tree.query_pairs(r=minimum_distance, output_type="ndarray")
    if len(pairs) == 0:
        return []
    deltas = coords[pairs[:, 0]] - coords[pairs[:, 1]]
    close = np.hypot(deltas[:, 0], deltas[:, 1]) < minimum_distance
    return sorted((int(i), int(j)) for i, j in pairs[close])


def analyze_points(points: Sequence[Point], minimum_distance: float,
                   dimensions: Sequence[int]) -> SamplingReport:
    """
    Build a SamplingReport for ``points`` sampled on a map.

    Coverage is the share of the map covered by discs of radius
    ``minimum_distance / 2`` around every point, ignoring overlap and
    clipping at the map edge.
    """
    dimensions = MapDimensions(*dimensions)
    nearest = nearest_neighbor_distances(points)
    count = len(_as_array(points))
    violations = find_violations(points, minimum_distance)

    disc_area = math.pi * (minimum_distance / 2) ** 2
    coverage = count * disc_area / dimensions.area if dimensions.area else 0.0

    report = SamplingReport(
        count=count,
        min_distance=float(nearest.min()) if len(nearest) else math.inf,
        mean_nearest_distance=float(nearest.mean()) if len(nearest) else math.inf,
        violating_pairs=len(violations),
        total_pairs=count * (count - 1) // 2,
        coverage=coverage,
    )
    logger.debug("Analyzed point set", count=report.count,
                 violating_pairs=report.violating_pairs,
                 coverage=round(report.coverage, 3))
    return report
