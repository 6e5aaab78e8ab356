"""
Poisson disc sampling on the integer lattice.

Generates a uniformly distributed ("blue noise") list of 2D points with a
minimum distance between any two of them, following Bridson's algorithm:

1. Seed the process queue with one random point near the map center, or
   with the caller's existing points
2. Take the point at the front of the queue and try a fixed number of
   candidates in the ring between one and two minimum distances around it
3. Accept every candidate that is inside the map and not too close to an
   earlier point, and queue it for processing
4. Drop the processed point and repeat until the queue runs dry or the
   point budget is spent
5. Remove the points that fall within excluded map sections

For background on the method, see
http://devmag.org.za/2009/05/03/poisson-disk-sampling/
"""

import math
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import settings
from ..utils.random import get_prng
from .alea_prng import RandomSource, uniform_range
from .geometry import (
    MapDimensions,
    MapSection,
    Point,
    check_supported,
    exclude_sections,
    inside_rectangle,
)
from .spatial_grid import NeighborWindow, SpatialGrid

logger = structlog.get_logger()


class InvalidSamplingParameters(ValueError):
    """Raised for inputs the sampler cannot work with."""


class PoissonDiscOptions(BaseModel):
    """Tuning knobs for the sampler."""

    model_config = ConfigDict(frozen=True)

    candidates_per_point: int = Field(
        default_factory=lambda: settings.candidates_per_point,
        gt=0,
        description="Candidates tried around every processed point. "
                    "Higher values pack points closer together.",
    )
    neighbor_window: NeighborWindow = Field(
        default_factory=lambda: NeighborWindow(settings.neighbor_window),
        description="Grid cells inspected for every distance check",
    )
    center_band: Tuple[float, float] = Field(
        default=(0.4, 0.6),
        description="Fraction of the map, per axis, the first point is drawn from",
    )

    @field_validator("center_band")
    @classmethod
    def _valid_band(cls, value: Tuple[float, float]) -> Tuple[float, float]:
        low, high = value
        if not 0.0 <= low <= high <= 1.0:
            raise ValueError(f"center_band must satisfy 0 <= low <= high <= 1, got {value}")
        return value


@dataclass
class SamplingStats:
    """Counters collected during one sampling run."""

    seeds: int = 0
    processed: int = 0
    candidates: int = 0
    rejected_outside: int = 0
    rejected_too_close: int = 0
    accepted: int = 0
    excluded: int = 0


@dataclass
class SamplingResult:
    """Points generated by one run, plus the run's counters."""

    points: List[Point]
    stats: SamplingStats = field(default_factory=SamplingStats)


class PoissonDisc:
    """
    Poisson disc sampler for a single map.

    The sampler holds only its configuration. Every call to :meth:`sample`
    builds a fresh grid and queue, so one instance can be reused freely.
    """

    def __init__(self, minimum_distance: float, dimensions: Sequence[int],
                 rng: Optional[RandomSource] = None,
                 options: Optional[PoissonDiscOptions] = None):
        """
        Initialize the sampler.

        Args:
            minimum_distance: Minimum distance between any two points
            dimensions: Width and height of the map to sample
            rng: Source of uniform reals in [0, 1); the process-wide default
                PRNG is used when omitted
            options: Sampler tuning, defaults come from settings
        """
        if minimum_distance <= 0:
            raise InvalidSamplingParameters(
                f"minimum_distance must be positive, got {minimum_distance}"
            )
        dimensions = MapDimensions(*dimensions)
        if dimensions.width < 0 or dimensions.height < 0:
            raise InvalidSamplingParameters(
                f"Map dimensions must be non-negative, got {tuple(dimensions)}"
            )

        self.minimum_distance = minimum_distance
        self.dimensions = dimensions
        self.rng = rng if rng is not None else get_prng()
        self.options = options or PoissonDiscOptions()

    def generate(self, excluded_sections: Iterable[MapSection] = (),
                 existing_points: Iterable[Point] = (),
                 max_points: Optional[int] = None) -> List[Point]:
        """Generate points and return only the newly generated ones."""
        return self.sample(excluded_sections, existing_points, max_points).points

    def sample(self, excluded_sections: Iterable[MapSection] = (),
               existing_points: Iterable[Point] = (),
               max_points: Optional[int] = None) -> SamplingResult:
        """
        Run the sampler once.

        Args:
            excluded_sections: Map sections that must not contain any of the
                returned points. Applied after generation, so they still take
                up room in the distance field.
            existing_points: Points already on the map. New points keep the
                minimum distance to them and grow outward from them. They are
                not part of the result.
            max_points: Maximum number of points to generate, None for no cap.
                With a cap, every processed point spawns at most one new point.

        Returns:
            SamplingResult with the generated points in acceptance order
        """
        sections = list(excluded_sections)
        for section in sections:
            check_supported(section)
        if max_points is not None and max_points < 0:
            raise InvalidSamplingParameters(f"max_points must be non-negative, got {max_points}")

        budget = math.inf if max_points is None else max_points
        capped = max_points is not None
        stats = SamplingStats()

        grid = SpatialGrid(self.dimensions, self.minimum_distance,
                           self.options.neighbor_window)
        queue = deque()
        output: List[Point] = []

        seeds = [(int(x), int(y)) for x, y in existing_points]
        for seed in seeds:
            self._place_seed(grid, seed)
            queue.append(seed)
        stats.seeds = len(seeds)

        if self.dimensions.is_empty:
            logger.info("Map has no area, nothing to sample",
                        dimensions=tuple(self.dimensions))
            return SamplingResult(points=[], stats=stats)

        if not seeds and budget > 0:
            first = self.random_first_point()
            grid.place(first)
            queue.append(first)
            output.append(first)
            stats.accepted += 1

        while queue and len(output) < budget:
            current = queue[0]
            stats.processed += 1

            for _ in range(self.options.candidates_per_point):
                candidate = self.random_point_around(current)
                stats.candidates += 1

                if not inside_rectangle(candidate, (0, 0), self.dimensions):
                    stats.rejected_outside += 1
                    continue
                if grid.is_within_minimum_distance(candidate):
                    stats.rejected_too_close += 1
                    continue

                grid.place(candidate)
                queue.append(candidate)
                output.append(candidate)
                stats.accepted += 1

                # With a budget, each processed point spawns at most one point.
                if capped:
                    break

            queue.popleft()

        points = exclude_sections(output, sections)
        stats.excluded = len(output) - len(points)

        logger.info(
            "Poisson disc sampling complete",
            minimum_distance=self.minimum_distance,
            dimensions=tuple(self.dimensions),
            seeds=stats.seeds,
            accepted=stats.accepted,
            excluded=stats.excluded,
            processed=stats.processed,
            max_points=max_points,
        )
        return SamplingResult(points=points, stats=stats)

    def random_first_point(self) -> Point:
        """Pick a random point in the central band of the map."""
        low, high = self.options.center_band
        width, height = self.dimensions
        x = int(uniform_range(self.rng, width * low, width * high))
        y = int(uniform_range(self.rng, height * low, height * high))
        return x, y

    def random_point_around(self, point: Sequence[int]) -> Point:
        """
        Pick a random point between one and two minimum distances away.

        Coordinates are truncated toward zero onto the integer lattice.
        """
        distance = self.minimum_distance * (1 + self.rng.random())
        angle = 2 * math.pi * self.rng.random()
        return (
            int(point[0] + distance * math.cos(angle)),
            int(point[1] + distance * math.sin(angle)),
        )

    def _place_seed(self, grid: SpatialGrid, seed: Point) -> None:
        if not inside_rectangle(seed, (0, 0), self.dimensions):
            raise InvalidSamplingParameters(
                f"Existing point {seed} is outside the map {tuple(self.dimensions)}"
            )
        cell = grid.cell_of(seed)
        if grid.is_set(cell):
            raise InvalidSamplingParameters(
                f"Existing points {grid.get(cell)} and {seed} share grid cell {cell}; "
                f"they are closer than the minimum distance {self.minimum_distance}"
            )
        grid.place(seed)


def generate_points(minimum_distance: float,
                    dimensions: Sequence[int],
                    excluded_sections: Iterable[MapSection] = (),
                    existing_points: Iterable[Point] = (),
                    max_points: Optional[int] = None,
                    rng: Optional[RandomSource] = None,
                    options: Optional[PoissonDiscOptions] = None) -> List[Point]:
    """
    Generate a uniformly distributed list of 2D points.

    Args:
        minimum_distance: Minimum distance between sample points
        dimensions: Width and height of the map to generate the points on
        excluded_sections: Sections of the map to keep free of points
        existing_points: Points to respect and generate around; not returned
        max_points: Maximum number of points to generate, None for no cap
        rng: Source of uniform reals in [0, 1)
        options: Sampler tuning

    Returns:
        The newly generated points
    """
    sampler = PoissonDisc(minimum_distance, dimensions, rng=rng, options=options)
    return sampler.generate(excluded_sections, existing_points, max_points)
