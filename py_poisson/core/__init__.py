"""
Core point sampling functionality.
"""

from .alea_prng import AleaPRNG, RandomSource, ReplayRandom, RecordingRandom
from .geometry import MapDimensions, MapSection, SectionShape, UnsupportedShapeError
from .spatial_grid import NeighborWindow, SpatialGrid
from .poisson_disc import (
    InvalidSamplingParameters,
    PoissonDisc,
    PoissonDiscOptions,
    SamplingResult,
    generate_points,
)
from .sampling_analysis import SamplingReport, analyze_points
from .occupancy import render_occupancy

__all__ = ['AleaPRNG', 'RandomSource', 'ReplayRandom', 'RecordingRandom',
           'MapDimensions', 'MapSection', 'SectionShape', 'UnsupportedShapeError',
           'NeighborWindow', 'SpatialGrid',
           'InvalidSamplingParameters', 'PoissonDisc', 'PoissonDiscOptions',
           'SamplingResult', 'generate_points',
           'SamplingReport', 'analyze_points', 'render_occupancy']
