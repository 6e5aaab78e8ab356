"""Blue noise point sampling for procedural level layouts."""

from .core import (
    AleaPRNG,
    MapSection,
    PoissonDisc,
    PoissonDiscOptions,
    generate_points,
)

__version__ = "0.1.0"

__all__ = ['AleaPRNG', 'MapSection', 'PoissonDisc', 'PoissonDiscOptions',
           'generate_points', '__version__']
