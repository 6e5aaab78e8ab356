"""
Process-wide default random source.

Sampling code takes an explicit random source wherever it can. This module
only supplies the fallback used when a caller passes none, so that quick
interactive use still works without threading a generator through.
"""

from typing import Optional

from ..config import settings
from ..core.alea_prng import AleaPRNG

# Global PRNG instance
_prng: Optional[AleaPRNG] = None


def set_random_seed(seed: str) -> AleaPRNG:
    """
    Reseed the default PRNG.

    Args:
        seed: Seed string to use

    Returns:
        The freshly seeded AleaPRNG instance
    """
    global _prng
    _prng = AleaPRNG(seed)
    return _prng


def get_prng() -> AleaPRNG:
    """
    Get the default PRNG instance, seeding it from settings on first use.

    Returns:
        AleaPRNG instance
    """
    global _prng
    if _prng is None:
        _prng = AleaPRNG(settings.default_seed)
    return _prng
