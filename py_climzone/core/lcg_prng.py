"""
Linear congruential PRNG used for zone generation.

Uses the Numerical Recipes constants so that a given seed produces the same
stream here as in any other implementation of the zone generator. Python's
``random`` and NumPy's random are not used. Nothing here keeps global state:
every caller builds its own stream.
"""

import math
from typing import Callable

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 4294967296  # 2^32

SEED_MULTIPLIER = 31337
SEED_MODULUS = 2147483647  # 2^31 - 1

RandomStream = Callable[[], float]


class LCGPRNG:
    """
    Linear congruential generator: ``state = (state * A + C) mod M``.

    Each draw returns ``state / M``, a float in [0, 1). The state is a Python
    integer, so no precision is lost between draws.
    """

    def __init__(self, seed: int):
        """Initialize with an integer seed (may be negative)."""
        self.call_count = 0
        self.seed = int(seed)
        self.state = self.seed

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        self.state = (self.state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self.state / LCG_MODULUS


def make_random_stream(seed: int) -> RandomStream:
    """
    Build a fresh random stream for the given seed.

    Args:
        seed: Integer seed

    Returns:
        Zero-argument callable returning floats in [0, 1)
    """
    return LCGPRNG(seed).random


def seed_from_coordinates(lat: float, lng: float) -> int:
    """
    Derive the zone seed from a center point.

    The remainder keeps the sign of the dividend, so points with a negative
    hash produce negative seeds. Identical coordinates always give the same
    seed.

    Args:
        lat: Latitude in decimal degrees
        lng: Longitude in decimal degrees

    Returns:
        Integer seed in (-2^31, 2^31)

    Raises:
        ValueError: If the coordinates are too large to hash
    """
    product = (lat * 1000 + lng * 10000) * SEED_MULTIPLIER
    if not math.isfinite(product):
        raise ValueError(f"Cannot derive a seed from lat={lat}, lng={lng}")
    hashed = math.floor(product)
    return int(math.fmod(hashed, SEED_MODULUS))
