"""
Seeded 2D simplex noise.

This module provides a pure, stateless simplex noise kernel whose permutation
table is shuffled from a caller-supplied random stream.

Data Contract:
---------------
- Inputs:
    - x, y: Sample coordinates (finite floats).
    - random: Zero-argument callable returning floats in [0, 1).
- Outputs:
    - A float, approximately in [-1, 1].
- Side Effects: Draws 255 values from ``random`` per call.
- Invariants: The same stream state and coordinates always give the same value.
"""

import math
from typing import Callable, List

# Gradient directions, picked via the permutation table.
_GRADIENTS = (
    (1, 1), (-1, 1), (1, -1), (-1, -1),
    (1, 0), (-1, 0), (0, 1), (0, -1),
)

_F2 = 0.5 * (math.sqrt(3) - 1)
_G2 = (3 - math.sqrt(3)) / 6
_NOISE_SCALE = 70
_TABLE_SIZE = 256


def build_permutation(random: Callable[[], float]) -> List[int]:
    """
    Fisher-Yates shuffle of 0..255, doubled to 512 entries.

    Args:
        random: Stream to draw from

    Returns:
        Permutation table of length 512
    """
    perm = list(range(_TABLE_SIZE))
    for i in range(_TABLE_SIZE - 1, 0, -1):
        j = int(math.floor(random() * (i + 1)))
        perm[i], perm[j] = perm[j], perm[i]
    return perm + perm


def _corner(gradient_index: int, x: float, y: float) -> float:
    """Contribution of a single simplex corner."""
    t = 0.5 - x * x - y * y
    if t < 0:
        return 0.0
    t *= t
    gx, gy = _GRADIENTS[gradient_index]
    return t * t * (gx * x + gy * y)


def simplex_noise_2d(x: float, y: float, random: Callable[[], float]) -> float:
    """
    Evaluate 2D simplex noise at (x, y).

    A new permutation table is built from ``random`` on every call, so
    successive calls sharing one stream see different tables.

    Args:
        x: X coordinate
        y: Y coordinate
        random: Stream used to shuffle the permutation table

    Returns:
        Noise value, approximately in [-1, 1]. Non-finite input gives 0.0.
    """
    perm = build_permutation(random)

    if not (math.isfinite(x) and math.isfinite(y)):
        return 0.0

    # Skew input space to find the containing simplex cell
    s = (x + y) * _F2
    i = math.floor(x + s)
    j = math.floor(y + s)

    t = (i + j) * _G2
    x0 = x - (i - t)
    y0 = y - (j - t)

    # Upper or lower triangle of the cell
    if x0 > y0:
        i1, j1 = 1, 0
    else:
        i1, j1 = 0, 1

    x1 = x0 - i1 + _G2
    y1 = y0 - j1 + _G2
    x2 = x0 - 1 + 2 * _G2
    y2 = y0 - 1 + 2 * _G2

    ii = i & 255
    jj = j & 255
    gi0 = perm[ii + perm[jj]] % 8
    gi1 = perm[ii + i1 + perm[jj + j1]] % 8
    gi2 = perm[ii + 1 + perm[jj + 1]] % 8

    n0 = _corner(gi0, x0, y0)
    n1 = _corner(gi1, x1, y1)
    n2 = _corner(gi2, x2, y2)

    return _NOISE_SCALE * (n0 + n1 + n2)
