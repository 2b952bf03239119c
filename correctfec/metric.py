"""Distance metrics between hard-decision code words and received symbols."""

from __future__ import annotations

from collections.abc import Sequence

from correctfec.bits import popcount

SOFT_MAX = 0xFF
DISTANCE_MAX = 0xFFFF


def hamming_distance(x: int, y: int) -> int:
    """Number of differing bits between ``x`` and ``y``."""
    return popcount(x ^ y)


def soft_distance_linear(hard_x: int, soft_y: Sequence[int]) -> int:
    """Sum of absolute differences between the bits of ``hard_x`` (0 -> 0, 1 -> 255)
    and the soft symbols ``soft_y``; bit 0 of ``hard_x`` pairs with ``soft_y[0]``."""
    dist = 0
    for symbol in soft_y:
        soft_x = SOFT_MAX if hard_x & 1 else 0
        hard_x >>= 1
        dist = (dist + abs(symbol - soft_x)) & DISTANCE_MAX
    return dist


def soft_distance_quadratic(hard_x: int, soft_y: Sequence[int]) -> int:
    """Squared Euclidean distance, accumulated in 16 bits and divided by 8."""
    dist = 0
    for symbol in soft_y:
        soft_x = SOFT_MAX if hard_x & 1 else 0
        hard_x >>= 1
        d = symbol - soft_x
        dist = (dist + d * d) & DISTANCE_MAX
    return dist >> 3