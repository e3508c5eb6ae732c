"""Shared test data."""

from typing import List

from primitives.field import BLS12_381_SCALAR_PRIME

P = BLS12_381_SCALAR_PRIME


def sample_states(width: int) -> List[List[int]]:
    """Deterministic mix of small, boundary and large states."""
    return [
        [0] * width,
        list(range(width)),
        [P - 1] * width,
        [P // 2] * width,
        [(0x9E3779B97F4A7C15 * (i + 1)) ** 3 % P for i in range(width)],
    ]
