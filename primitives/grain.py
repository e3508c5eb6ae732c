"""Grain LFSR parameter generation for the Poseidon permutation.

Reproduces the round constants and MDS matrix of the reference parameter
script (generate_params_poseidon.sage, invoked as ``1 0 255 t 5 128 p``) for
prime fields with the x^alpha S-box:

1. An 80-bit Grain LFSR is seeded from the instance description
   (field type, S-box type, field size, width, full rounds, partial rounds)
   followed by 30 one-bits, then clocked 160 times and discarded.
2. Output bits are filtered by the self-shrinking rule: bits are drawn in
   pairs (b1, b2) and b2 is emitted only when b1 = 1.
3. Round constants are n-bit integers (MSB first), rejection-sampled < p.
4. The MDS matrix is a Cauchy matrix M[i][j] = 1 / (x_i + y_j) built from the
   next 2t draws of the same stream, reduced mod p and redrawn on collisions.

The reference script also screens candidate matrices against subspace-trail
attacks; that screening is not reproduced here.
"""

import logging
from typing import List, Tuple

import numpy as np

from primitives.errors import ConfigurationError
from primitives.field import FF

logger = logging.getLogger(__name__)

# --- Constants ---

FIELD_TYPE_PRIME = 1
SBOX_TYPE_POWER = 0

STATE_BITS = 80
WARMUP_CLOCKS = 160

# (value width in bits) for each seed field, in seed order
_SEED_LAYOUT = (2, 4, 12, 12, 10, 10)
_SEED_PADDING_ONES = 30


# --- Seed ---

def grain_seed(field_bits: int, width: int, full_rounds: int, partial_rounds: int) -> List[int]:
    """Build the 80-bit initial LFSR state, MSB first per field.

    Raises:
        ConfigurationError: If a value does not fit its seed field
    """
    values = (FIELD_TYPE_PRIME, SBOX_TYPE_POWER, field_bits, width, full_rounds, partial_rounds)
    bits: List[int] = []
    for value, size in zip(values, _SEED_LAYOUT):
        if not 0 <= value < (1 << size):
            raise ConfigurationError(f"seed value {value} does not fit in {size} bits")
        bits.extend(int(b) for b in format(value, f"0{size}b"))
    bits.extend([1] * _SEED_PADDING_ONES)
    return bits


# --- LFSR ---

class GrainLFSR:
    """Self-shrinking Grain LFSR with taps 62, 51, 38, 23, 13, 0.

    The register is held as an int: bit i is position i of the reference
    bit list, so position 0 is the oldest bit.
    """

    def __init__(self, seed: List[int]):
        if len(seed) != STATE_BITS:
            raise ConfigurationError(f"Grain seed must have {STATE_BITS} bits, got {len(seed)}")
        self._register = 0
        for i, bit in enumerate(seed):
            self._register |= (bit & 1) << i
        for _ in range(WARMUP_CLOCKS):
            self._clock()

    def _clock(self) -> int:
        r = self._register
        bit = ((r >> 62) ^ (r >> 51) ^ (r >> 38) ^ (r >> 23) ^ (r >> 13) ^ r) & 1
        self._register = (r >> 1) | (bit << (STATE_BITS - 1))
        return bit

    def next_bit(self) -> int:
        """Next filtered output bit."""
        while True:
            first = self._clock()
            second = self._clock()
            if first:
                return second

    def random_bits(self, n: int) -> int:
        """Integer built from the next n output bits, most significant first."""
        value = 0
        for _ in range(n):
            value = (value << 1) | self.next_bit()
        return value


# --- Table Generation ---

def generate_round_constants(lfsr: GrainLFSR, count: int, prime: int, field_bits: int) -> List[int]:
    """Draw `count` round constants, rejecting samples >= prime."""
    constants = []
    for _ in range(count):
        while True:
            candidate = lfsr.random_bits(field_bits)
            if candidate < prime:
                break
        constants.append(candidate)
    return constants


def generate_mds_matrix(lfsr: GrainLFSR, width: int, prime: int, field_bits: int) -> List[List[int]]:
    """Draw a width x width Cauchy matrix M[i][j] = (x_i + y_j)^-1."""
    while True:
        values = [lfsr.random_bits(field_bits) % prime for _ in range(2 * width)]
        while len(set(values)) != len(values):
            values = [lfsr.random_bits(field_bits) % prime for _ in range(2 * width)]

        xs, ys = values[:width], values[width:]
        if any((x + y) % prime == 0 for x in xs for y in ys):
            logger.debug("Cauchy candidate has x_i + y_j = 0, redrawing")
            continue

        sums = FF(xs)[:, np.newaxis] + FF(ys)[np.newaxis, :]
        return [[int(v) for v in row] for row in sums ** -1]


def generate_parameters(
    width: int,
    full_rounds: int,
    partial_rounds: int,
    prime: int,
    field_bits: int,
) -> Tuple[List[int], List[List[int]]]:
    """Generate (round_constants, mds_matrix) for one Poseidon instance.

    Constants come first in the stream, the matrix continues it.
    """
    lfsr = GrainLFSR(grain_seed(field_bits, width, full_rounds, partial_rounds))
    n_constants = width * (full_rounds + partial_rounds)
    constants = generate_round_constants(lfsr, n_constants, prime, field_bits)
    matrix = generate_mds_matrix(lfsr, width, prime, field_bits)
    logger.debug(
        "Generated Grain parameters: t=%d R_F=%d R_P=%d (%d constants)",
        width, full_rounds, partial_rounds, n_constants,
    )
    return constants, matrix
