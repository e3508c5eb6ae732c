"""Tests for Grain LFSR parameter generation."""

import pytest

from primitives.errors import ConfigurationError
from primitives.field import BLS12_381_SCALAR_PRIME, FF, FIELD_BITS
from primitives.grain import (
    GrainLFSR,
    generate_mds_matrix,
    generate_parameters,
    generate_round_constants,
    grain_seed,
)

P = BLS12_381_SCALAR_PRIME


def _bits(bits) -> str:
    return "".join(str(b) for b in bits)


def _reference_stream(seed, n_bits):
    """Bit-list LFSR written the way the parameter script writes it."""
    seq = list(seed)

    def clock():
        new_bit = seq[62] ^ seq[51] ^ seq[38] ^ seq[23] ^ seq[13] ^ seq[0]
        seq.pop(0)
        seq.append(new_bit)
        return new_bit

    for _ in range(160):
        clock()

    out = []
    while len(out) < n_bits:
        new_bit = clock()
        while new_bit == 0:
            clock()
            new_bit = clock()
        out.append(clock())
    return out


class TestSeed:
    """80-bit seed layout."""

    def test_length(self) -> None:
        """Test that the seed is 80 bits long."""
        assert len(grain_seed(FIELD_BITS, 3, 8, 56)) == 80

    def test_layout(self) -> None:
        """Test the seed field order and widths."""
        seed = _bits(grain_seed(255, 3, 8, 56))
        assert seed[0:2] == "01"                 # prime field
        assert seed[2:6] == "0000"               # x^alpha S-box
        assert seed[6:18] == format(255, "012b")
        assert seed[18:30] == format(3, "012b")
        assert seed[30:40] == format(8, "010b")
        assert seed[40:50] == format(56, "010b")
        assert seed[50:] == "1" * 30

    def test_rejects_oversized_field(self) -> None:
        """Test that values too wide for their seed field are rejected."""
        with pytest.raises(ConfigurationError):
            grain_seed(FIELD_BITS, 1 << 12, 8, 56)
        with pytest.raises(ConfigurationError):
            grain_seed(FIELD_BITS, 3, 1024, 56)


class TestGrainLFSR:
    """Self-shrinking LFSR output."""

    def test_rejects_wrong_seed_length(self) -> None:
        """Test that a seed of the wrong length is rejected."""
        with pytest.raises(ConfigurationError):
            GrainLFSR([1] * 79)

    def test_matches_bit_list_implementation(self) -> None:
        """Test that the int register matches a bit-list LFSR."""
        seed = grain_seed(FIELD_BITS, 5, 8, 56)
        lfsr = GrainLFSR(seed)
        ours = [lfsr.next_bit() for _ in range(600)]
        assert ours == _reference_stream(seed, 600)

    def test_deterministic(self) -> None:
        """Test that equal seeds give equal streams."""
        seed = grain_seed(FIELD_BITS, 3, 8, 56)
        a, b = GrainLFSR(seed), GrainLFSR(seed)
        assert [a.random_bits(64) for _ in range(8)] == [b.random_bits(64) for _ in range(8)]

    def test_random_bits_msb_first(self) -> None:
        """Test that random_bits packs the stream MSB first."""
        seed = grain_seed(FIELD_BITS, 3, 8, 56)
        bits = _reference_stream(seed, 16)
        assert GrainLFSR(seed).random_bits(16) == int(_bits(bits), 2)

    def test_seeds_differ_per_width(self) -> None:
        """Test that each width gets its own stream."""
        a = GrainLFSR(grain_seed(FIELD_BITS, 3, 8, 56)).random_bits(FIELD_BITS)
        b = GrainLFSR(grain_seed(FIELD_BITS, 5, 8, 56)).random_bits(FIELD_BITS)
        assert a != b


class TestTables:
    """Round constants and Cauchy MDS matrix."""

    def test_round_constants_in_range(self) -> None:
        """Test that rejection sampling keeps constants below p."""
        lfsr = GrainLFSR(grain_seed(FIELD_BITS, 3, 8, 56))
        constants = generate_round_constants(lfsr, 50, P, FIELD_BITS)
        assert len(constants) == 50
        assert all(0 <= c < P for c in constants)
        assert len(set(constants)) == 50

    def test_mds_is_cauchy(self) -> None:
        """1/M[i][j] = x_i + y_j, so the inverse entries have rank-one differences."""
        lfsr = GrainLFSR(grain_seed(FIELD_BITS, 5, 8, 56))
        m = generate_mds_matrix(lfsr, 5, P, FIELD_BITS)
        inv = FF(m) ** -1
        for i in range(5):
            for j in range(5):
                assert inv[i, j] - inv[i, 0] - inv[0, j] + inv[0, 0] == 0

    def test_generate_parameters_shapes(self) -> None:
        """Test table sizes for width 3."""
        constants, matrix = generate_parameters(3, 8, 56, P, FIELD_BITS)
        assert len(constants) == 3 * 64
        assert len(matrix) == 3 and all(len(row) == 3 for row in matrix)
        assert all(0 <= v < P for row in matrix for v in row)

    def test_generate_parameters_deterministic(self) -> None:
        """Test that generation is reproducible."""
        assert generate_parameters(2, 8, 56, P, FIELD_BITS) == generate_parameters(2, 8, 56, P, FIELD_BITS)

    def test_constants_precede_matrix_in_stream(self) -> None:
        """Test that the matrix continues the constants' stream."""
        seed = grain_seed(FIELD_BITS, 3, 8, 56)
        lfsr = GrainLFSR(seed)
        constants = generate_round_constants(lfsr, 3 * 64, P, FIELD_BITS)
        matrix = generate_mds_matrix(lfsr, 3, P, FIELD_BITS)
        assert (constants, matrix) == generate_parameters(3, 8, 56, P, FIELD_BITS)
