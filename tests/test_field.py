"""Tests for BLS12-381 scalar field arithmetic and boundary conversion."""

import numpy as np
import pytest

from primitives.errors import InvalidFieldElement
from primitives.field import (
    BLS12_381_SCALAR_PRIME,
    FF,
    UINT256_LIMIT,
    add,
    from_uint256,
    mul,
    reduce,
    sbox,
    to_field_element,
)

P = BLS12_381_SCALAR_PRIME


class TestModulus:
    """The modulus is the 255-bit BLS12-381 scalar field order."""

    def test_decimal_value(self) -> None:
        """Test that the modulus has the documented decimal value."""
        assert P == 52435875175126190479447740508185965837690552500527637822603658699938581184513

    def test_bit_length(self) -> None:
        """Test that the modulus is a 255-bit prime."""
        assert P.bit_length() == 255

    def test_galois_field_order(self) -> None:
        """Test that FF is built over the same modulus."""
        assert FF.order == P


class TestScalarArithmetic:
    """add/mul/sbox on plain ints."""

    def test_add_wraps(self) -> None:
        """Test that addition wraps around p."""
        assert add(P - 1, 1) == 0
        assert add(P - 1, P - 1) == P - 2

    def test_mul_wraps(self) -> None:
        """Test that multiplication wraps around p."""
        # (-1) * (-1) = 1
        assert mul(P - 1, P - 1) == 1
        assert mul(P // 2 + 1, 2) == 1

    def test_results_in_range(self) -> None:
        """Test that add and mul always return canonical values."""
        for a in [0, 1, P // 3, P - 1]:
            for b in [0, 2, P // 2, P - 1]:
                assert 0 <= add(a, b) < P
                assert 0 <= mul(a, b) < P

    @pytest.mark.parametrize("x", [0, 1, 2, 12345, P // 2, P - 2, P - 1])
    def test_sbox_is_fifth_power(self, x: int) -> None:
        """Test that the S-box equals x^5 mod p."""
        assert sbox(x) == pow(x, 5, P)

    def test_matches_galois(self) -> None:
        """Test that int arithmetic agrees with galois FF arithmetic."""
        a, b = 0xDEADBEEF ** 7 % P, 0xCAFEBABE ** 9 % P
        assert add(a, b) == int(FF(a) + FF(b))
        assert mul(a, b) == int(FF(a) * FF(b))
        assert sbox(a) == int(FF(a) ** 5)

    def test_reduce(self) -> None:
        """Test reduce() on multiples of p and negatives."""
        assert reduce(P) == 0
        assert reduce(P + 5) == 5
        assert reduce(-1) == P - 1


class TestToFieldElement:
    """Implicit reduction by default, rejection in strict mode."""

    def test_in_range_unchanged(self) -> None:
        """Test that canonical values pass through unchanged."""
        assert to_field_element(0) == 0
        assert to_field_element(P - 1) == P - 1

    def test_reduces_out_of_range(self) -> None:
        """Test that values >= p are reduced by default."""
        assert to_field_element(P) == 0
        assert to_field_element(2 * P + 3) == 3
        assert to_field_element(2**512) == pow(2, 512, P)

    def test_strict_rejects_out_of_range(self) -> None:
        """Test that strict mode rejects values outside [0, p)."""
        with pytest.raises(InvalidFieldElement):
            to_field_element(P, strict=True)
        with pytest.raises(InvalidFieldElement):
            to_field_element(-1, strict=True)

    def test_strict_accepts_in_range(self) -> None:
        """Test that strict mode accepts p - 1."""
        assert to_field_element(P - 1, strict=True) == P - 1

    @pytest.mark.parametrize("value", [1.0, "1", None, True, [1]])
    def test_rejects_non_integers(self, value) -> None:
        """Test that non-integer inputs raise InvalidFieldElement."""
        with pytest.raises(InvalidFieldElement):
            to_field_element(value)

    def test_accepts_numpy_and_galois_scalars(self) -> None:
        """Test that numpy and galois scalars convert to int."""
        assert to_field_element(np.int64(7)) == 7
        assert to_field_element(FF(11)) == 11

    def test_is_value_error(self) -> None:
        """Test that InvalidFieldElement is catchable as ValueError."""
        with pytest.raises(ValueError):
            to_field_element("x")


class TestFromUint256:
    """uint256 words are range-checked, then reduced."""

    def test_reduces_words_above_prime(self) -> None:
        """Test that uint256 words in [p, 2^256) are reduced."""
        assert from_uint256(P) == 0
        assert from_uint256(UINT256_LIMIT - 1) == (UINT256_LIMIT - 1) % P

    def test_rejects_out_of_word_range(self) -> None:
        """Test that words outside [0, 2^256) are rejected."""
        with pytest.raises(InvalidFieldElement):
            from_uint256(UINT256_LIMIT)
        with pytest.raises(InvalidFieldElement):
            from_uint256(-1)
