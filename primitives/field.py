"""BLS12-381 scalar field GF(p).

The permutation path works on plain Python ints reduced mod p, which hold the
~510-bit intermediate products without overflow. FF is the galois field type
for array and matrix work (batch permutation, MDS checks); both compute the
same values.
"""

import galois
import numpy as np

from primitives.errors import InvalidFieldElement

# --- Field Construction ---

# r = scalar field modulus of BLS12-381 (255 bits)
BLS12_381_SCALAR_PRIME = 0x73EDA753299D7D483339D80809A1D80553BDA402FFFE5BFEFFFFFFFF00000001

FIELD_BITS = 255

UINT256_LIMIT = 1 << 256

# 7 generates the multiplicative group; passing it avoids factoring p - 1
FF = galois.GF(BLS12_381_SCALAR_PRIME, primitive_element=7, verify=False)
"""Base field GF(p) - BLS12-381 scalar field."""


# --- Scalar Arithmetic ---

def reduce(x: int) -> int:
    """Canonical representative of x in [0, p)."""
    return x % BLS12_381_SCALAR_PRIME


def add(a: int, b: int) -> int:
    """(a + b) mod p."""
    return (a + b) % BLS12_381_SCALAR_PRIME


def mul(a: int, b: int) -> int:
    """(a * b) mod p."""
    return (a * b) % BLS12_381_SCALAR_PRIME


def sbox(x: int) -> int:
    """x^5 mod p as three multiplications: x^2, x^4, then x^4 * x.

    Matches the reduction order of the reference implementation
    (square, square, multiply back by the original value).
    """
    x2 = mul(x, x)
    x4 = mul(x2, x2)
    return mul(x4, x)


# --- Boundary Conversion ---

def _as_int(value) -> int:
    # bool is an int subclass but never a field element
    if isinstance(value, bool):
        raise InvalidFieldElement("field element must be an integer, got bool")
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, FF) and value.ndim == 0:
        return int(value)
    raise InvalidFieldElement(
        f"field element must be an integer, got {type(value).__name__}"
    )


def to_field_element(value, strict: bool = False) -> int:
    """Convert an integer to a field element.

    Args:
        value: Python int, numpy integer or 0-d FF element
        strict: Reject values outside [0, p) instead of reducing them

    Returns:
        Canonical field element in [0, p)

    Raises:
        InvalidFieldElement: If value is not an integer, or strict is set and
            value is out of range
    """
    x = _as_int(value)
    if strict and not 0 <= x < BLS12_381_SCALAR_PRIME:
        raise InvalidFieldElement(f"value {x} is not in [0, p)")
    return x % BLS12_381_SCALAR_PRIME


def from_uint256(value) -> int:
    """Convert a uint256 word to a field element, reducing mod p.

    Raises:
        InvalidFieldElement: If value is not an integer in [0, 2^256)
    """
    x = _as_int(value)
    if not 0 <= x < UINT256_LIMIT:
        raise InvalidFieldElement(f"value {x} is not a uint256")
    return x % BLS12_381_SCALAR_PRIME
