"""Sponge framing around the Poseidon permutation.

Fixed-arity hashes build the state [0, input_0, ..., input_{t-2}] (slot 0 is
the capacity element), permute it and return state[0]:

    hash_1(x)          -> width 2
    hash_2(x, y)       -> width 3
    hash_4(w, x, y, z) -> width 5

poseidon_hash() absorbs arbitrary-length input in chunks of t - 1 elements,
feeding each digest back into slot 0 of the next state. A short final chunk
is zero-padded. For exactly t - 1 inputs it equals the fixed-arity hash.
The input length is not absorbed, so trailing zeros that fit in the padding
do not change the digest: poseidon_hash([a]) == poseidon_hash([a, 0]).
"""

from typing import List, Sequence

from primitives.errors import InvalidArity
from primitives.field import from_uint256, reduce
from primitives.params import ROUNDS, get_params
from hashing.permutation import get_permutation, permute_batch

CAPACITY_ELEMENT = 0


def _digest(width: int, inputs: Sequence[int]) -> int:
    state = [CAPACITY_ELEMENT] + list(inputs)
    return reduce(get_permutation(width).permute(state)[0])


# --- Fixed Arity ---

def hash_1(x: int) -> int:
    """Poseidon hash of one field element (width-2 permutation)."""
    return _digest(2, [x])


def hash_2(x: int, y: int) -> int:
    """Poseidon hash of two field elements (width-3 permutation)."""
    return _digest(3, [x, y])


def hash_4(w: int, x: int, y: int, z: int) -> int:
    """Poseidon hash of four field elements (width-5 permutation)."""
    return _digest(5, [w, x, y, z])


# --- Variable Length ---

def poseidon_hash(inputs: Sequence[int], width: int = 3) -> int:
    """Hash a sequence of field elements of any positive length.

    The final chunk is zero-padded to the rate and the capacity starts at 0,
    so inputs that differ only by trailing zeros within the last chunk
    collide. Callers that need length separation must encode the length in
    the inputs.

    Args:
        inputs: Field elements to absorb
        width: Permutation width; each cycle absorbs width - 1 elements

    Returns:
        Digest in [0, p)

    Raises:
        InvalidArity: If inputs is empty
        ConfigurationError: If no instance has the requested width
    """
    if len(inputs) == 0:
        raise InvalidArity("cannot hash an empty input sequence")

    perm = get_permutation(width)
    rate = perm.config.rate
    digest = CAPACITY_ELEMENT
    for start in range(0, len(inputs), rate):
        chunk = list(inputs[start:start + rate])
        chunk += [0] * (rate - len(chunk))
        digest = reduce(perm.permute([digest] + chunk)[0])
    return digest


def hash_many(rows: Sequence[Sequence[int]]) -> List[int]:
    """Fixed-arity hash of many input rows in one batch permutation.

    All rows must have the same length, one of 1, 2 or 4.

    Raises:
        InvalidArity: On mixed or unsupported row lengths
    """
    if len(rows) == 0:
        return []
    arity = len(rows[0])
    if any(len(row) != arity for row in rows):
        raise InvalidArity("all rows in a batch must have the same length")
    width = arity + 1
    if width not in ROUNDS:
        raise InvalidArity(f"no fixed-arity hash for {arity} inputs")

    states = [[CAPACITY_ELEMENT] + list(row) for row in rows]
    return [reduce(state[0]) for state in permute_batch(states, get_params(width))]


# --- Uint256 Boundary ---
# Words outside [0, 2^256) are rejected; everything else is reduced mod p.

def hash_1_uint256(x: int) -> int:
    return hash_1(from_uint256(x))


def hash_2_uint256(x: int, y: int) -> int:
    return hash_2(from_uint256(x), from_uint256(y))


def hash_4_uint256(w: int, x: int, y: int, z: int) -> int:
    return hash_4(from_uint256(w), from_uint256(x), from_uint256(y), from_uint256(z))
