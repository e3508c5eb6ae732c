"""Poseidon permutation over the BLS12-381 scalar field.

The schedule is R_F/2 full rounds, R_P partial rounds, then R_F/2 full
rounds. Each round:

1. adds `t` round constants, one per state slot (partial rounds included),
2. applies x^5 to every slot (full rounds) or to slot 0 only (partial),
3. multiplies the state by the MDS matrix, row by row.

There is no linear layer before round 0. This follows the off-chain
reference library (poseidon-bls12381) rather than the Poseidon2 paper; do not
"fix" the schedule without re-checking the reference vectors.
"""

from functools import lru_cache
from typing import List, Sequence

from primitives.errors import InvalidArity
from primitives.field import FF, add, from_uint256, mul, sbox, to_field_element
from primitives.params import ROUNDS, PoseidonParams, Round, get_params


class Permutation:
    """Loop-based Poseidon permutation for one parameter set.

    Instances hold only read-only tables and can be shared across threads;
    every call works on its own state list.
    """

    def __init__(self, params: PoseidonParams):
        self.params = params
        self.config = params.config
        self.width = params.config.width
        self._schedule = params.config.rounds()

    # --- Round Steps ---

    def add_round_constants(self, state: List[int], rnd: Round) -> List[int]:
        constants = self.params.round_constants[rnd.offset:rnd.offset + self.width]
        return [add(x, c) for x, c in zip(state, constants)]

    def sbox_layer(self, state: List[int], rnd: Round) -> List[int]:
        if rnd.full:
            return [sbox(x) for x in state]
        return [sbox(state[0])] + state[1:]

    def mix(self, state: List[int]) -> List[int]:
        """Multiply state by the MDS matrix, accumulating each row with mul + add."""
        result = []
        for row in self.params.mds_matrix:
            acc = 0
            for m, x in zip(row, state):
                acc = add(acc, mul(m, x))
            result.append(acc)
        return result

    def apply_round(self, state: List[int], rnd: Round) -> List[int]:
        state = self.add_round_constants(state, rnd)
        state = self.sbox_layer(state, rnd)
        return self.mix(state)

    # --- Permutation ---

    def permute(self, state: Sequence[int]) -> List[int]:
        """Run the full round schedule on `state`.

        Args:
            state: Exactly `width` integers; values outside [0, p) are reduced

        Returns:
            New list of `width` field elements

        Raises:
            InvalidArity: If len(state) != width
            InvalidFieldElement: If an entry is not an integer
        """
        if len(state) != self.width:
            raise InvalidArity(f"state must have {self.width} elements, got {len(state)}")
        current = [to_field_element(x) for x in state]
        for rnd in self._schedule:
            current = self.apply_round(current, rnd)
        return current


@lru_cache(maxsize=None)
def get_permutation(width: int) -> Permutation:
    """Shared Permutation for the deployed instance of the given width."""
    return Permutation(get_params(width))


def permutation(state: Sequence[int]) -> List[int]:
    """Raw Poseidon permutation, instance selected by len(state).

    Raises:
        InvalidArity: If no instance has width len(state)
    """
    if len(state) not in ROUNDS:
        raise InvalidArity(
            f"no Poseidon instance for a state of {len(state)} elements; "
            f"supported widths: {sorted(ROUNDS)}"
        )
    return get_permutation(len(state)).permute(state)


def permutation_uint256(state: Sequence[int]) -> List[int]:
    """permutation() for uint256 words: rejects values outside [0, 2^256), reduces mod p."""
    return permutation([from_uint256(x) for x in state])


# --- Batch Permutation ---

def _pow5(x: FF) -> FF:
    x2 = x * x
    x4 = x2 * x2
    return x4 * x


def permute_batch(states: Sequence[Sequence[int]], params: PoseidonParams) -> List[List[int]]:
    """Permute many independent states at once with galois field arrays.

    Rows are independent, so the result equals calling Permutation.permute on
    each row.

    Args:
        states: Sequence of states, each of exactly `width` integers
        params: Parameter tables for the instance

    Returns:
        List of permuted states as int lists

    Raises:
        InvalidArity: If any state has the wrong length
    """
    config = params.config
    width = config.width
    if len(states) == 0:
        return []
    for row in states:
        if len(row) != width:
            raise InvalidArity(f"state must have {width} elements, got {len(row)}")

    block = FF([[to_field_element(x) for x in row] for row in states])
    constants = FF(list(params.round_constants)).reshape(config.total_rounds, width)
    mds_t = FF([list(row) for row in params.mds_matrix]).T

    for rnd in config.rounds():
        block = block + constants[rnd.index]
        if rnd.full:
            block = _pow5(block)
        else:
            block[:, 0] = _pow5(block[:, 0])
        block = block @ mds_t

    return [[int(v) for v in row] for row in block]
