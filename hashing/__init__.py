"""Hashing - Poseidon permutation and sponge entry points."""

from hashing.permutation import (
    Permutation,
    get_permutation,
    permutation,
    permutation_uint256,
    permute_batch,
)
from hashing.sponge import (
    CAPACITY_ELEMENT,
    hash_1,
    hash_1_uint256,
    hash_2,
    hash_2_uint256,
    hash_4,
    hash_4_uint256,
    hash_many,
    poseidon_hash,
)

__all__ = [
    # Permutation
    "Permutation",
    "get_permutation",
    "permutation",
    "permutation_uint256",
    "permute_batch",
    # Sponge
    "CAPACITY_ELEMENT",
    "hash_1",
    "hash_2",
    "hash_4",
    "poseidon_hash",
    "hash_many",
    # Uint256 boundary
    "hash_1_uint256",
    "hash_2_uint256",
    "hash_4_uint256",
]
