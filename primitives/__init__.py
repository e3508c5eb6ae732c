"""Primitives - BLS12-381 scalar field and Poseidon parameter tables."""

from primitives.errors import (
    ConfigurationError,
    InvalidArity,
    InvalidFieldElement,
    PoseidonError,
)
from primitives.field import (
    BLS12_381_SCALAR_PRIME,
    FF,
    FIELD_BITS,
    UINT256_LIMIT,
    add,
    from_uint256,
    mul,
    reduce,
    sbox,
    to_field_element,
)
from primitives.grain import GrainLFSR, generate_parameters, grain_seed
from primitives.params import (
    ROUNDS,
    SBOX_ALPHA,
    PermutationConfig,
    PoseidonParams,
    Round,
    get_params,
    supported_widths,
    table_path,
)

__all__ = [
    # Errors
    "PoseidonError",
    "InvalidFieldElement",
    "InvalidArity",
    "ConfigurationError",
    # Field
    "BLS12_381_SCALAR_PRIME",
    "FF",
    "FIELD_BITS",
    "UINT256_LIMIT",
    "add",
    "mul",
    "reduce",
    "sbox",
    "to_field_element",
    "from_uint256",
    # Grain
    "GrainLFSR",
    "grain_seed",
    "generate_parameters",
    # Parameters
    "ROUNDS",
    "SBOX_ALPHA",
    "PermutationConfig",
    "PoseidonParams",
    "Round",
    "get_params",
    "supported_widths",
    "table_path",
]
