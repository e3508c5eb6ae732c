"""Poseidon instance configuration and parameter tables.

A Poseidon instance is described by PermutationConfig (width, round counts,
S-box exponent, prime) and PoseidonParams, which bundles the config with its
round constants and MDS matrix. Tables are immutable once loaded:

    params = get_params(3)          # read from primitives/tables once, then cached
    params.round_constants          # t * (R_F + R_P) ints, round-major
    params.mds_matrix               # t rows of t ints

The deployed tables ship as JSON under primitives/tables/. They were produced
by PoseidonParams.generate (Grain LFSR, see primitives.grain), which remains
the offline way to rebuild them; a loaded table is validated exactly like a
generated one.

Instances (round counts of the deployed contracts, 4 + 56 + 4 rounds):

    width 2 -> 1 input, width 3 -> 2 inputs, width 5 -> 4 inputs
"""

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple, Union

import numpy as np

from primitives.errors import ConfigurationError
from primitives.field import BLS12_381_SCALAR_PRIME, FF, FIELD_BITS
from primitives.grain import generate_parameters

logger = logging.getLogger(__name__)

# --- Constants ---

SBOX_ALPHA = 5

TABLES_DIR = Path(__file__).parent / "tables"

# width -> (full rounds, partial rounds)
ROUNDS: Dict[int, Tuple[int, int]] = {
    2: (8, 56),
    3: (8, 56),
    5: (8, 56),
}


# --- Round Schedule ---

@dataclass(frozen=True)
class Round:
    """One step of the round schedule.

    Attributes:
        index: Round number in [0, total_rounds)
        full: True for full rounds (S-box on every slot)
        offset: Index of this round's first constant in round_constants
    """
    index: int
    full: bool
    offset: int


# --- Configuration ---

@dataclass(frozen=True)
class PermutationConfig:
    """Shape of a Poseidon permutation.

    Attributes:
        width: State size t
        full_rounds: R_F, split evenly before and after the partial rounds
        partial_rounds: R_P
        alpha: S-box exponent (only 5 is supported)
        prime: Field modulus
    """
    width: int
    full_rounds: int
    partial_rounds: int
    alpha: int = SBOX_ALPHA
    prime: int = BLS12_381_SCALAR_PRIME

    def __post_init__(self):
        if self.width < 2:
            raise ConfigurationError(f"width must be >= 2, got {self.width}")
        if self.full_rounds <= 0 or self.full_rounds % 2 != 0:
            raise ConfigurationError(f"full_rounds must be positive and even, got {self.full_rounds}")
        if self.partial_rounds < 0:
            raise ConfigurationError(f"partial_rounds must be >= 0, got {self.partial_rounds}")
        if self.alpha != SBOX_ALPHA:
            raise ConfigurationError(f"only the x^{SBOX_ALPHA} S-box is supported, got alpha={self.alpha}")
        if self.prime != BLS12_381_SCALAR_PRIME:
            raise ConfigurationError("prime must be the BLS12-381 scalar field modulus")

    @classmethod
    def for_width(cls, width: int) -> "PermutationConfig":
        """Config of the deployed instance with state size `width`."""
        if width not in ROUNDS:
            raise ConfigurationError(
                f"no Poseidon instance for width {width}; supported: {sorted(ROUNDS)}"
            )
        full_rounds, partial_rounds = ROUNDS[width]
        return cls(width=width, full_rounds=full_rounds, partial_rounds=partial_rounds)

    @property
    def total_rounds(self) -> int:
        return self.full_rounds + self.partial_rounds

    @property
    def half_full_rounds(self) -> int:
        return self.full_rounds // 2

    @property
    def n_round_constants(self) -> int:
        return self.width * self.total_rounds

    @property
    def rate(self) -> int:
        """Number of input slots (state slot 0 is the capacity element)."""
        return self.width - 1

    def rounds(self) -> List[Round]:
        """Round schedule: R_F/2 full, R_P partial, R_F/2 full.

        Every round consumes `width` constants, partial rounds included.
        """
        half = self.half_full_rounds
        return [
            Round(
                index=r,
                full=r < half or r >= half + self.partial_rounds,
                offset=r * self.width,
            )
            for r in range(self.total_rounds)
        ]


# --- Parameter Tables ---

@dataclass(frozen=True)
class PoseidonParams:
    """Round constants and MDS matrix for one PermutationConfig.

    Constructing an instance validates the tables; malformed tables raise
    ConfigurationError here rather than on the first hash call.
    """
    config: PermutationConfig
    round_constants: Tuple[int, ...]
    mds_matrix: Tuple[Tuple[int, ...], ...]

    def __post_init__(self):
        constants = tuple(self.round_constants)
        rows = tuple(tuple(row) for row in self.mds_matrix)
        object.__setattr__(self, "round_constants", constants)
        object.__setattr__(self, "mds_matrix", rows)
        self._validate()

    def _validate(self) -> None:
        cfg = self.config
        if len(self.round_constants) != cfg.n_round_constants:
            raise ConfigurationError(
                f"expected {cfg.n_round_constants} round constants for t={cfg.width}, "
                f"R_F={cfg.full_rounds}, R_P={cfg.partial_rounds}; got {len(self.round_constants)}"
            )
        if len(self.mds_matrix) != cfg.width or any(len(row) != cfg.width for row in self.mds_matrix):
            shape = [len(row) for row in self.mds_matrix]
            raise ConfigurationError(
                f"MDS matrix must be {cfg.width}x{cfg.width}, got rows of lengths {shape}"
            )

        entries = list(self.round_constants) + [v for row in self.mds_matrix for v in row]
        for v in entries:
            if isinstance(v, bool) or not isinstance(v, int):
                raise ConfigurationError(f"table entries must be ints, got {type(v).__name__}")
            if not 0 <= v < cfg.prime:
                raise ConfigurationError(f"table entry {v} is not in [0, p)")

        if np.linalg.det(FF([list(row) for row in self.mds_matrix])) == 0:
            raise ConfigurationError("MDS matrix is singular")

    @classmethod
    def generate(cls, config: PermutationConfig) -> "PoseidonParams":
        """Reproduce the reference tables for `config` with the Grain LFSR."""
        constants, matrix = generate_parameters(
            config.width, config.full_rounds, config.partial_rounds, config.prime, FIELD_BITS
        )
        return cls(config=config, round_constants=constants, mds_matrix=matrix)

    # --- Serialization ---

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict; field elements are decimal strings."""
        cfg = self.config
        return {
            "prime": str(cfg.prime),
            "width": cfg.width,
            "full_rounds": cfg.full_rounds,
            "partial_rounds": cfg.partial_rounds,
            "alpha": cfg.alpha,
            "round_constants": [str(c) for c in self.round_constants],
            "mds_matrix": [[str(v) for v in row] for row in self.mds_matrix],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PoseidonParams":
        """Inverse of to_dict.

        Raises:
            ConfigurationError: On missing keys, non-integer entries or
                tables that do not match the declared config
        """
        try:
            config = PermutationConfig(
                width=int(data["width"]),
                full_rounds=int(data["full_rounds"]),
                partial_rounds=int(data["partial_rounds"]),
                alpha=int(data.get("alpha", SBOX_ALPHA)),
                prime=int(data.get("prime", BLS12_381_SCALAR_PRIME)),
            )
            constants = [int(c) for c in data["round_constants"]]
            matrix = [[int(v) for v in row] for row in data["mds_matrix"]]
        except ConfigurationError:
            raise
        except KeyError as e:
            raise ConfigurationError(f"parameter file is missing key {e}") from e
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"malformed parameter file: {e}") from e
        return cls(config=config, round_constants=constants, mds_matrix=matrix)

    def to_json(self, path: Union[str, Path]) -> None:
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "PoseidonParams":
        """Load tables written by to_json."""
        with open(path, "r") as f:
            data = json.load(f)
        params = cls.from_dict(data)
        logger.debug("Loaded Poseidon parameters for t=%d from %s", params.config.width, path)
        return params


def table_path(width: int) -> Path:
    """Shipped JSON tables for the deployed instance of the given width."""
    return TABLES_DIR / f"poseidon_t{width}.json"


@lru_cache(maxsize=None)
def get_params(width: int) -> PoseidonParams:
    """Parameter tables for the deployed instance of the given width.

    Loaded from the shipped JSON file on first use and shared read-only
    afterwards.

    Raises:
        ConfigurationError: If no instance has this width, or the shipped file
            describes a different instance
    """
    config = PermutationConfig.for_width(width)
    params = PoseidonParams.from_json(table_path(width))
    if params.config != config:
        raise ConfigurationError(
            f"{table_path(width).name} describes {params.config}, expected {config}"
        )
    return params


def supported_widths() -> Sequence[int]:
    return sorted(ROUNDS)
