"""Exception types for the Poseidon hash.

All errors subclass ValueError so callers validating inputs with
``except ValueError`` keep working.
"""


class PoseidonError(Exception):
    """Base class for all Poseidon errors."""


class InvalidFieldElement(PoseidonError, ValueError):
    """Value cannot be used as a field element (wrong type or out of range)."""


class InvalidArity(PoseidonError, ValueError):
    """State or input sequence has the wrong number of elements."""


class ConfigurationError(PoseidonError, ValueError):
    """Malformed permutation configuration or parameter tables."""
