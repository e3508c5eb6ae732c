"""
Pytest configuration for Poseidon tests.

Puts the repository root on sys.path and provides shared parameter fixtures.
"""

import sys
from pathlib import Path

import pytest

# tests/ is inside the repository root, so parent is the root
root_dir = Path(__file__).parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))

from primitives.params import PoseidonParams, get_params  # noqa: E402


@pytest.fixture(params=[2, 3, 5], ids=lambda t: f"t{t}")
def params(request) -> PoseidonParams:
    """Parameter tables for every deployed width."""
    return get_params(request.param)


@pytest.fixture
def params_t3() -> PoseidonParams:
    return get_params(3)


@pytest.fixture
def params_t5() -> PoseidonParams:
    return get_params(5)

