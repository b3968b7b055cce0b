"""Pytest configuration and shared fixtures for gatenoise tests.

This module provides:
- Deterministic RNG fixtures (numpy and the gatenoise RngEngine)
- Common single-qubit operators used across the noise tests
"""

import math
import os

import numpy as np
import pytest
import torch

from gatenoise.circuit import GateOp
from gatenoise.sampling import RngEngine


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Deterministic numpy RNG, seeded from TEST_RNG_SEED (default: 0)."""
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def engine() -> RngEngine:
    """Deterministic RngEngine, seeded from TEST_RNG_SEED (default: 0)."""
    return RngEngine(seed=_seed())


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Seed global numpy and torch RNGs so no test depends on prior state."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


@pytest.fixture
def x_gate() -> GateOp:
    return GateOp(name="X", qubits=(0,))


@pytest.fixture
def cnot_gate() -> GateOp:
    return GateOp(name="CNOT", qubits=(0, 1))


@pytest.fixture
def pauli_mixture():
    """Equal mixture of X and Z: Kraus operators X/sqrt(2), Z/sqrt(2)."""
    s = 1.0 / math.sqrt(2.0)
    x = torch.tensor([[0, 1], [1, 0]], dtype=torch.complex128)
    z = torch.tensor([[1, 0], [0, -1]], dtype=torch.complex128)
    return (s * x, s * z)
