"""Standard single-qubit matrices used to build error channels."""

from __future__ import annotations

import math

import torch

from gatenoise.config import DEFAULT_COMPLEX_DTYPE


def _resolve(dtype: torch.dtype | None, device: torch.device | None):
    if dtype is None:
        dtype = DEFAULT_COMPLEX_DTYPE
    if device is None:
        device = torch.device("cpu")
    return dtype, device


def I(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Single-qubit identity."""
    dtype, device = _resolve(dtype, device)
    return torch.eye(2, dtype=dtype, device=device)


def X(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Pauli-X (bit flip)."""
    dtype, device = _resolve(dtype, device)
    return torch.tensor([[0.0, 1.0], [1.0, 0.0]], dtype=dtype, device=device)


def Y(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Pauli-Y (bit and phase flip)."""
    dtype, device = _resolve(dtype, device)
    return torch.tensor([[0.0, -1.0j], [1.0j, 0.0]], dtype=dtype, device=device)


def Z(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Pauli-Z (phase flip)."""
    dtype, device = _resolve(dtype, device)
    return torch.tensor([[1.0, 0.0], [0.0, -1.0]], dtype=dtype, device=device)


def H(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Hadamard."""
    dtype, device = _resolve(dtype, device)
    s = 1.0 / math.sqrt(2.0)
    return torch.tensor([[s, s], [s, -s]], dtype=dtype, device=device)


_PAULIS = {"I": I, "X": X, "Y": Y, "Z": Z}


def pauli(
    label: str,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Matrix of a Pauli string such as ``"X"`` or ``"IZ"``.

    The leftmost character is the most significant tensor factor, so
    ``pauli("XZ") == kron(X, Z)``.

    Raises:
        ValueError: If the label is empty or has characters outside IXYZ.
    """
    if not label:
        raise ValueError("Pauli label must be non-empty")
    factors = []
    for char in label.upper():
        if char not in _PAULIS:
            raise ValueError(f"Invalid Pauli label {label!r}")
        factors.append(_PAULIS[char](dtype=dtype, device=device))

    result = factors[0]
    for factor in factors[1:]:
        result = torch.kron(result, factor)
    return result
