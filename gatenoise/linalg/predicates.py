"""Matrix predicates used to validate and classify error operators.

Every tolerance is an explicit argument. Comparisons use the largest
absolute element-wise deviation, so ``is_identity(M, tol)`` means
``max |M - I| <= tol``.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
import torch

from gatenoise.core.device import Device, default_device


def as_matrix(matrix, device: Optional[Device] = None) -> torch.Tensor:
    """
    Convert ``matrix`` to a 2D complex tensor on ``device``.

    Accepts torch tensors, numpy arrays and nested sequences. Non-tensor
    input goes through numpy so Python complex literals keep double
    precision.

    Raises
    ------
    ValueError
        If the input is not two-dimensional.
    """
    dev = device if device is not None else default_device()
    if isinstance(matrix, torch.Tensor):
        tensor = matrix
    else:
        tensor = torch.from_numpy(np.asarray(matrix, dtype=np.complex128))

    if tensor.dim() != 2:
        raise ValueError(
            f"Operator must be a 2D matrix, got {tensor.dim()} dimensions"
        )
    return tensor.to(dtype=dev.complex_dtype, device=dev.as_torch_device())


def adjoint(matrix: torch.Tensor) -> torch.Tensor:
    """Conjugate transpose."""
    return matrix.conj().transpose(-2, -1)


def is_square(matrix: torch.Tensor) -> bool:
    return matrix.dim() == 2 and matrix.shape[0] == matrix.shape[1]


def _max_deviation(a: torch.Tensor, b: torch.Tensor) -> float:
    if a.numel() == 0:
        return 0.0
    return torch.max(torch.abs(a - b)).item()


def _identity_like(matrix: torch.Tensor) -> torch.Tensor:
    return torch.eye(matrix.shape[0], dtype=matrix.dtype, device=matrix.device)


def is_zero(matrix: torch.Tensor, tolerance: float) -> bool:
    """True if every entry of ``matrix`` is within ``tolerance`` of zero."""
    if matrix.numel() == 0:
        return True
    return torch.max(torch.abs(matrix)).item() <= tolerance


def is_identity(matrix: torch.Tensor, tolerance: float) -> bool:
    """True if ``matrix`` is square and within ``tolerance`` of I."""
    if not is_square(matrix):
        return False
    return _max_deviation(matrix, _identity_like(matrix)) <= tolerance


def is_unitary(matrix: torch.Tensor, tolerance: float) -> bool:
    """True if ``matrix`` is square and U^dag U is within ``tolerance`` of I."""
    if not is_square(matrix):
        return False
    product = adjoint(matrix) @ matrix
    return _max_deviation(product, _identity_like(matrix)) <= tolerance


def sum_adjoint_products(mats: Sequence[torch.Tensor]) -> torch.Tensor:
    """
    Compute sum_k K_k^dag K_k.

    Raises
    ------
    ValueError
        If ``mats`` is empty or the matrices have different shapes.
    """
    if len(mats) == 0:
        raise ValueError("Need at least one operator")
    shape = mats[0].shape
    total = torch.zeros(
        (shape[1], shape[1]), dtype=mats[0].dtype, device=mats[0].device
    )
    for i, mat in enumerate(mats):
        if mat.shape != shape:
            raise ValueError(
                f"Operator {i} has shape {tuple(mat.shape)}, "
                f"expected {tuple(shape)}"
            )
        total = total + adjoint(mat) @ mat
    return total


def is_cptp(mats: Sequence[torch.Tensor], tolerance: float) -> bool:
    """True if the operators define a trace-preserving Kraus map."""
    if len(mats) == 0 or not all(is_square(m) for m in mats):
        return False
    try:
        total = sum_adjoint_products(mats)
    except ValueError:
        return False
    return is_identity(total, tolerance)


def superoperator(mats: Sequence[torch.Tensor]) -> torch.Tensor:
    """
    Superoperator S = sum_k K_k (x) conj(K_k) of a Kraus map.

    With row-major vectorization, vec(E(rho)) = S @ vec(rho). Two Kraus
    sets describe the same channel iff their superoperators agree.
    """
    if len(mats) == 0:
        raise ValueError("Need at least one operator")
    dim = mats[0].shape[0]
    superop = torch.zeros(
        (dim * dim, dim * dim), dtype=mats[0].dtype, device=mats[0].device
    )
    for mat in mats:
        superop = superop + torch.kron(mat, mat.conj())
    return superop


__all__ = [
    "as_matrix",
    "adjoint",
    "is_square",
    "is_zero",
    "is_identity",
    "is_unitary",
    "sum_adjoint_products",
    "is_cptp",
    "superoperator",
]
