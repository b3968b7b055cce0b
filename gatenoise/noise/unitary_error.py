"""Coherent error: a random choice among unitary matrices."""

from __future__ import annotations

import math
from typing import Any, Optional, Sequence

import torch

from ..circuit.core import UNITARY_OP, GateOp, NoiseOps
from ..config import DEFAULT_TOLERANCE
from ..errors import InvalidChannel, NonSquareOperator
from ..linalg.predicates import as_matrix, is_square, is_unitary
from ..sampling.rng import RngEngine
from .base import QuantumError


class UnitaryError(QuantumError):
    """
    Mixture of unitary errors.

    Each sample picks unitary ``U_i`` with probability proportional to
    ``probabilities[i]`` and appends it to the gate as a ``"unitary"``
    operation on the same qubits.

    Parameters
    ----------
    unitaries:
        Candidate unitary matrices. May be empty, in which case sampling
        returns the gate unchanged.
    probabilities:
        Relative weight of each unitary. Defaults to uniform.
    tolerance:
        Tolerance of the unitarity check.
    errors_after_op:
        If False, the error operation is placed before the gate.
    """

    def __init__(
        self,
        unitaries: Sequence[Any] = (),
        probabilities: Optional[Sequence[float]] = None,
        tolerance: float = DEFAULT_TOLERANCE,
        errors_after_op: bool = True,
    ) -> None:
        self.unitaries: tuple[torch.Tensor, ...] = ()
        self.probabilities: tuple[float, ...] = ()
        self.errors_after_op = errors_after_op
        if len(unitaries) > 0:
            self.configure(unitaries, probabilities, tolerance=tolerance)

    def configure(
        self,
        unitaries: Sequence[Any],
        probabilities: Optional[Sequence[float]] = None,
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> None:
        """Set unitaries and their weights together."""
        if probabilities is None:
            n = len(unitaries)
            probabilities = [1.0 / n] * n if n else []
        if len(probabilities) != len(unitaries):
            raise ValueError(
                f"Got {len(probabilities)} probabilities for "
                f"{len(unitaries)} unitaries"
            )
        self.set_unitaries(unitaries, tolerance=tolerance)
        self.set_probabilities(probabilities)

    def set_unitaries(
        self, mats: Sequence[Any], tolerance: float = DEFAULT_TOLERANCE
    ) -> None:
        """
        Replace the candidate unitaries.

        Raises
        ------
        NonSquareOperator
            If a matrix is not square.
        InvalidChannel
            If a matrix is not unitary within ``tolerance``.
        """
        converted = []
        for i, mat in enumerate(mats):
            mat = as_matrix(mat)
            if not is_square(mat):
                raise NonSquareOperator(
                    f"Unitary error matrix {i} is not square: {tuple(mat.shape)}"
                )
            if not is_unitary(mat, tolerance):
                raise InvalidChannel(f"Unitary error matrix {i} is not unitary")
            converted.append(mat)
        self.unitaries = tuple(converted)

    def set_probabilities(self, probs: Sequence[float]) -> None:
        """Replace the per-unitary weights (not renormalized)."""
        values = tuple(float(p) for p in probs)
        for p in values:
            if p < 0.0 or not math.isfinite(p):
                raise ValueError(
                    f"Unitary error probabilities must be non-negative, got {p}"
                )
        self.probabilities = values

    def sample_noise(
        self,
        op: Any,
        qubits: Sequence[int],
        rng: RngEngine,
    ) -> NoiseOps:
        if not self.unitaries:
            return [op]
        if len(self.probabilities) != len(self.unitaries):
            raise ValueError(
                f"UnitaryError has {len(self.unitaries)} unitaries but "
                f"{len(self.probabilities)} probabilities"
            )
        index = rng.rand_int(self.probabilities)
        error_op = GateOp.matrix_op(UNITARY_OP, qubits, (self.unitaries[index],))
        return self._with_error(op, error_op)

    def __repr__(self) -> str:
        return (
            f"UnitaryError(num_unitaries={len(self.unitaries)}, "
            f"probabilities={list(self.probabilities)})"
        )


__all__ = ["UnitaryError"]
