"""General (non-unitary) Kraus error."""

from __future__ import annotations

from typing import Any, Sequence

import torch

from ..circuit.core import KRAUS_OP, GateOp, NoiseOps
from ..config import DEFAULT_TOLERANCE
from ..errors import InvalidChannel, NonSquareOperator
from ..linalg.predicates import as_matrix, is_cptp, is_square
from ..sampling.rng import RngEngine
from .base import QuantumError


class KrausError(QuantumError):
    """
    Kraus channel applied with an activation probability.

    When it fires, the gate is followed by a ``"kraus"`` operation carrying
    the full operator set; the simulation engine picks the branch. With
    probability ``1 - probability`` the gate runs clean.
    """

    def __init__(
        self,
        kraus_ops: Sequence[Any] = (),
        probability: float = 1.0,
        errors_after_op: bool = True,
    ) -> None:
        self.kraus_ops: tuple[torch.Tensor, ...] = ()
        self.probability = 1.0
        self.errors_after_op = errors_after_op
        self.set_kraus(kraus_ops)
        self.set_probability(probability)

    def configure(self, kraus_ops: Sequence[Any]) -> None:
        self.set_kraus(kraus_ops)

    def set_kraus(self, mats: Sequence[Any]) -> None:
        """
        Replace the Kraus operators.

        Raises
        ------
        NonSquareOperator
            If a matrix is not square.
        InvalidChannel
            If the matrices have different dimensions.
        """
        converted = []
        for i, mat in enumerate(mats):
            mat = as_matrix(mat)
            if not is_square(mat):
                raise NonSquareOperator(
                    f"Kraus matrix {i} is not square: {tuple(mat.shape)}"
                )
            if converted and mat.shape != converted[0].shape:
                raise InvalidChannel(
                    f"Kraus matrix {i} has shape {tuple(mat.shape)}, "
                    f"expected {tuple(converted[0].shape)}"
                )
            converted.append(mat)
        self.kraus_ops = tuple(converted)

    def set_probability(self, p: float) -> None:
        """Set the activation probability, which must lie in [0, 1]."""
        p = float(p)
        if not 0.0 <= p <= 1.0:
            raise ValueError(f"Kraus error probability must be in [0, 1], got {p}")
        self.probability = p

    def is_cptp(self, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        return is_cptp(self.kraus_ops, tolerance)

    def sample_noise(
        self,
        op: Any,
        qubits: Sequence[int],
        rng: RngEngine,
    ) -> NoiseOps:
        if not self.kraus_ops or self.probability == 0.0:
            return [op]
        if self.probability < 1.0 and rng.rand() >= self.probability:
            return [op]
        error_op = GateOp.matrix_op(KRAUS_OP, qubits, self.kraus_ops)
        return self._with_error(op, error_op)

    def __repr__(self) -> str:
        return (
            f"KrausError(num_kraus={len(self.kraus_ops)}, "
            f"probability={self.probability})"
        )


__all__ = ["KrausError"]
