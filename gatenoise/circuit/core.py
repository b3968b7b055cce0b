"""Gate operations exchanged with the simulation engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import torch

# Names of the operations produced by error sampling.
UNITARY_OP = "unitary"
KRAUS_OP = "kraus"


@dataclass(frozen=True)
class GateOp:
    """
    A single operation applied to a set of qubits.

    This is plain circuit plumbing: the gate name, its target qubits,
    optional numeric parameters and, for matrix operations produced by
    error sampling, the operator matrices.

    Attributes
    ----------
    name:
        Gate name, e.g. "X", "CNOT", or ``"unitary"`` / ``"kraus"`` for
        sampled error operations.
    qubits:
        Target qubit indices (0-based).
    params:
        Optional float parameters such as rotation angles.
    mats:
        Operator matrices. One matrix for ``"unitary"``, the full Kraus set
        for ``"kraus"``. Not part of equality comparisons.
    """

    name: str
    qubits: Tuple[int, ...]
    params: Optional[Tuple[float, ...]] = None
    mats: Tuple[torch.Tensor, ...] = field(default=(), compare=False)

    @classmethod
    def matrix_op(
        cls, name: str, qubits: Sequence[int], mats: Sequence[torch.Tensor]
    ) -> "GateOp":
        """Build an operation carrying matrices, normalizing the qubit tuple."""
        return cls(
            name=name,
            qubits=tuple(int(q) for q in qubits),
            mats=tuple(mats),
        )


# Replacement operations returned by a single error sample.
NoiseOps = List[GateOp]
