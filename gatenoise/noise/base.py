"""Base class for sampled gate errors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

from ..circuit.core import GateOp, NoiseOps
from ..sampling.rng import RngEngine


class QuantumError(ABC):
    """
    Capability interface of an error that can replace a gate operation.

    Subclasses hold read-only configuration while sampling; all randomness
    comes from the ``rng`` argument.
    """

    errors_after_op: bool = True

    @abstractmethod
    def sample_noise(
        self,
        op: Any,
        qubits: Sequence[int],
        rng: RngEngine,
    ) -> NoiseOps:
        """
        Sample a noisy implementation of ``op``.

        Args:
            op: The gate operation being replaced. Passed through unchanged.
            qubits: Qubits the error acts on.
            rng: Random source; the only entropy consumed.

        Returns:
            Replacement operations, in application order.
        """

    def _with_error(self, op: Any, error_op: GateOp) -> NoiseOps:
        """Place ``error_op`` after ``op``, or before it if configured so."""
        if self.errors_after_op:
            return [op, error_op]
        return [error_op, op]
