"""Gate error: a CPTP map split into identity, unitary and Kraus parts.

Applying a general Kraus channel is far more expensive in a simulator than
applying a unitary, and doing nothing is cheaper still. ``GateError``
therefore decomposes an operator-sum representation

    E(rho) = sum_k M_k rho M_k^dag

into a classical mixture of three branches:

* identity: terms proportional to the identity,
* unitary: terms proportional to a unitary U, sampled as a coherent error,
* kraus: the remaining terms, kept as a (renormalized) Kraus channel.

At simulation time one branch is drawn per gate execution and the gate is
replaced by the operations of that branch.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional, Sequence, Tuple

import torch

from ..circuit.core import NoiseOps
from ..config import DEFAULT_TOLERANCE
from ..errors import (
    InvalidChannel,
    InvalidDecomposition,
    NonSquareOperator,
    UnreachableState,
)
from ..linalg.predicates import (
    adjoint,
    as_matrix,
    is_identity,
    is_square,
    is_unitary,
    is_zero,
    sum_adjoint_products,
    superoperator,
)
from ..logging import get_logger
from ..sampling.rng import RngEngine
from .base import QuantumError
from .kraus_error import KrausError
from .unitary_error import UnitaryError

logger = get_logger(__name__)


class ErrorBranch(IntEnum):
    """The closed set of error branches, indexed as in the distribution."""

    IDENTITY = 0
    UNITARY = 1
    KRAUS = 2


@dataclass(frozen=True)
class ErrorProbabilities:
    """
    Weights of the three error branches.

    Instances are immutable; reconfiguring a gate error swaps in a new
    object. The weights are relative: sampling divides them by
    :attr:`total`, so they are not renormalized here.
    """

    identity: float = 1.0
    unitary: float = 0.0
    kraus: float = 0.0

    def __post_init__(self) -> None:
        for name in ("identity", "unitary", "kraus"):
            value = float(getattr(self, name))
            if not math.isfinite(value) or value < 0.0:
                raise ValueError(
                    f"Probability of the {name} branch must be a non-negative "
                    f"finite number, got {value}"
                )
            object.__setattr__(self, name, value)
        if self.total <= 0.0:
            raise ValueError("At least one error branch needs positive weight")

    @property
    def total(self) -> float:
        return self.identity + self.unitary + self.kraus

    def weight(self, branch: ErrorBranch) -> float:
        return self.as_tuple()[int(branch)]

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.identity, self.unitary, self.kraus)

    def as_tensor(self) -> torch.Tensor:
        return torch.tensor(self.as_tuple(), dtype=torch.float64)

    def is_normalized(self, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        return abs(self.total - 1.0) <= tolerance


@dataclass(frozen=True, eq=False)
class KrausDecomposition:
    """
    Result of partitioning a CPTP map.

    Attributes
    ----------
    p_identity, p_unitary, p_kraus:
        Weight of each branch; they sum to 1.
    unitaries:
        Normalized unitary candidates.
    unitary_weights:
        Weights of ``unitaries``, normalized to sum to 1 when
        ``0 < p_unitary < 1``.
    kraus_ops:
        Non-unitary operators, rescaled by ``1/sqrt(p_kraus)`` when
        ``0 < p_kraus < 1`` so they form a CPTP map of their own.
    """

    p_identity: float
    p_unitary: float
    p_kraus: float
    unitaries: Tuple[torch.Tensor, ...] = ()
    unitary_weights: Tuple[float, ...] = ()
    kraus_ops: Tuple[torch.Tensor, ...] = ()

    def validate(self, tolerance: float = DEFAULT_TOLERANCE) -> None:
        """
        Check the partition for internal consistency.

        Raises
        ------
        InvalidDecomposition
            If the weights do not sum to 1, a weight is negative, or a branch
            has weight but no operators.
        """
        total = self.p_identity + self.p_unitary + self.p_kraus
        if abs(total - 1.0) > tolerance:
            raise InvalidDecomposition(
                f"Deduced branch probabilities sum to {total}, not 1"
            )
        for name, value in (
            ("identity", self.p_identity),
            ("unitary", self.p_unitary),
            ("kraus", self.p_kraus),
        ):
            if value < -tolerance:
                raise InvalidDecomposition(
                    f"Deduced {name} probability is negative: {value}"
                )
        if self.p_unitary > tolerance and not self.unitaries:
            raise InvalidDecomposition(
                f"Unitary branch has weight {self.p_unitary} but no unitaries"
            )
        if self.p_kraus > tolerance and not self.kraus_ops:
            raise InvalidDecomposition(
                f"Kraus branch has weight {self.p_kraus} but no Kraus operators"
            )


def decompose_kraus(
    mats: Sequence[Any], tolerance: float = DEFAULT_TOLERANCE
) -> KrausDecomposition:
    """
    Partition a CPTP map into identity, unitary and Kraus branches.

    Each operator ``M`` is weighted by ``p = Re[(M M^dag)[0, 0]]`` and
    rescaled to ``T = M / sqrt(p)``. If ``T`` is the identity its weight
    goes to the identity branch; if ``T`` is unitary it becomes a unitary
    candidate; otherwise ``M`` itself is kept as a Kraus operator. The Kraus
    weight is whatever is left: ``1 - p_identity - p_unitary``.

    An operator with zero weight is dropped if it is the zero matrix. A
    non-zero operator with zero weight has a vanishing first row, cannot be
    unitary, and is kept as a Kraus operator.

    Parameters
    ----------
    mats:
        Kraus operators (tensors, arrays or nested sequences).
    tolerance:
        Shared tolerance of every check in the decomposition.

    Raises
    ------
    NonSquareOperator
        If an operator is not square.
    InvalidChannel
        If ``mats`` is empty, the dimensions differ, or the operators are
        not trace preserving.
    InvalidDecomposition
        If the partition is inconsistent with the CPTP check.
    """
    if len(mats) == 0:
        raise InvalidChannel("A CPTP map needs at least one Kraus operator")

    ops = [as_matrix(mat) for mat in mats]
    for i, mat in enumerate(ops):
        if not is_square(mat):
            raise NonSquareOperator(
                f"Error matrix {i} is not square: {tuple(mat.shape)}"
            )
    dim = ops[0].shape[0]
    for i, mat in enumerate(ops):
        if mat.shape[0] != dim:
            raise InvalidChannel(
                f"Error matrix {i} has dimension {mat.shape[0]}, expected {dim}"
            )

    if not is_identity(sum_adjoint_products(ops), tolerance):
        raise InvalidChannel("Gate error input is not a CPTP map")

    p_identity = 0.0
    p_unitary = 0.0
    unitaries = []
    unitary_weights = []
    kraus_ops = []

    for mat in ops:
        p = (mat @ adjoint(mat))[0, 0].real.item()
        if p <= 0.0:
            if not is_zero(mat, tolerance):
                kraus_ops.append(mat)
            continue
        scaled = mat / math.sqrt(p)
        if is_identity(scaled, tolerance):
            p_identity += p
        elif is_unitary(scaled, tolerance):
            unitaries.append(scaled)
            unitary_weights.append(p)
            p_unitary += p
        else:
            kraus_ops.append(mat)

    p_kraus = 1.0 - p_identity - p_unitary
    if abs(p_kraus) <= tolerance:
        p_kraus = 0.0

    decomposition = KrausDecomposition(
        p_identity=p_identity,
        p_unitary=p_unitary,
        p_kraus=p_kraus,
        unitaries=tuple(unitaries),
        unitary_weights=tuple(unitary_weights),
        kraus_ops=tuple(kraus_ops),
    )
    decomposition.validate(tolerance)

    if 0.0 < p_kraus < 1.0:
        scale = 1.0 / math.sqrt(p_kraus)
        kraus_ops = [scale * k for k in kraus_ops]
    if 0.0 < p_unitary < 1.0:
        unitary_weights = [w / p_unitary for w in unitary_weights]

    return KrausDecomposition(
        p_identity=p_identity,
        p_unitary=p_unitary,
        p_kraus=p_kraus,
        unitaries=tuple(unitaries),
        unitary_weights=tuple(unitary_weights),
        kraus_ops=tuple(kraus_ops),
    )


class GateError(QuantumError):
    """
    Noise of a single gate as a mixture of no error, a unitary error and a
    general Kraus error.

    Parameters
    ----------
    mats:
        Optional Kraus operators of a CPTP map. If given, the error is
        configured with :meth:`set_from_ops`; otherwise it starts as the
        ideal (always identity) error.
    p_error:
        Probability that the channel is applied at all.
    tolerance:
        Tolerance of every check in the decomposition.

    Notes
    -----
    Configure first, then sample. Sampling only reads the model and the
    caller's :class:`RngEngine`, so several workers can sample one model
    concurrently, each with its own engine; reconfiguring while sampling is
    not supported.
    """

    def __init__(
        self,
        mats: Optional[Sequence[Any]] = None,
        p_error: float = 1.0,
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> None:
        self.probabilities = ErrorProbabilities()
        self.unitary_error = UnitaryError()
        self.kraus_error = KrausError(probability=0.0)
        self._dimension: Optional[int] = None
        if mats is not None:
            self.set_from_ops(mats, p_error=p_error, tolerance=tolerance)

    def set_from_ops(
        self,
        mats: Sequence[Any],
        p_error: float = 1.0,
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> None:
        """
        Configure the error from the Kraus operators of a CPTP map.

        The map is partitioned with :func:`decompose_kraus` and then applied
        with probability ``p_error``:

            identity: 1 - p_error + p_error * p_identity
            unitary:  p_error * p_unitary
            kraus:    p_error * p_kraus

        Nothing is modified if any check fails.

        Raises
        ------
        ValueError
            If ``p_error`` is outside [0, 1].
        NonSquareOperator, InvalidChannel, InvalidDecomposition
            See :func:`decompose_kraus`.
        """
        p_error = float(p_error)
        if not 0.0 <= p_error <= 1.0:
            raise ValueError(f"p_error must be in [0, 1], got {p_error}")

        decomposition = decompose_kraus(mats, tolerance=tolerance)

        probabilities = ErrorProbabilities(
            identity=1.0 - p_error + p_error * decomposition.p_identity,
            unitary=p_error * decomposition.p_unitary,
            kraus=p_error * decomposition.p_kraus,
        )
        unitary_error = UnitaryError(errors_after_op=self.unitary_error.errors_after_op)
        unitary_error.configure(
            decomposition.unitaries,
            decomposition.unitary_weights,
            tolerance=tolerance,
        )
        kraus_error = KrausError(
            decomposition.kraus_ops,
            probability=1.0 if decomposition.kraus_ops else 0.0,
            errors_after_op=self.kraus_error.errors_after_op,
        )

        self.probabilities = probabilities
        self.unitary_error = unitary_error
        self.kraus_error = kraus_error
        self._dimension = int(as_matrix(mats[0]).shape[0])

        logger.debug(
            "Decomposed %d operators: p_identity=%.6g p_unitary=%.6g "
            "p_kraus=%.6g (%d unitaries, %d Kraus ops, p_error=%.6g)",
            len(mats),
            decomposition.p_identity,
            decomposition.p_unitary,
            decomposition.p_kraus,
            len(decomposition.unitaries),
            len(decomposition.kraus_ops),
            p_error,
        )

    def set_probabilities(
        self, p_identity: float, p_unitary: float, p_kraus: float
    ) -> None:
        """
        Replace the branch distribution.

        The weights are trusted as given and **not renormalized**. Sampling
        treats them as relative weights, so weights that do not sum to 1
        silently change the effective error rates; a warning is logged in
        that case. Keeping them consistent with the sub-errors is the
        caller's responsibility.
        """
        probabilities = ErrorProbabilities(p_identity, p_unitary, p_kraus)
        if not probabilities.is_normalized(DEFAULT_TOLERANCE):
            logger.warning(
                "Gate error probabilities sum to %.12g, not 1; they are used "
                "as relative weights",
                probabilities.total,
            )
        self.probabilities = probabilities

    def set_unitary(self, err: UnitaryError) -> None:
        """Replace the unitary sub-error without checking the distribution."""
        if not isinstance(err, UnitaryError):
            raise TypeError(f"Expected a UnitaryError, got {type(err).__name__}")
        self.unitary_error = err

    def set_kraus(self, err: KrausError) -> None:
        """Replace the Kraus sub-error without checking the distribution."""
        if not isinstance(err, KrausError):
            raise TypeError(f"Expected a KrausError, got {type(err).__name__}")
        self.kraus_error = err

    def sample_branch(self, rng: RngEngine) -> ErrorBranch:
        """Draw one branch from the distribution (one ``rng`` draw)."""
        index = rng.rand_int(self.probabilities.as_tensor())
        try:
            return ErrorBranch(index)
        except ValueError as exc:
            raise UnreachableState(
                f"Gate error branch index {index} is out of range"
            ) from exc

    def sample_noise(
        self,
        op: Any,
        qubits: Sequence[int],
        rng: RngEngine,
    ) -> NoiseOps:
        branch = self.sample_branch(rng)
        if branch is ErrorBranch.IDENTITY:
            return [op]
        if branch is ErrorBranch.UNITARY:
            return self.unitary_error.sample_noise(op, qubits, rng)
        if branch is ErrorBranch.KRAUS:
            return self.kraus_error.sample_noise(op, qubits, rng)
        raise UnreachableState(f"Unhandled gate error branch {branch!r}")

    @property
    def dimension(self) -> Optional[int]:
        """Hilbert-space dimension of the error operators, if known."""
        if self.unitary_error.unitaries:
            return int(self.unitary_error.unitaries[0].shape[0])
        if self.kraus_error.kraus_ops:
            return int(self.kraus_error.kraus_ops[0].shape[0])
        return self._dimension

    @property
    def num_qubits(self) -> Optional[int]:
        dim = self.dimension
        if dim is None:
            return None
        n = dim.bit_length() - 1
        if 1 << n != dim:
            raise ValueError(f"Dimension {dim} is not a power of 2")
        return n

    def kraus_operators(self) -> Tuple[torch.Tensor, ...]:
        """
        Operator-sum representation of the whole mixture.

        Branches that would leave the gate unchanged (a unitary branch with
        no unitaries, an inactive Kraus branch) count as identity.

        Raises
        ------
        ValueError
            If the dimension of the error is unknown.
        """
        dim = self.dimension
        if dim is None:
            raise ValueError("Gate error has no operators; dimension is unknown")

        total = self.probabilities.total
        w_identity = self.probabilities.identity / total
        w_unitary = self.probabilities.unitary / total
        w_kraus = self.probabilities.kraus / total

        ops = []
        unitaries = self.unitary_error.unitaries
        u_total = sum(self.unitary_error.probabilities)
        if w_unitary > 0.0 and unitaries and u_total > 0.0:
            for u, w in zip(unitaries, self.unitary_error.probabilities):
                if w > 0.0:
                    ops.append(math.sqrt(w_unitary * w / u_total) * u)
        else:
            w_identity += w_unitary

        activation = self.kraus_error.probability
        if w_kraus > 0.0 and self.kraus_error.kraus_ops and activation > 0.0:
            for k in self.kraus_error.kraus_ops:
                ops.append(math.sqrt(w_kraus * activation) * k)
            w_identity += w_kraus * (1.0 - activation)
        else:
            w_identity += w_kraus

        if w_identity > 0.0:
            reference = ops[0] if ops else as_matrix(torch.eye(dim))
            eye = torch.eye(dim, dtype=reference.dtype, device=reference.device)
            ops.insert(0, math.sqrt(w_identity) * eye)
        return tuple(ops)

    def superoperator(self) -> torch.Tensor:
        """Superoperator of the mixture; see :func:`gatenoise.linalg.superoperator`."""
        return superoperator(self.kraus_operators())

    def __repr__(self) -> str:
        p = self.probabilities
        return (
            f"GateError(p_identity={p.identity:.6g}, p_unitary={p.unitary:.6g}, "
            f"p_kraus={p.kraus:.6g}, unitary_error={self.unitary_error!r}, "
            f"kraus_error={self.kraus_error!r})"
        )


__all__ = [
    "ErrorBranch",
    "ErrorProbabilities",
    "KrausDecomposition",
    "decompose_kraus",
    "GateError",
]
