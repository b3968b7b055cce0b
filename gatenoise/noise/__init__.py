"""Gate error models.

A :class:`GateError` splits a CPTP map into no error, a coherent
:class:`UnitaryError` and a general :class:`KrausError`, and samples one of
them per gate execution.
"""

from .base import QuantumError
from .channels import (
    amplitude_damping_kraus,
    bit_flip_kraus,
    bit_phase_flip_kraus,
    depolarizing_kraus,
    generalized_amplitude_damping_kraus,
    pauli_kraus,
    phase_damping_kraus,
    phase_flip_kraus,
    two_qubit_depolarizing_kraus,
)
from .gate_error import (
    ErrorBranch,
    ErrorProbabilities,
    GateError,
    KrausDecomposition,
    decompose_kraus,
)
from .kraus_error import KrausError
from .unitary_error import UnitaryError

__all__ = [
    "QuantumError",
    "GateError",
    "ErrorBranch",
    "ErrorProbabilities",
    "KrausDecomposition",
    "decompose_kraus",
    "UnitaryError",
    "KrausError",
    "pauli_kraus",
    "bit_flip_kraus",
    "phase_flip_kraus",
    "bit_phase_flip_kraus",
    "depolarizing_kraus",
    "two_qubit_depolarizing_kraus",
    "amplitude_damping_kraus",
    "phase_damping_kraus",
    "generalized_amplitude_damping_kraus",
]
