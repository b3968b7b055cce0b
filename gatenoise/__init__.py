"""gatenoise - PyTorch-native gate error decomposition and sampling."""

__version__ = "0.1.0"

from .circuit import KRAUS_OP, UNITARY_OP, GateOp, NoiseOps
from .config import DEFAULT_COMPLEX_DTYPE, DEFAULT_TOLERANCE
from .core import Device, default_device, device
from .errors import (
    GateNoiseError,
    InvalidChannel,
    InvalidDecomposition,
    NonSquareOperator,
    UnreachableState,
)
from .logging import configure_logging, get_logger, set_log_level
from .noise import (
    ErrorBranch,
    ErrorProbabilities,
    GateError,
    KrausDecomposition,
    KrausError,
    QuantumError,
    UnitaryError,
    amplitude_damping_kraus,
    bit_flip_kraus,
    bit_phase_flip_kraus,
    decompose_kraus,
    depolarizing_kraus,
    generalized_amplitude_damping_kraus,
    pauli_kraus,
    phase_damping_kraus,
    phase_flip_kraus,
    two_qubit_depolarizing_kraus,
)
from .sampling import RngEngine

__all__ = [
    "__version__",
    # Circuit
    "GateOp",
    "NoiseOps",
    "UNITARY_OP",
    "KRAUS_OP",
    # Config / devices
    "DEFAULT_TOLERANCE",
    "DEFAULT_COMPLEX_DTYPE",
    "Device",
    "device",
    "default_device",
    # Errors
    "GateNoiseError",
    "InvalidChannel",
    "NonSquareOperator",
    "InvalidDecomposition",
    "UnreachableState",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
    # Noise
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
    # Sampling
    "RngEngine",
]
