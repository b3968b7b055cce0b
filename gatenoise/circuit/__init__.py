"""Circuit operation types."""

from .core import KRAUS_OP, UNITARY_OP, GateOp, NoiseOps

__all__ = ["GateOp", "NoiseOps", "UNITARY_OP", "KRAUS_OP"]
