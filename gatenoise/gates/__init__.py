"""Standard gate matrices."""

from .standard import H, I, X, Y, Z, pauli

__all__ = ["I", "X", "Y", "Z", "H", "pauli"]
