"""Exception types raised while building and sampling gate errors.

The configuration-time errors subclass :class:`ValueError`, so callers that
only guard against bad input with ``except ValueError`` keep working.
"""

from __future__ import annotations


class GateNoiseError(Exception):
    """Base class for all gatenoise errors."""


class InvalidChannel(GateNoiseError, ValueError):
    """The Kraus operators do not form a CPTP map (sum K^dag K != I)."""


class NonSquareOperator(GateNoiseError, ValueError):
    """An operator passed as a Kraus or unitary matrix is not square."""


class InvalidDecomposition(GateNoiseError, ValueError):
    """
    The identity / unitary / Kraus partition disagrees with the global
    CPTP check, or a branch carries weight without any operators.
    """


class UnreachableState(GateNoiseError, RuntimeError):
    """The sampled error branch is outside the closed branch set."""


__all__ = [
    "GateNoiseError",
    "InvalidChannel",
    "NonSquareOperator",
    "InvalidDecomposition",
    "UnreachableState",
]
