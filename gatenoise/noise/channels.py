"""Standard CPTP maps given as Kraus operator tuples.

These are the textbook channels, ready to be passed to
:class:`gatenoise.noise.GateError`. Each function validates its parameters
and returns complex128 operators on the default device.
"""

from __future__ import annotations

import math
from typing import Mapping, Tuple

import torch

from gatenoise.core.device import default_device
from gatenoise.gates.standard import pauli

KrausOps = Tuple[torch.Tensor, ...]


def _check_probability(name: str, value: float) -> None:
    if value < 0.0 or value > 1.0:
        raise ValueError(f"{name} must be in [0, 1], got {value}")


def _matrix(entries) -> torch.Tensor:
    dev = default_device()
    return torch.tensor(
        entries, dtype=dev.complex_dtype, device=dev.as_torch_device()
    )


def _pauli(label: str) -> torch.Tensor:
    dev = default_device()
    return pauli(label, dtype=dev.complex_dtype, device=dev.as_torch_device())


def pauli_kraus(terms: Mapping[str, float]) -> KrausOps:
    """
    Pauli channel E(rho) = sum_P p_P P rho P from a label -> probability map.

    Labels are Pauli strings of equal length (``"X"``, ``"IZ"``, ...). Terms
    with zero probability are skipped.

    Raises
    ------
    ValueError
        If a probability is outside [0, 1], the probabilities do not sum to
        1, or the labels have different lengths.
    """
    if not terms:
        raise ValueError("Pauli channel needs at least one term")
    lengths = {len(label) for label in terms}
    if len(lengths) != 1:
        raise ValueError(f"Pauli labels must have equal length, got {sorted(terms)}")
    for label, p in terms.items():
        _check_probability(f"Probability of {label!r}", p)
    total = sum(terms.values())
    if abs(total - 1.0) > 1e-12:
        raise ValueError(f"Pauli channel probabilities must sum to 1, got {total}")

    return tuple(
        math.sqrt(p) * _pauli(label) for label, p in terms.items() if p > 0.0
    )


def bit_flip_kraus(p: float) -> KrausOps:
    """K0 = sqrt(1 - p) I, K1 = sqrt(p) X."""
    _check_probability("Bit-flip probability p", p)
    return pauli_kraus({"I": 1.0 - p, "X": p})


def phase_flip_kraus(p: float) -> KrausOps:
    """K0 = sqrt(1 - p) I, K1 = sqrt(p) Z."""
    _check_probability("Phase-flip probability p", p)
    return pauli_kraus({"I": 1.0 - p, "Z": p})


def bit_phase_flip_kraus(p: float) -> KrausOps:
    """K0 = sqrt(1 - p) I, K1 = sqrt(p) Y."""
    _check_probability("Bit-phase-flip probability p", p)
    return pauli_kraus({"I": 1.0 - p, "Y": p})


def depolarizing_kraus(p: float) -> KrausOps:
    """
    Single-qubit depolarizing channel:

        E(rho) = (1 - p) rho + (p / 3) (X rho X + Y rho Y + Z rho Z).
    """
    _check_probability("Depolarizing probability p", p)
    return pauli_kraus({"I": 1.0 - p, "X": p / 3.0, "Y": p / 3.0, "Z": p / 3.0})


def two_qubit_depolarizing_kraus(p: float) -> KrausOps:
    """
    Two-qubit depolarizing channel: identity with probability 1 - p, each of
    the 15 non-identity two-qubit Paulis with probability p / 15.
    """
    _check_probability("Depolarizing probability p", p)
    terms = {}
    for first in "IXYZ":
        for second in "IXYZ":
            label = first + second
            terms[label] = 1.0 - p if label == "II" else p / 15.0
    return pauli_kraus(terms)


def amplitude_damping_kraus(gamma: float) -> KrausOps:
    """
    Decay |1> -> |0> with probability gamma:

        K0 = [[1, 0], [0, sqrt(1 - gamma)]],
        K1 = [[0, sqrt(gamma)], [0, 0]].
    """
    _check_probability("Amplitude damping parameter gamma", gamma)
    k0 = _matrix([[1.0, 0.0], [0.0, math.sqrt(1.0 - gamma)]])
    k1 = _matrix([[0.0, math.sqrt(gamma)], [0.0, 0.0]])
    return (k0, k1)


def phase_damping_kraus(gamma: float) -> KrausOps:
    """
    Loss of coherence without population change:

        K0 = [[1, 0], [0, sqrt(1 - gamma)]],
        K1 = [[0, 0], [0, sqrt(gamma)]].
    """
    _check_probability("Phase damping parameter gamma", gamma)
    k0 = _matrix([[1.0, 0.0], [0.0, math.sqrt(1.0 - gamma)]])
    k1 = _matrix([[0.0, 0.0], [0.0, math.sqrt(gamma)]])
    return (k0, k1)


def generalized_amplitude_damping_kraus(gamma: float, p_excited: float) -> KrausOps:
    """
    Amplitude damping towards a thermal state with excited population
    ``p_excited``. With p = 1 - p_excited:

        K0 = sqrt(p) [[1, 0], [0, sqrt(1 - gamma)]]
        K1 = sqrt(p) [[0, sqrt(gamma)], [0, 0]]
        K2 = sqrt(1 - p) [[sqrt(1 - gamma), 0], [0, 1]]
        K3 = sqrt(1 - p) [[0, 0], [sqrt(gamma), 0]]
    """
    _check_probability("gamma", gamma)
    _check_probability("p_excited", p_excited)
    a = math.sqrt(1.0 - p_excited)
    b = math.sqrt(p_excited)
    s = math.sqrt(gamma)
    c = math.sqrt(1.0 - gamma)
    return (
        _matrix([[a, 0.0], [0.0, a * c]]),
        _matrix([[0.0, a * s], [0.0, 0.0]]),
        _matrix([[b * c, 0.0], [0.0, b]]),
        _matrix([[0.0, 0.0], [b * s, 0.0]]),
    )


__all__ = [
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
