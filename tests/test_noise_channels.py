"""Tests for the standard Kraus channel builders."""

from __future__ import annotations

import math

import pytest
import torch

from gatenoise.linalg import is_cptp
from gatenoise.noise import (
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

SINGLE_PARAMETER = [
    bit_flip_kraus,
    phase_flip_kraus,
    bit_phase_flip_kraus,
    depolarizing_kraus,
    amplitude_damping_kraus,
    phase_damping_kraus,
    two_qubit_depolarizing_kraus,
]


@pytest.mark.parametrize("builder", SINGLE_PARAMETER)
@pytest.mark.parametrize("p", [0.0, 0.3, 1.0])
def test_channels_are_trace_preserving(builder, p):
    ops = builder(p)
    assert all(k.dtype == torch.complex128 for k in ops)
    assert is_cptp(ops, 1e-12)


@pytest.mark.parametrize("builder", SINGLE_PARAMETER)
@pytest.mark.parametrize("p", [-0.1, 1.1])
def test_channel_parameter_validation(builder, p):
    with pytest.raises(ValueError, match=r"must be in \[0, 1\]"):
        builder(p)


def test_bit_flip_operators():
    k0, k1 = bit_flip_kraus(0.2)
    assert torch.allclose(k0, math.sqrt(0.8) * torch.eye(2, dtype=k0.dtype))
    assert torch.allclose(
        k1, math.sqrt(0.2) * torch.tensor([[0, 1], [1, 0]], dtype=k1.dtype)
    )


def test_zero_probability_terms_are_skipped():
    assert len(depolarizing_kraus(0.0)) == 1
    assert len(bit_flip_kraus(1.0)) == 1


def test_two_qubit_depolarizing_shape():
    ops = two_qubit_depolarizing_kraus(0.5)
    assert len(ops) == 16
    assert all(k.shape == (4, 4) for k in ops)


def test_generalized_amplitude_damping():
    ops = generalized_amplitude_damping_kraus(0.5, 0.3)
    assert len(ops) == 4
    assert is_cptp(ops, 1e-12)
    with pytest.raises(ValueError, match="gamma"):
        generalized_amplitude_damping_kraus(1.1, 0.5)
    with pytest.raises(ValueError, match="p_excited"):
        generalized_amplitude_damping_kraus(0.5, -0.1)


def test_amplitude_damping_limits():
    k0, _ = amplitude_damping_kraus(0.0)
    assert torch.allclose(k0, torch.eye(2, dtype=k0.dtype))
    _, k1 = amplitude_damping_kraus(1.0)
    assert k1[0, 1].real.item() == pytest.approx(1.0)


class TestPauliKraus:
    def test_custom_pauli_channel(self):
        ops = pauli_kraus({"II": 0.9, "XZ": 0.1})
        assert len(ops) == 2
        assert is_cptp(ops, 1e-12)

    def test_rejects_unnormalized(self):
        with pytest.raises(ValueError, match="sum to 1"):
            pauli_kraus({"I": 0.5, "X": 0.4})

    def test_rejects_mixed_lengths(self):
        with pytest.raises(ValueError, match="equal length"):
            pauli_kraus({"I": 0.5, "XX": 0.5})

    def test_rejects_bad_labels(self):
        with pytest.raises(ValueError, match="Invalid Pauli label"):
            pauli_kraus({"I": 0.5, "Q": 0.5})

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            pauli_kraus({})
