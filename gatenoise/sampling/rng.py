"""Reseedable random number engine for noise sampling."""

from __future__ import annotations

import math
from typing import Optional, Sequence

import torch


class RngEngine:
    """
    Random source handed to ``sample_noise`` calls.

    Wraps a CPU ``torch.Generator`` so a run is reproducible from its seed.
    Each simulation worker should own its own engine; the engine itself is
    not safe to share between threads.

    Parameters
    ----------
    seed:
        Initial seed. If None, a non-deterministic seed is drawn and can be
        read back from :attr:`seed`.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._generator = torch.Generator(device="cpu")
        self.set_seed(seed)

    @property
    def seed(self) -> int:
        """Seed the engine was last (re)initialized with."""
        return self._generator.initial_seed()

    @property
    def generator(self) -> torch.Generator:
        return self._generator

    def set_seed(self, seed: Optional[int] = None) -> None:
        """Reseed the engine. ``None`` picks a fresh non-deterministic seed."""
        if seed is None:
            self._generator.seed()
        else:
            self._generator.manual_seed(int(seed))

    def rand(self) -> float:
        """Uniform float in [0, 1)."""
        return torch.rand(1, generator=self._generator, dtype=torch.float64).item()

    def rand_int(self, weights: Sequence[float] | torch.Tensor) -> int:
        """
        Draw an index with probability proportional to ``weights``.

        Weights are relative: they are divided by their sum, so they need
        not be normalized.

        Raises
        ------
        ValueError
            If ``weights`` is empty, has a negative or non-finite entry, or
            sums to zero.
        """
        probs = torch.as_tensor(weights, dtype=torch.float64).flatten().cpu()
        if probs.numel() == 0:
            raise ValueError("Cannot sample from an empty distribution")
        if not torch.all(torch.isfinite(probs)).item():
            raise ValueError(f"Weights must be finite, got {probs.tolist()}")
        if torch.any(probs < 0).item():
            raise ValueError(f"Weights must be non-negative, got {probs.tolist()}")
        total = probs.sum().item()
        if total <= 0.0 or not math.isfinite(total):
            raise ValueError("Weights must have a positive sum")

        return int(
            torch.multinomial(probs, num_samples=1, generator=self._generator).item()
        )

    def __repr__(self) -> str:
        return f"RngEngine(seed={self.seed})"


__all__ = ["RngEngine"]
