"""Randomness sources for noise sampling."""

from .rng import RngEngine

__all__ = ["RngEngine"]
