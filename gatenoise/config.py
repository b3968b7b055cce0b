"""Package-wide numerical defaults."""

from __future__ import annotations

import torch

# Shared by every predicate in a single decomposition call.
DEFAULT_TOLERANCE: float = 1e-10

DEFAULT_COMPLEX_DTYPE: torch.dtype = torch.complex128

__all__ = ["DEFAULT_TOLERANCE", "DEFAULT_COMPLEX_DTYPE"]
