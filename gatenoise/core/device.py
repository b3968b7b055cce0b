"""Device abstraction for error matrices."""

from __future__ import annotations

import torch

from gatenoise.config import DEFAULT_COMPLEX_DTYPE


class Device:
    """
    Logical device holding error matrices: a PyTorch device plus the complex
    dtype that Kraus and unitary operators are stored in.

    Attributes should not be modified after construction.
    """

    def __init__(
        self,
        name: str,
        torch_device: torch.device,
        complex_dtype: torch.dtype = DEFAULT_COMPLEX_DTYPE,
    ) -> None:
        """
        Initialize a Device.

        Args:
            name: Logical device name ("cpu" or "cuda").
            torch_device: Underlying PyTorch device.
            complex_dtype: Complex dtype for operator matrices. Decomposition
                tolerances around 1e-10 need double precision.
        """
        if not complex_dtype.is_complex:
            raise ValueError(f"complex_dtype must be complex, got {complex_dtype}")
        self.name = name
        self.torch_device = torch_device
        self.complex_dtype = complex_dtype

    def __repr__(self) -> str:
        return (
            f"Device(name={self.name!r}, torch_device={self.torch_device}, "
            f"complex_dtype={self.complex_dtype})"
        )

    def as_torch_device(self) -> torch.device:
        """Return the underlying PyTorch device."""
        return self.torch_device


def device(name: str) -> Device:
    """
    Create a Device from its name.

    Supported names:
        - "cpu"
        - "cuda" (only if CUDA is available)

    Raises:
        RuntimeError: If "cuda" is requested but CUDA is not available.
        ValueError: If the device name is not supported.
    """
    if name == "cpu":
        return Device(name="cpu", torch_device=torch.device("cpu"))
    if name == "cuda":
        if not torch.cuda.is_available():
            raise RuntimeError(
                "CUDA device requested but torch.cuda.is_available() is False"
            )
        return Device(name="cuda", torch_device=torch.device("cuda"))
    raise ValueError(
        f"Unsupported device name: {name!r}. Supported devices: ['cpu', 'cuda']"
    )


def default_device() -> Device:
    """Return the default (CPU, complex128) device."""
    return device("cpu")
