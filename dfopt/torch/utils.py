"""Utility functions for PyTorch integration with dfopt."""

from __future__ import annotations

from typing import Iterable, Optional

import numpy as np
import torch


def infer_device(device: Optional[torch.device]) -> torch.device:
    """
    Infer the PyTorch device to use.

    Parameters
    ----------
    device:
        Optional PyTorch device. If None, the CPU is used.

    Returns
    -------
    torch.device
        The device to use for computation.
    """
    if device is not None:
        return device
    return torch.device("cpu")


def to_tensor(
    x: np.ndarray,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> torch.Tensor:
    """
    Convert a numpy point to a tensor on the requested device.

    The tensor is a copy, so the minimizer may keep overwriting its buffer.
    """
    return torch.tensor(x, dtype=dtype, device=infer_device(device))


def to_scalar(value: torch.Tensor | float) -> float:
    """
    Convert a criterion value to a Python float.

    Raises
    ------
    ValueError
        If a tensor value has more than one element.
    """
    if isinstance(value, torch.Tensor):
        if value.numel() != 1:
            raise ValueError(
                f"criterion must return a scalar, got shape {tuple(value.shape)}"
            )
        return float(value.detach().cpu().item())
    return float(value)


def trainable_parameters(module: torch.nn.Module) -> list[torch.nn.Parameter]:
    """Return the parameters of module that require gradients."""
    return [p for p in module.parameters() if p.requires_grad]


def flatten_parameters(params: Iterable[torch.nn.Parameter]) -> np.ndarray:
    """Concatenate parameters into one float64 numpy vector."""
    vec = torch.nn.utils.parameters_to_vector(params)
    return vec.detach().cpu().numpy().astype(np.float64)


__all__ = [
    "infer_device",
    "to_tensor",
    "to_scalar",
    "trainable_parameters",
    "flatten_parameters",
]
