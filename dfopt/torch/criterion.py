"""Minimize PyTorch-valued criteria with the direction-set method.

Useful for losses that are not differentiable (step functions, rank
statistics, quantized models) where autograd is of no help.
"""

from __future__ import annotations

import math
from typing import Callable, Optional

import numpy as np
import torch

from dfopt.logging import get_logger
from dfopt.optimize import OptimizeResult, PowellOptions, powell

from .utils import flatten_parameters, to_scalar, to_tensor, trainable_parameters

logger = get_logger(__name__)


class TorchCriterion:
    """
    Wrap a function of a 1-D tensor as a numpy vector criterion.

    Args:
        fn: Function mapping a 1-D tensor to a scalar tensor or float.
        device: Device on which fn expects its input. Defaults to CPU.
        dtype: Floating dtype of the tensor passed to fn.

    Example:
        >>> import numpy as np
        >>> import torch
        >>> crit = TorchCriterion(lambda t: torch.sum((t - 1.0) ** 2))
        >>> crit(np.zeros(3))
        3.0
    """

    def __init__(
        self,
        fn: Callable[[torch.Tensor], torch.Tensor | float],
        device: Optional[torch.device] = None,
        dtype: torch.dtype = torch.float64,
    ) -> None:
        self.fn = fn
        self.device = device
        self.dtype = dtype

    def __call__(self, x: np.ndarray) -> float:
        with torch.no_grad():
            value = self.fn(to_tensor(x, dtype=self.dtype, device=self.device))
        return to_scalar(value)


def minimize_module(
    module: torch.nn.Module,
    loss_fn: Callable[[torch.nn.Module], torch.Tensor | float],
    maxiter: int = 200,
    tol: float = 1e-8,
    critlim: float = -math.inf,
    options: Optional[PowellOptions] = None,
) -> OptimizeResult:
    """
    Tune the trainable parameters of a module without gradients.

    The parameters are flattened into one vector, minimized with
    :func:`dfopt.optimize.powell`, and the best vector is written back into
    the module.

    Args:
        module: Module whose trainable parameters are adjusted in place.
        loss_fn: Called with the module; returns the loss to minimize.
        maxiter: Outer iteration limit for powell.
        tol: Convergence tolerance for powell.
        critlim: Stop once the loss is at or below this.
        options: Line-search settings for powell.

    Returns:
        The powell result; ``result.x`` is the flattened best parameters.

    Raises:
        ValueError: If the module has no trainable parameters.
    """
    params = trainable_parameters(module)
    if not params:
        raise ValueError("module has no trainable parameters")
    reference = params[0]

    def load(vec: np.ndarray) -> None:
        # Copy: vector_to_parameters makes each parameter a view of the tensor.
        tensor = to_tensor(vec, dtype=reference.dtype, device=reference.device)
        with torch.no_grad():
            torch.nn.utils.vector_to_parameters(tensor, params)

    def criterion(vec: np.ndarray) -> float:
        load(vec)
        with torch.no_grad():
            return to_scalar(loss_fn(module))

    x0 = flatten_parameters(params)
    result = powell(
        criterion,
        x0,
        maxiter=maxiter,
        tol=tol,
        critlim=critlim,
        options=options,
    )
    load(result.x)
    logger.info("Module tuned to loss %g over %d parameters", result.fun, x0.size)
    return result


__all__ = ["TorchCriterion", "minimize_module"]
