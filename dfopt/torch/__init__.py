"""PyTorch integration for dfopt.

Lets a criterion written with tensors, or the parameters of a small
``torch.nn.Module``, be minimized by the derivative-free engine.

Example:
    >>> import torch
    >>> from dfopt.torch import minimize_module
    >>> layer = torch.nn.Linear(1, 1, bias=False)
    >>> xs = torch.tensor([[1.0], [2.0]])
    >>> ys = torch.tensor([[2.0], [4.0]])
    >>> res = minimize_module(layer, lambda m: torch.mean((m(xs) - ys) ** 2))
    >>> round(layer.weight.item(), 3)
    2.0
"""

from dfopt.torch.criterion import TorchCriterion, minimize_module
from dfopt.torch.utils import flatten_parameters, to_scalar, to_tensor

__all__ = [
    "TorchCriterion",
    "minimize_module",
    "flatten_parameters",
    "to_scalar",
    "to_tensor",
]
