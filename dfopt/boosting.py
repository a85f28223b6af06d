"""Optimal model weight for binary boosting with confidence-rated models.

At each boosting round the new model's weight ``alpha`` minimizes the
exponential loss ``sum_i w_i * exp(-alpha * u_i)`` where ``w`` is the current
case distribution and ``u_i = h_i * y_i`` is the model's hard-limited
prediction times the true label (+1 or -1). The search uses the bracketing
and Brent routines of :mod:`dfopt.optimize`.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from dfopt.logging import get_logger
from dfopt.optimize import bracket_minimum, brent_refine

logger = get_logger(__name__)


def boosting_margins(predictions: np.ndarray, targets: np.ndarray) -> np.ndarray:
    """Return ``clip(predictions, -1, 1) * targets``.

    Hard limiting keeps a model with occasional wild outputs from dominating
    the loss and keeps ``alpha`` in a known range.
    """
    predictions = np.asarray(predictions, dtype=float)
    targets = np.asarray(targets, dtype=float)
    if predictions.shape != targets.shape:
        raise ValueError(
            f"predictions and targets shapes differ: "
            f"{predictions.shape} vs {targets.shape}."
        )
    return np.clip(predictions, -1.0, 1.0) * targets


class AlphaCriterion:
    """Exponential loss of a model weighted by ``alpha``."""

    def __init__(self, weights: np.ndarray, margins: np.ndarray) -> None:
        self.weights = np.asarray(weights, dtype=float)
        self.margins = np.asarray(margins, dtype=float)
        if self.weights.shape != self.margins.shape:
            raise ValueError(
                f"weights and margins shapes differ: "
                f"{self.weights.shape} vs {self.margins.shape}."
            )

    def __call__(self, alpha: float) -> float:
        return float(np.sum(self.weights * np.exp(-alpha * self.margins)))


def optimal_alpha(weights: np.ndarray, margins: np.ndarray) -> Optional[float]:
    """Compute the loss-minimizing weight of one boosted model.

    Args:
        weights: Current probability distribution over training cases.
        margins: Hard-limited prediction times true label for each case.

    Returns:
        The optimal weight; ``0.5 * log(n)`` when the model is never wrong
        (no finite optimum exists); None when it is never right, meaning the
        model is unusable and boosting should stop.
    """
    criterion = AlphaCriterion(weights, margins)
    n = criterion.margins.size
    if n == 0:
        raise ValueError("At least one training case is required.")

    nbad = int(np.count_nonzero(criterion.margins < 0.0))
    ngood = int(np.count_nonzero(criterion.margins > 0.0))
    if nbad == 0:
        logger.info("Model never fails; using heuristic weight.")
        return 0.5 * math.log(n)
    if ngood == 0:
        logger.info("Model never succeeds; no usable weight.")
        return None

    triple, _ = bracket_minimum(criterion, -1.0, 1.0, 3, critlim=0.0)
    result = brent_refine(criterion, triple, itmax=20, critlim=0.0, eps=1e-6, tol=1e-4)
    logger.debug("Optimal alpha %g with loss %g", result.x, result.fun)
    return result.x


def reweight(weights: np.ndarray, margins: np.ndarray, alpha: float) -> np.ndarray:
    """Multiply each weight by ``exp(-alpha * u_i)`` and renormalize."""
    updated = np.asarray(weights, dtype=float) * np.exp(
        -alpha * np.asarray(margins, dtype=float)
    )
    return updated / updated.sum()


__all__ = ["AlphaCriterion", "boosting_margins", "optimal_alpha", "reweight"]
