"""Univariate view of a vector criterion along a search direction."""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from .bracket import bracket_minimum
from .brent import brent_refine
from .core import Array, PowellOptions, VectorCriterion, resolve_options


class LineCriterion:
    """
    Evaluate ``fun(base + t * direction)`` as a function of the scalar ``t``.

    Each instance carries its own buffers, so separate minimizations never
    share scratch state. The trial point is written into ``point`` before
    ``fun`` is called; ``base`` and ``direction`` may be swapped between
    line searches.
    """

    def __init__(
        self,
        fun: VectorCriterion,
        point: Array,
        base: Array,
        direction: Optional[Array] = None,
    ) -> None:
        if point.shape != base.shape:
            raise ValueError(
                f"point and base shapes differ: {point.shape} vs {base.shape}."
            )
        self.fun = fun
        self.point = point
        self.base = base
        self.direction = direction if direction is not None else np.zeros_like(base)
        self.nfev = 0

    def __call__(self, t: float) -> float:
        np.multiply(self.direction, t, out=self.point)
        self.point += self.base
        self.nfev += 1
        return float(self.fun(self.point))

    def move_to(self, t: float) -> None:
        """Write ``base + t * direction`` into ``point`` without evaluating."""
        np.multiply(self.direction, t, out=self.point)
        self.point += self.base


def line_minimize(
    line: LineCriterion,
    fbest: float,
    scale: float,
    tol: float,
    critlim: float = -math.inf,
    hard: bool = False,
    options: Optional[PowellOptions] = None,
) -> tuple[float, float, bool]:
    """Minimize a line criterion starting from ``t = 0``.

    A symmetric grid of half-width ``mult * scale`` is scanned with growing
    multipliers until the minimum is strictly bracketed, then Brent's method
    refines it. The returned step never leads to a value above ``fbest``, the
    value at ``t = 0``.

    Args:
        line: Line criterion whose ``base`` holds the current point.
        fbest: Criterion value at ``base``.
        scale: Current bracketing half-width.
        tol: Outer convergence tolerance.
        critlim: Absolute cutoff passed to the univariate searches.
        hard: Refine more thoroughly (used once convergence is suspected).
        options: Line-search settings.

    Returns:
        ``(t, fun, reached_critlim)``; ``line.point`` is left at ``base +
        t * direction``.
    """
    options = resolve_options(options)
    triple = None
    for mult in options.multipliers():
        triple, _ = bracket_minimum(
            line,
            -mult * scale,
            mult * scale,
            options.npts,
            log_space=False,
            critlim=critlim,
        )
        if triple.is_bounded:
            break

    if triple.y2 <= critlim:
        if triple.y2 < fbest:
            line.move_to(triple.x2)
            return triple.x2, triple.y2, True
        line.move_to(0.0)
        return 0.0, fbest, True

    if hard:
        result = brent_refine(
            line,
            triple,
            itmax=options.hard_itmax,
            critlim=critlim,
            eps=tol,
            tol=options.hard_line_tol,
        )
    else:
        result = brent_refine(
            line,
            triple,
            itmax=options.itmax,
            critlim=critlim,
            eps=options.eps_factor * tol,
            tol=options.line_tol,
        )

    if result.fun > fbest:
        line.move_to(0.0)
        return 0.0, fbest, False
    line.move_to(result.x)
    return result.x, result.fun, False


__all__ = ["LineCriterion", "line_minimize"]
