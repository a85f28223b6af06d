"""Brent's method for refining a bracketed univariate minimum.

Parabolic interpolation through the three best points is used while it
shrinks the step quickly and stays safely inside the bracket; otherwise a
golden-section step into the larger half of the bracket is taken.

References:
    - Brent, *Algorithms for Minimization without Derivatives* (1973)
"""

from __future__ import annotations

import math

from dfopt.diagnostics import assert_bracket, is_debug_enabled
from dfopt.logging import get_logger

from .core import (
    GOLDEN,
    HUGE_STEP,
    TINY_DENOM,
    BracketTriple,
    LineSearchResult,
    ScalarCriterion,
)

logger = get_logger(__name__)


def brent_refine(
    criterion: ScalarCriterion,
    bracket: BracketTriple,
    itmax: int = 100,
    critlim: float = -math.inf,
    eps: float = 1e-8,
    tol: float = 1e-6,
) -> LineSearchResult:
    """Refine a bracketing triple toward the local minimum it encloses.

    The triple is narrowed in place: on return ``(x1, y1)`` and ``(x3, y3)``
    are the final bracket ends and ``(x2, y2)`` is the best point found.

    Args:
        criterion: Function of one real variable to be minimized.
        bracket: Triple whose centre value is no larger than its ends.
        itmax: Iteration limit.
        critlim: Stop as soon as the best value is at or below this.
        eps: Relative function tolerance.
        tol: Relative abscissa tolerance (absolute when ``|x| < 1``).

    Returns:
        Best abscissa and value together with iteration counts.
    """
    if itmax < 0:
        raise ValueError(f"itmax must be non-negative, got {itmax}.")
    if tol <= 0.0:
        raise ValueError(f"tol must be positive, got {tol}.")

    if bracket.x1 > bracket.x3:
        bracket.x1, bracket.x3 = bracket.x3, bracket.x1
        bracket.y1, bracket.y3 = bracket.y3, bracket.y1

    x0 = x1 = x2 = bracket.x2
    y0 = y1 = y2 = bracket.y2
    xleft, yleft = bracket.x1, bracket.y1
    xright, yright = bracket.x3, bracket.y3

    # Zero movement forces golden section on the first iteration.
    movement = trial = 0.0
    nfev = 0
    nit = 0
    message = "Iteration limit reached."

    for nit in range(itmax):
        if y0 <= critlim:
            message = "Criterion limit reached."
            break

        small_step = max(abs(x0), 1.0) * tol
        small_dist = 2.0 * small_step
        xmid = 0.5 * (xleft + xright)

        # Bracket is narrow and x0 sits near its middle.
        if abs(x0 - xmid) <= small_dist - 0.5 * (xright - xleft):
            message = "Abscissa tolerance satisfied."
            break

        if nit >= 4 and (y2 - y0) / (abs(y0) + 1.0) < eps:
            message = "Function tolerance satisfied."
            break

        if abs(movement) > small_step:
            temp1 = (x0 - x2) * (y0 - y1)
            temp2 = (x0 - x1) * (y0 - y2)
            numer = (x0 - x1) * temp2 - (x0 - x2) * temp1
            denom = 2.0 * (temp1 - temp2)
            testdist = movement
            movement = trial
            if abs(denom) > TINY_DENOM:
                trial = numer / denom
            else:
                trial = HUGE_STEP

            candidate = trial + x0
            if 2.0 * abs(trial) < abs(testdist) and xleft < candidate < xright:
                if candidate - xleft < small_dist or xright - candidate < small_dist:
                    trial = small_step if x0 < xmid else -small_step
            else:
                movement = xright - x0 if xmid > x0 else xleft - x0
                trial = GOLDEN * movement
        else:
            movement = xright - x0 if xmid > x0 else xleft - x0
            trial = GOLDEN * movement

        if abs(trial) >= small_step:
            this_x = x0 + trial
        else:
            this_x = x0 + small_step if trial > 0.0 else x0 - small_step

        this_y = float(criterion(this_x))
        nfev += 1

        if this_y <= y0:
            if this_x < x0:
                xright, yright = x0, y0
            else:
                xleft, yleft = x0, y0
            x2, y2 = x1, y1
            x1, y1 = x0, y0
            x0, y0 = this_x, this_y
        else:
            if this_x >= x0:
                xright, yright = this_x, this_y
            else:
                xleft, yleft = this_x, this_y

            if this_y <= y1 or x1 == x0:
                x2, y2 = x1, y1
                x1, y1 = this_x, this_y
            elif this_y <= y2 or x2 == x0 or x2 == x1:
                x2, y2 = this_x, this_y
    else:
        nit = itmax

    bracket.x1, bracket.y1 = xleft, yleft
    bracket.x2, bracket.y2 = x0, y0
    bracket.x3, bracket.y3 = xright, yright
    if is_debug_enabled():
        assert_bracket(bracket)

    logger.debug(
        "Brent stopped after %d iterations at x=%g, f=%g: %s",
        nit, x0, y0, message,
    )
    return LineSearchResult(x=x0, fun=y0, nit=nit, nfev=nfev, message=message)


__all__ = ["brent_refine"]
