"""Grid search that brackets a minimum of a univariate criterion.

The interval ``[low, high]`` is divided into ``npts - 1`` equal steps
(arithmetic or geometric). The best grid point and its two neighbours form
the returned triple. If the criterion is still falling at either end of the
grid the search walks outward with a doubling step until it turns up.
"""

from __future__ import annotations

import math
from typing import Optional

from dfopt.diagnostics import assert_bracket, is_debug_enabled
from dfopt.logging import get_logger

from .core import BracketTriple, ScalarCriterion

logger = get_logger(__name__)


def bracket_minimum(
    criterion: ScalarCriterion,
    low: float,
    high: float,
    npts: int,
    log_space: bool = False,
    critlim: float = -math.inf,
    f_low: Optional[float] = None,
) -> tuple[BracketTriple, int]:
    """Locate three adjacent points whose centre has the least value seen.

    Args:
        criterion: Function of one real variable to be minimized.
        low: First abscissa of the grid.
        high: Last abscissa of the grid.
        npts: Number of grid points. A negative count means ``f_low`` holds
            the criterion value at ``low`` and it is not evaluated again.
        log_space: Space the grid geometrically instead of arithmetically.
        critlim: Once the best value is at or below this and the minimum is
            bounded on both sides, the grid scan stops early. Usually left
            impossibly small so the whole grid is searched.
        f_low: Criterion value at ``low`` if already known.

    Returns:
        The bracketing triple and the number of criterion evaluations.
    """
    know_first_point = f_low is not None
    if npts < 0:
        if f_low is None:
            raise ValueError("A negative npts requires f_low to be supplied.")
        npts = -npts
    if npts < 2:
        raise ValueError(f"npts must have magnitude >= 2, got {npts}.")
    if log_space:
        if low <= 0.0 or high <= 0.0:
            raise ValueError("Logarithmic spacing requires positive bounds.")
        rate = math.exp(math.log(high / low) / (npts - 1))
    else:
        rate = (high - low) / (npts - 1)

    nfev = 0

    def evaluate(x: float) -> float:
        nonlocal nfev
        nfev += 1
        return float(criterion(x))

    x = low
    x2 = low
    y1 = y2 = y3 = 0.0
    previous = 0.0
    ibest = -1
    turned_up = False

    for i in range(npts):
        if i == 0 and know_first_point:
            y = float(f_low)
        else:
            y = evaluate(x)

        if i == 0 or y < y2:
            ibest = i
            x2 = x
            y2 = y
            y1 = previous
            turned_up = False
        elif i == ibest + 1:
            y3 = y
            turned_up = True

        previous = y

        if y2 <= critlim and ibest > 0 and turned_up:
            logger.debug("Grid scan stopped early at x=%g, f=%g", x2, y2)
            break

        if log_space:
            x *= rate
        else:
            x += rate

    if log_space:
        x1 = x2 / rate
        x3 = x2 * rate
    else:
        x1 = x2 - rate
        x3 = x2 + rate

    completed = True

    if not turned_up:
        # Still descending at the upper end: walk right.
        while True:
            if not math.isfinite(x3):
                completed = False
                break
            y3 = evaluate(x3)
            if y3 > y2:
                break
            if y1 == y2 and y2 == y3:
                break
            if not math.isfinite(y3):
                completed = False
                break
            x1, y1 = x2, y2
            x2, y2 = x3, y3
            rate *= 2.0
            if log_space:
                x3 *= rate
            else:
                x3 += rate

    elif ibest == 0:
        # Best at the lower end: walk left.
        while True:
            if not math.isfinite(x1):
                completed = False
                break
            y1 = evaluate(x1)
            if y1 > y2:
                break
            if y1 == y2 and y2 == y3:
                break
            if not math.isfinite(y1):
                completed = False
                break
            x3, y3 = x2, y2
            x2, y2 = x1, y1
            rate *= 2.0
            if log_space:
                x1 /= rate
            else:
                x1 -= rate

    triple = BracketTriple(x1=x1, y1=y1, x2=x2, y2=y2, x3=x3, y3=y3)
    if not completed:
        logger.warning(
            "Boundary extension abandoned at x=%g: criterion does not turn up",
            x2,
        )
    elif is_debug_enabled():
        assert_bracket(triple)
    logger.debug(
        "Bracket (%g, %g, %g) values (%g, %g, %g) after %d evaluations",
        x1, x2, x3, y1, y2, y3, nfev,
    )
    return triple, nfev


__all__ = ["bracket_minimum"]
