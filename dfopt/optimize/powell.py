"""Powell's direction-set method for derivative-free minimization.

Each outer iteration minimizes along every direction of the current set, then
probes one step further along the net displacement of the iteration. When a
second-derivative style test favours it, the direction that gave the largest
single improvement is replaced by the normalized displacement, which keeps
the set from collapsing onto a linearly dependent basis.

References:
    - Powell, "An efficient method for finding the minimum of a function of
      several variables without calculating derivatives" (1964)
    - Brent, *Algorithms for Minimization without Derivatives* (1973)
"""

from __future__ import annotations

import math
from typing import Callable, Optional

import numpy as np

from dfopt.diagnostics import assert_finite, assert_non_increasing, is_debug_enabled
from dfopt.logging import get_logger

from .core import (
    NO_PREVIOUS_BEST,
    Array,
    OptimizeResult,
    PowellOptions,
    Status,
    VectorCriterion,
    resolve_options,
)
from .line import LineCriterion, line_minimize

logger = get_logger(__name__)

_MESSAGES = {
    Status.CONVERGED: "Relative improvement below tolerance twice in a row.",
    Status.CRITLIM: "Criterion limit reached.",
    Status.MAX_ITER: "Maximum iterations reached.",
}


def _as_work_point(x: Array) -> Array:
    """Return ``x`` itself when it can be updated in place, else a copy."""
    if (
        isinstance(x, np.ndarray)
        and x.dtype == np.float64
        and x.ndim == 1
        and x.flags.writeable
    ):
        return x
    return np.array(x, dtype=float).reshape(-1)


def _init_directions(directions: Optional[Array], n: int) -> Array:
    if directions is None:
        return np.eye(n)
    if not isinstance(directions, np.ndarray):
        raise ValueError(
            f"directions must be a numpy array, got {type(directions).__name__}."
        )
    if directions.shape != (n, n):
        raise ValueError(
            f"directions must have shape ({n}, {n}), got {directions.shape}."
        )
    if directions.dtype != np.float64:
        raise ValueError(f"directions must be float64, got {directions.dtype}.")
    directions[...] = np.eye(n)
    return directions


def powell(
    criterion: VectorCriterion,
    x: Array,
    fun0: Optional[float] = None,
    maxiter: int = 200,
    tol: float = 1e-8,
    critlim: float = -math.inf,
    directions: Optional[Array] = None,
    options: Optional[PowellOptions] = None,
    callback: Optional[Callable[[Array, float], None]] = None,
    history: bool = False,
) -> OptimizeResult:
    """Minimize a function of several variables without derivatives.

    Args:
        criterion: Function mapping a 1-D float array to a real value.
        x: Starting point. A writable 1-D float64 array is updated in place;
            anything else is copied. The best point is also in ``result.x``.
        fun0: Criterion value at ``x`` if already known.
        maxiter: Outer iteration limit; zero or negative means unlimited.
        tol: Convergence tolerance on the per-iteration improvement, absolute
            when the best value is within ``[-1, 1]`` and relative otherwise.
        critlim: Stop as soon as the best value is at or below this.
        directions: Optional ``(n, n)`` float64 array used as the direction
            set storage. It is reset to the identity and holds the final
            directions on return.
        options: Line-search settings.
        callback: Called as ``callback(x, fun)`` after each outer iteration
            that searched, including one cut short by ``critlim``.
        history: Record the point and best value after each outer iteration.

    Returns:
        OptimizeResult describing the best point found.
    """
    if tol < 0.0:
        raise ValueError(f"tol must be non-negative, got {tol}.")
    options = resolve_options(options)

    x = _as_work_point(x)
    n = x.size
    if n == 0:
        raise ValueError("x must contain at least one variable.")
    direc = _init_directions(directions, n)
    base = np.empty(n)
    p0 = np.empty(n)

    nfev = 0
    if fun0 is None:
        fbest = float(criterion(x))
        nfev += 1
    else:
        fbest = float(fun0)
    if is_debug_enabled():
        assert_finite(fbest, "starting criterion value")

    line = LineCriterion(criterion, point=x, base=base)
    hist: list[Array] = []
    fun_hist: list[float] = []

    replaced = -1
    prev_best = NO_PREVIOUS_BEST
    scale = options.initial_scale
    convergence_counter = 0
    nit = 0
    status = Status.MAX_ITER

    def line_search(direction: Array) -> tuple[float, bool]:
        """Minimize along ``direction`` from the current point."""
        nonlocal scale
        base[:] = x
        line.direction = direction
        t, fval, hit = line_minimize(
            line,
            fbest,
            scale,
            tol,
            critlim=critlim,
            hard=convergence_counter > 0,
            options=options,
        )
        if not hit:
            scale = abs(t) / n + (1.0 - 1.0 / n) * scale
        return fval, hit

    while True:
        if maxiter > 0 and nit >= maxiter:
            status = Status.MAX_ITER
            break
        nit += 1

        if fbest <= critlim:
            status = Status.CRITLIM
            break

        if abs(prev_best) <= 1.0:
            toler = tol
        else:
            toler = tol * abs(prev_best)

        if prev_best - fbest <= toler:
            convergence_counter += 1
            if convergence_counter >= 2:
                status = Status.CONVERGED
                break
        else:
            convergence_counter = 0

        prev_best = fbest

        p0[:] = x
        f0 = fbest
        delta = -1.0
        idelta = 0
        finished = False

        for idir in range(n):
            if n > 1 and idir == 0 and replaced == 0:
                continue
            fval, hit = line_search(direc[idir])
            if hit:
                fbest = fval
                finished = True
                break
            if fbest - fval > delta:
                delta = fbest - fval
                idelta = idir
            fbest = fval

        if finished:
            status = Status.CRITLIM
        else:
            # p0 becomes the displacement of this iteration; probe one step
            # further along it.
            np.subtract(x, p0, out=p0)
            np.add(x, p0, out=base)
            fval = float(criterion(base))
            nfev += 1

            replaced = -1
            ftest = fbest
            if fval < fbest:
                fbest = fval
                x[:] = base

            if fval < f0:
                test = f0 - ftest - delta
                test = 2.0 * (f0 - 2.0 * ftest + fval) * test * test
                if test < delta * (f0 - fval) * (f0 - fval):
                    length = math.sqrt(float(np.dot(p0, p0)))
                    if length > 0.0:
                        replaced = idelta
                        p0 /= length
                        fval, hit = line_search(p0)
                        fbest = fval
                        if hit:
                            status = Status.CRITLIM
                            finished = True
                        else:
                            direc[idelta] = p0
                            logger.debug("Replaced direction %d", idelta)

        # Recorded even when the criterion limit ended this iteration.
        if is_debug_enabled():
            assert_non_increasing(prev_best, fbest)
        logger.debug("Iteration %d: best=%g scale=%g", nit, fbest, scale)
        if history:
            hist.append(x.copy())
            fun_hist.append(fbest)
        if callback is not None:
            callback(x.copy(), fbest)
        if finished:
            break

    nfev += line.nfev
    message = _MESSAGES[status]
    logger.info(
        "Powell finished after %d iterations and %d evaluations: %s",
        nit, nfev, message,
    )
    return OptimizeResult(
        x=x,
        fun=fbest,
        nit=nit,
        nfev=nfev,
        status=status,
        success=status is not Status.MAX_ITER,
        message=message,
        directions=direc,
        history=hist,
        fun_history=fun_hist,
    )


__all__ = ["powell"]
