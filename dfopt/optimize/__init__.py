"""Derivative-free univariate and multivariate minimization.

Example
-------
>>> import numpy as np
>>> from dfopt.optimize import powell
>>> def rosen(x):
...     return (1 - x[0])**2 + 100 * (x[1] - x[0]**2)**2
>>> res = powell(rosen, np.array([-1.2, 1.0]), maxiter=500, tol=1e-12)
>>> bool(np.allclose(res.x, [1.0, 1.0], atol=1e-3))
True
"""

from .bracket import bracket_minimum
from .brent import brent_refine
from .core import (
    GOLDEN,
    BracketTriple,
    LineSearchResult,
    OptimizeResult,
    PowellOptions,
    ScalarCriterion,
    ScalarPoint,
    Status,
    VectorCriterion,
)
from .line import LineCriterion, line_minimize
from .powell import powell

__all__ = [
    "GOLDEN",
    "BracketTriple",
    "LineCriterion",
    "LineSearchResult",
    "OptimizeResult",
    "PowellOptions",
    "ScalarCriterion",
    "ScalarPoint",
    "Status",
    "VectorCriterion",
    "bracket_minimum",
    "brent_refine",
    "line_minimize",
    "powell",
]
