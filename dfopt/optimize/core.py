"""Core interfaces shared across the derivative-free minimizers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, NamedTuple, Optional

import numpy as np

Array = np.ndarray
ScalarCriterion = Callable[[float], float]
VectorCriterion = Callable[[Array], float]

GOLDEN = 0.3819660
TINY_DENOM = 1e-40
HUGE_STEP = 1e40
NO_PREVIOUS_BEST = 1e60


class Status(Enum):
    """Exit status of the direction-set minimizer."""

    CONVERGED = "converged"
    CRITLIM = "critlim"
    MAX_ITER = "max_iter"


class ScalarPoint(NamedTuple):
    """An abscissa together with the criterion value there."""

    x: float
    fun: float


@dataclass
class BracketTriple:
    """
    Three abscissas around a local minimum of a univariate criterion.

    When the search that produced it completed normally the centre value is
    no larger than either neighbour (``y2 <= y1`` and ``y2 <= y3``). The
    abscissas are usually ordered ``x1 < x2 < x3`` but a boundary-extended
    triple may carry a best point that ties with an endpoint.
    """

    x1: float
    y1: float
    x2: float
    y2: float
    x3: float
    y3: float

    @property
    def left(self) -> ScalarPoint:
        return ScalarPoint(self.x1, self.y1)

    @property
    def center(self) -> ScalarPoint:
        return ScalarPoint(self.x2, self.y2)

    @property
    def right(self) -> ScalarPoint:
        return ScalarPoint(self.x3, self.y3)

    @property
    def is_bounded(self) -> bool:
        """True if the centre is strictly below both neighbours."""
        return self.y2 < self.y1 and self.y2 < self.y3

    @property
    def width(self) -> float:
        return abs(self.x3 - self.x1)


@dataclass
class LineSearchResult:
    """Outcome of a univariate refinement."""

    x: float
    fun: float
    nit: int
    nfev: int
    message: str


@dataclass
class OptimizeResult:
    """
    Result object returned by the direction-set minimizer.

    Attributes:
        x: Best point found.
        fun: Criterion value at ``x``.
        nit: Number of outer iterations started.
        nfev: Number of criterion evaluations, including the initial one
            when the starting value was not supplied.
        status: Reason the search stopped.
        success: True unless the iteration limit was hit.
        message: Human-readable description of ``status``.
        directions: Final direction set, one direction per row.
        history: Copies of the point after each outer iteration.
        fun_history: Best value after each outer iteration.
    """

    x: Array
    fun: float
    nit: int
    nfev: int
    status: Status
    success: bool
    message: str
    directions: Array
    history: List[Array] = field(default_factory=list)
    fun_history: List[float] = field(default_factory=list)


@dataclass(frozen=True)
class PowellOptions:
    """
    Line-search settings used by :func:`dfopt.optimize.powell`.

    Args:
        npts: Grid points used to bracket each line minimum.
        initial_scale: Starting half-width of the bracketing interval.
        first_mult: Smallest multiplier applied to the scale.
        mult_factor: Growth of the multiplier between bracketing attempts.
        mult_limit: Bracketing stops once the multiplier reaches this value.
        itmax: LineRefiner iteration cap for a normal line search.
        eps_factor: Normal LineRefiner ``eps`` is ``eps_factor * tol``.
        line_tol: LineRefiner abscissa tolerance for a normal line search.
        hard_itmax: Iteration cap once convergence is suspected.
        hard_line_tol: Abscissa tolerance once convergence is suspected.
    """

    npts: int = 15
    initial_scale: float = 0.2
    first_mult: float = 0.1
    mult_factor: float = 4.0
    mult_limit: float = 11.0
    itmax: int = 20
    eps_factor: float = 10.0
    line_tol: float = 1e-5
    hard_itmax: int = 40
    hard_line_tol: float = 1e-7

    def __post_init__(self) -> None:
        if self.npts < 3:
            raise ValueError(f"npts must be >= 3, got {self.npts}.")
        if self.initial_scale <= 0.0:
            raise ValueError(
                f"initial_scale must be positive, got {self.initial_scale}."
            )
        if self.first_mult <= 0.0 or self.first_mult >= self.mult_limit:
            raise ValueError(
                "first_mult must be positive and below mult_limit, "
                f"got {self.first_mult} and {self.mult_limit}."
            )
        if self.mult_factor <= 1.0:
            raise ValueError(f"mult_factor must exceed 1, got {self.mult_factor}.")
        if self.itmax < 1 or self.hard_itmax < 1:
            raise ValueError("itmax and hard_itmax must be >= 1.")
        if self.line_tol <= 0.0 or self.hard_line_tol <= 0.0:
            raise ValueError("line_tol and hard_line_tol must be positive.")
        if self.eps_factor <= 0.0:
            raise ValueError(f"eps_factor must be positive, got {self.eps_factor}.")

    def multipliers(self) -> List[float]:
        """Return the bracketing multipliers tried in order."""
        mults = []
        mult = self.first_mult
        while mult < self.mult_limit:
            mults.append(mult)
            mult *= self.mult_factor
        return mults


def resolve_options(options: Optional[PowellOptions]) -> PowellOptions:
    return options if options is not None else PowellOptions()


__all__ = [
    "Array",
    "ScalarCriterion",
    "VectorCriterion",
    "GOLDEN",
    "TINY_DENOM",
    "HUGE_STEP",
    "NO_PREVIOUS_BEST",
    "Status",
    "ScalarPoint",
    "BracketTriple",
    "LineSearchResult",
    "OptimizeResult",
    "PowellOptions",
    "resolve_options",
]
