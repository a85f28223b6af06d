"""dfopt - derivative-free minimization: bracketing, Brent refinement and Powell's method."""

__version__ = "0.1.0"

# Boosting weight subproblem
from .boosting import AlphaCriterion, boosting_margins, optimal_alpha, reweight

# Diagnostics
from .diagnostics import (
    assert_bracket,
    assert_finite,
    assert_non_increasing,
    debug_context,
    is_debug_enabled,
    is_valid_bracket,
    reload_debug_from_env,
    set_debug_enabled,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Minimizers
from .optimize import (
    GOLDEN,
    BracketTriple,
    LineCriterion,
    LineSearchResult,
    OptimizeResult,
    PowellOptions,
    ScalarPoint,
    Status,
    bracket_minimum,
    brent_refine,
    line_minimize,
    powell,
)

# PyTorch adapters
from .torch import TorchCriterion, minimize_module

__all__ = [
    "__version__",
    # Minimizers
    "GOLDEN",
    "BracketTriple",
    "LineCriterion",
    "LineSearchResult",
    "OptimizeResult",
    "PowellOptions",
    "ScalarPoint",
    "Status",
    "bracket_minimum",
    "brent_refine",
    "line_minimize",
    "powell",
    # Boosting
    "AlphaCriterion",
    "boosting_margins",
    "optimal_alpha",
    "reweight",
    # PyTorch
    "TorchCriterion",
    "minimize_module",
    # Diagnostics
    "assert_bracket",
    "assert_finite",
    "assert_non_increasing",
    "is_valid_bracket",
    "reload_debug_from_env",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
]
