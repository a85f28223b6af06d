"""
Example: Derivative-free minimization with dfopt

Walks through the three layers of the engine: bracketing a univariate
minimum, refining it with Brent's method, minimizing Rosenbrock's function
with Powell's method, and solving the boosting weight subproblem.
"""

import math

import numpy as np

from dfopt import (
    boosting_margins,
    bracket_minimum,
    brent_refine,
    optimal_alpha,
    powell,
)


def example_univariate():
    """Example: bracket then refine a univariate minimum."""
    print("=" * 60)
    print("Example 1: Bracketing and Brent refinement")
    print("=" * 60)

    def fun(x):
        return math.exp(x) - 2.0 * x

    triple, nfev = bracket_minimum(fun, -3.0, 3.0, 7)
    print(f"Bracket: ({triple.x1:.3f}, {triple.x2:.3f}, {triple.x3:.3f}) "
          f"after {nfev} evaluations")

    result = brent_refine(fun, triple, eps=1e-14, tol=1e-9)
    print(f"Refined minimum: x = {result.x:.8f} (exact {math.log(2.0):.8f})")
    print(f"Iterations: {result.nit}, stop reason: {result.message}")
    print()


def example_rosenbrock():
    """Example: Powell's method on Rosenbrock's banana valley."""
    print("=" * 60)
    print("Example 2: Powell's method on Rosenbrock's function")
    print("=" * 60)

    def rosen(x):
        return (1 - x[0]) ** 2 + 100 * (x[1] - x[0] ** 2) ** 2

    x = np.array([-1.2, 1.0])
    result = powell(rosen, x, maxiter=500, tol=1e-12)
    print(f"Status: {result.status.value}")
    print(f"Minimum found at {result.x} with value {result.fun:.3e}")
    print(f"Iterations: {result.nit}, evaluations: {result.nfev}")
    print("Final direction set:")
    print(result.directions)
    print()


def example_boosting_weight():
    """Example: optimal weight of one boosted model."""
    print("=" * 60)
    print("Example 3: Boosting weight subproblem")
    print("=" * 60)

    rng = np.random.default_rng(0)
    targets = rng.choice([-1.0, 1.0], size=200)
    predictions = targets * rng.uniform(-0.4, 1.2, size=200)
    margins = boosting_margins(predictions, targets)
    weights = np.full(200, 1.0 / 200)

    alpha = optimal_alpha(weights, margins)
    print(f"Fraction misclassified: {np.mean(margins < 0):.3f}")
    print(f"Optimal alpha: {alpha:.4f}")
    print()


if __name__ == "__main__":
    example_univariate()
    example_rosenbrock()
    example_boosting_weight()
