"""Invariant checks for brackets and descent sequences."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dfopt.optimize.core import BracketTriple


def assert_finite(value: float, what: str = "criterion value") -> None:
    """
    Assert that a criterion value is a finite real number.

    Parameters
    ----------
    value:
        Value returned by a criterion function.
    what:
        Description used in the error message.

    Raises
    ------
    ValueError
        If value is NaN or infinite.
    """
    if not math.isfinite(value):
        raise ValueError(f"{what} must be finite, got {value!r}.")


def is_valid_bracket(triple: BracketTriple) -> bool:
    """
    Check whether the centre of a triple is no worse than its neighbours.

    Parameters
    ----------
    triple:
        Bracketing triple to inspect.

    Returns
    -------
    bool
        True if ``y2 <= y1`` and ``y2 <= y3``.
    """
    return triple.y2 <= triple.y1 and triple.y2 <= triple.y3


def assert_bracket(triple: BracketTriple) -> None:
    """
    Assert that a triple brackets a minimum.

    Raises
    ------
    ValueError
        If the centre value exceeds either neighbour.
    """
    if not is_valid_bracket(triple):
        raise ValueError(
            "Triple does not bracket a minimum: "
            f"y1={triple.y1!r}, y2={triple.y2!r}, y3={triple.y3!r}."
        )


def assert_non_increasing(previous: float, current: float) -> None:
    """
    Assert that a tracked best value did not increase.

    Parameters
    ----------
    previous:
        Best value before the step.
    current:
        Best value after the step.

    Raises
    ------
    ValueError
        If current is larger than previous.
    """
    if current > previous:
        raise ValueError(
            f"Best value increased from {previous!r} to {current!r}."
        )
