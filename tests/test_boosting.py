"""Tests for the boosting weight subproblem."""

import math

import numpy as np
import pytest

from dfopt.boosting import AlphaCriterion, boosting_margins, optimal_alpha, reweight


def test_margins_are_hard_limited():
    margins = boosting_margins(np.array([3.0, -0.5, 0.2]), np.array([1.0, 1.0, -1.0]))
    assert np.allclose(margins, [1.0, -0.5, -0.2])


def test_margins_shape_mismatch_raises():
    with pytest.raises(ValueError):
        boosting_margins(np.zeros(3), np.zeros(2))


def test_alpha_matches_closed_form_for_discrete_margins():
    margins = np.array([1.0] * 8 + [-1.0] * 2)
    weights = np.full(10, 0.1)
    alpha = optimal_alpha(weights, margins)
    assert alpha == pytest.approx(0.5 * math.log(0.8 / 0.2), abs=2e-3)


def test_alpha_uses_weighted_error():
    margins = np.array([1.0, 1.0, -1.0, 1.0])
    weights = np.array([0.1, 0.2, 0.3, 0.4])
    err = 0.3
    alpha = optimal_alpha(weights, margins)
    assert alpha == pytest.approx(0.5 * math.log((1 - err) / err), abs=2e-3)


def test_alpha_minimizes_loss_for_confidence_margins(rng):
    margins = np.clip(rng.normal(0.3, 0.5, size=50), -1.0, 1.0)
    weights = np.full(50, 1.0 / 50)
    alpha = optimal_alpha(weights, margins)
    crit = AlphaCriterion(weights, margins)
    assert crit(alpha) <= crit(alpha + 1e-2)
    assert crit(alpha) <= crit(alpha - 1e-2)


def test_never_wrong_model_gets_heuristic_weight():
    margins = np.array([1.0, 0.5, 0.0, 0.2])
    alpha = optimal_alpha(np.full(4, 0.25), margins)
    assert alpha == pytest.approx(0.5 * math.log(4))


def test_never_right_model_is_unusable():
    assert optimal_alpha(np.full(3, 1 / 3), np.array([-1.0, -0.2, 0.0])) is None


def test_reweight_shifts_mass_to_mistakes():
    margins = np.array([1.0, 1.0, -1.0])
    weights = np.full(3, 1 / 3)
    updated = reweight(weights, margins, 0.5)
    assert updated.sum() == pytest.approx(1.0)
    assert updated[2] > updated[0]
    assert updated[0] == pytest.approx(updated[1])
