import math

import numpy as np
import pytest

from dfopt.diagnostics import is_valid_bracket
from dfopt.optimize import bracket_minimum


@pytest.mark.parametrize(
    "fun, xmin",
    [
        (lambda x: (x - 0.33) ** 2, 0.33),
        (lambda x: abs(x + 1.27), -1.27),
        (lambda x: math.cosh(x - 0.5), 0.5),
        (lambda x: (x - 1.61) ** 4 + 2.0, 1.61),
    ],
)
def test_unimodal_function_is_bracketed(fun, xmin):
    triple, nfev = bracket_minimum(fun, -2.0, 2.0, 21)
    assert is_valid_bracket(triple)
    assert triple.x1 < triple.x2 < triple.x3
    assert triple.x1 <= xmin <= triple.x3
    assert nfev == 21


def test_neighbour_values_match_abscissas():
    fun = lambda x: (x - 0.33) ** 2
    triple, _ = bracket_minimum(fun, -2.0, 2.0, 21)
    assert triple.y1 == pytest.approx(fun(triple.x1))
    assert triple.y2 == pytest.approx(fun(triple.x2))
    assert triple.y3 == pytest.approx(fun(triple.x3))


def test_negative_npts_reuses_known_low_value(counting):
    fun = lambda x: (x - 0.33) ** 2
    plain = counting(fun)
    bracket_minimum(plain, -2.0, 2.0, 11)
    known = counting(fun)
    triple, nfev = bracket_minimum(known, -2.0, 2.0, -11, f_low=fun(-2.0))
    assert known.calls == plain.calls - 1
    assert nfev == known.calls
    assert is_valid_bracket(triple)


def test_negative_npts_without_low_value_raises():
    with pytest.raises(ValueError):
        bracket_minimum(lambda x: x * x, -1.0, 1.0, -5)


def test_too_few_points_raises():
    with pytest.raises(ValueError):
        bracket_minimum(lambda x: x * x, -1.0, 1.0, 1)


def test_log_spacing_brackets_minimum():
    fun = lambda x: (math.log(x) - math.log(7.0)) ** 2
    triple, _ = bracket_minimum(fun, 1.0, 100.0, 11, log_space=True)
    assert is_valid_bracket(triple)
    assert triple.x1 < 7.0 < triple.x3
    assert triple.x3 / triple.x2 == pytest.approx(triple.x2 / triple.x1)


def test_log_spacing_rejects_non_positive_bounds():
    with pytest.raises(ValueError):
        bracket_minimum(lambda x: x * x, 0.0, 10.0, 5, log_space=True)


def test_extends_left_when_minimum_below_low():
    triple, _ = bracket_minimum(lambda x: x * x, 10.0, 20.0, 11)
    assert is_valid_bracket(triple)
    assert abs(triple.x2) < 10.0
    assert triple.x1 < 0.0 < triple.x3


def test_extends_right_when_minimum_above_high():
    triple, _ = bracket_minimum(lambda x: (x - 50.0) ** 2, 0.0, 10.0, 11)
    assert is_valid_bracket(triple)
    assert triple.x2 > 10.0
    assert triple.x1 < 50.0 < triple.x3


def test_flat_function_terminates(counting):
    fun = counting(lambda x: 5.0, limit=100)
    triple, nfev = bracket_minimum(fun, 0.0, 1.0, 5)
    assert nfev == fun.calls
    assert nfev <= 6
    assert triple.y1 == triple.y2 == triple.y3 == 5.0


def test_unbounded_descent_terminates(counting):
    fun = counting(lambda x: -x, limit=5000)
    triple, _ = bracket_minimum(fun, 0.0, 1.0, 5)
    assert fun.calls < 5000
    assert triple.x2 > 1.0


def test_critlim_stops_grid_scan_early(counting):
    fun = counting(lambda x: (x - 0.33) ** 2)
    triple, nfev = bracket_minimum(fun, -2.0, 2.0, 41, critlim=1.0)
    assert nfev < 41
    assert triple.y2 <= 1.0
    assert is_valid_bracket(triple)


def test_critlim_needs_bounded_minimum(counting):
    # Falls below critlim at once but keeps scanning until it turns up.
    fun = counting(lambda x: (x - 1.5) ** 2)
    triple, _ = bracket_minimum(fun, -2.0, 2.0, 41, critlim=100.0)
    assert triple.x1 <= 1.5 <= triple.x3
    assert fun.calls > 30


def test_random_quadratics_are_bracketed(rng):
    for center in rng.uniform(-5.0, 5.0, size=10):
        triple, _ = bracket_minimum(lambda x: (x - center) ** 2, -1.0, 1.0, 9)
        assert is_valid_bracket(triple)
        assert min(triple.x1, triple.x3) <= center <= max(triple.x1, triple.x3)
        assert np.isfinite(triple.y2)
