import random

import pytest

from streamkzg.curve import CURVE_ORDER
from streamkzg.polynomial import (
    evaluate_be,
    evaluate_le,
    interpolate_poly,
    lagrange_basis,
    linear_combination,
    poly_add,
    poly_divmod,
    poly_mul,
    poly_scale,
    powers,
    vanishing_polynomial,
)


def _rand_poly(rng, degree):
    return [rng.randrange(CURVE_ORDER) for _ in range(degree + 1)]


def test_powers():
    assert powers(3, 4) == [1, 3, 9, 27]
    assert powers(5, 0) == []
    assert powers(5, 1) == [1]


def test_vanishing_polynomial():
    points = [10, 5, 13]
    zeros = vanishing_polynomial(points)
    assert len(zeros) == 4
    for p in points:
        assert evaluate_le(zeros, p) == 0
    assert evaluate_le(zeros, 7) != 0


def test_vanishing_polynomial_of_no_points_is_one():
    assert vanishing_polynomial([]) == [1]


def test_evaluate_orders():
    # 2 + 3x + 4x^2 at x = 5
    assert evaluate_le([2, 3, 4], 5) == 117
    assert evaluate_be([4, 3, 2], 5) == 117
    assert evaluate_be([], 5) == 0


def test_poly_add_and_scale():
    assert poly_add([1, 2], [3]) == [4, 2]
    assert poly_add([1, 2], [0, CURVE_ORDER - 2]) == [1]
    assert poly_scale([1, 2, 3], 2) == [2, 4, 6]
    assert poly_scale([1, 2, 3], 0) == []


def test_poly_mul():
    assert poly_mul([1, 1], [CURVE_ORDER - 1, 1]) == [CURVE_ORDER - 1, 0, 1]
    assert poly_mul([], [1, 2]) == []


def test_divmod_round_trip():
    rng = random.Random(7)
    numerator = _rand_poly(rng, 20)
    denominator = _rand_poly(rng, 4)
    quotient, remainder = poly_divmod(numerator, denominator)
    assert len(remainder) <= 4
    assert poly_add(poly_mul(quotient, denominator), remainder) == numerator


def test_divmod_small_numerator():
    assert poly_divmod([1, 2], [1, 2, 3]) == ([], [1, 2])


def test_divmod_by_zero():
    with pytest.raises(ZeroDivisionError):
        poly_divmod([1, 2], [0])


def test_remainder_by_vanishing_polynomial():
    # f = 80x^6 + 80x^5 + 88x^4 + 3x^3 + 73x^2 + 7x + 24
    f = [24, 7, 73, 3, 88, 80, 80]
    beta = 53
    zeros = vanishing_polynomial([beta * beta, beta, -beta])
    _, remainder = poly_divmod(f, zeros)
    assert len(remainder) <= 3
    assert evaluate_le(remainder, beta) == 1807299544171
    assert evaluate_le(remainder, beta * beta) == evaluate_le(f, beta * beta)


def test_linear_combination():
    assert linear_combination([[1, 2], [3]], [1, 2]) == [7, 2]
    assert linear_combination([], []) is None


def test_interpolation_reproduces_evaluations():
    rng = random.Random(11)
    points = [rng.randrange(CURVE_ORDER) for _ in range(5)]
    f = _rand_poly(rng, 30)
    evals = [evaluate_le(f, p) for p in points]
    inverses, lang = lagrange_basis(points)
    interpolated = interpolate_poly(points, evals, inverses, lang)
    assert len(interpolated) <= 5
    assert [evaluate_le(interpolated, p) for p in points] == evals


def test_lagrange_duplicate_points():
    with pytest.raises(ZeroDivisionError):
        lagrange_basis([3, 3])