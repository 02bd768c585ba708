"""Dense univariate polynomials over the scalar field.

A polynomial is a list of integer coefficients modulo ``CURVE_ORDER`` in
little-endian order: the constant term comes first. Results are trimmed, so
the zero polynomial is the empty list.
"""

from __future__ import annotations

from functools import reduce
from typing import Iterable, Optional, Sequence

from streamkzg.curve import CURVE_ORDER

_P = CURVE_ORDER


def _trim(coeffs: list[int]) -> list[int]:
    while coeffs and coeffs[-1] == 0:
        coeffs.pop()
    return coeffs


def _normalise(coeffs: Iterable[int]) -> list[int]:
    return _trim([c % _P for c in coeffs])


def powers(element: int, length: int) -> list[int]:
    """The first ``length`` consecutive powers ``1, e, e^2, ...`` of ``element``."""
    result: list[int] = []
    current = 1
    for _ in range(length):
        result.append(current)
        current = current * element % _P
    return result


def poly_add(a: Sequence[int], b: Sequence[int]) -> list[int]:
    """The sum of two polynomials."""
    longer, shorter = (a, b) if len(a) >= len(b) else (b, a)
    summed = list(longer)
    for i, c in enumerate(shorter):
        summed[i] += c
    return _normalise(summed)


def poly_scale(a: Sequence[int], c: int) -> list[int]:
    """The polynomial ``a`` multiplied by the scalar ``c``."""
    c %= _P
    if c == 0:
        return []
    return _normalise(x * c for x in a)


def poly_mul(a: Sequence[int], b: Sequence[int]) -> list[int]:
    """The product of two polynomials."""
    a = _normalise(a)
    b = _normalise(b)
    if not a or not b:
        return []
    product = [0] * (len(a) + len(b) - 1)
    for i, x in enumerate(a):
        if x:
            for j, y in enumerate(b):
                product[i + j] += x * y
    return _normalise(product)


def poly_divmod(
    numerator: Sequence[int], denominator: Sequence[int]
) -> tuple[list[int], list[int]]:
    """Quotient and remainder of ``numerator`` divided by ``denominator``."""
    num = _normalise(numerator)
    den = _normalise(denominator)
    if not den:
        raise ZeroDivisionError("division by the zero polynomial")
    if len(num) < len(den):
        return [], num
    lead_inv = pow(den[-1], -1, _P)
    shift = len(den) - 1
    remainder = list(num)
    quotient = [0] * (len(num) - shift)
    for i in reversed(range(len(quotient))):
        c = remainder[i + shift] * lead_inv % _P
        quotient[i] = c
        if c:
            for j, d in enumerate(den):
                remainder[i + j] = (remainder[i + j] - c * d) % _P
    return _trim(quotient), _trim(remainder[:shift])


def evaluate_le(polynomial: Sequence[int], x: int) -> int:
    """Evaluate a polynomial whose coefficients are little-endian."""
    return evaluate_be(reversed(list(polynomial)), x)


def evaluate_be(polynomial: Iterable[int], x: int) -> int:
    """Evaluate a polynomial whose coefficients are big-endian."""
    return reduce(lambda acc, c: (acc * x + c) % _P, polynomial, 0)


def vanishing_polynomial(points: Iterable[int]) -> list[int]:
    """The monic polynomial vanishing exactly at ``points``."""
    return reduce(lambda acc, p: poly_mul(acc, [-p, 1]), points, [1])


def linear_combination(
    polynomials: Sequence[Sequence[int]], challenges: Sequence[int]
) -> Optional[list[int]]:
    """``sum(c_i * p_i)``, or ``None`` when there is nothing to combine."""
    scaled = [poly_scale(p, c) for p, c in zip(polynomials, challenges)]
    if not scaled:
        return None
    return reduce(poly_add, scaled)


def lagrange_basis(eval_points: Sequence[int]) -> tuple[list[int], list[list[int]]]:
    """Denominator inverses and numerator polynomials of the Lagrange basis.

    Raises ``ZeroDivisionError`` if two points coincide.
    """
    inverses: list[int] = []
    numerators: list[list[int]] = []
    for j, x_j in enumerate(eval_points):
        others = [x_k for k, x_k in enumerate(eval_points) if k != j]
        denominator = reduce(lambda acc, x_k: acc * (x_j - x_k) % _P, others, 1)
        if denominator == 0:
            raise ZeroDivisionError("evaluation points must be distinct")
        inverses.append(pow(denominator, -1, _P))
        numerators.append(vanishing_polynomial(others))
    return inverses, numerators


def interpolate_poly(
    eval_points: Sequence[int],
    evals: Sequence[int],
    sca_inverse: Sequence[int],
    lang: Sequence[Sequence[int]],
) -> list[int]:
    """The polynomial taking the value ``evals[j]`` at ``eval_points[j]``."""
    result: list[int] = []
    for j, (_, y_j) in enumerate(zip(eval_points, evals)):
        result = poly_add(result, poly_scale(lang[j], sca_inverse[j] * y_j))
    return result