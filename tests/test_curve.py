import random

import pytest

from streamkzg.curve import (
    CURVE_ORDER,
    CurvePoint,
    Fq,
    Fq2,
    Fq12,
    g1_generator,
    g2_generator,
    msm,
    pairing,
    random_scalar,
)


def test_identity():
    e = CurvePoint.identity(Fq)
    g = g1_generator()
    assert e.is_identity()
    assert e.is_on_curve()
    assert g + e == g
    assert g - g == e


def test_order_relation():
    g = g1_generator()
    assert g * (CURVE_ORDER - 1) == -g
    h = g2_generator()
    assert h * (CURVE_ORDER - 1) == -h


def test_msm_matches_sum():
    g = g1_generator()
    bases = [g, g * 3, g * 9]
    scalars = [4, 10, 2]
    assert msm(bases, scalars) == g * (4 + 30 + 18)
    assert msm([], []).is_identity()


def test_field_inverses():
    a = Fq(123456789)
    assert a * (1 / a) == 1
    b = Fq2(7, 13)
    assert b * (1 / b) == 1
    c = Fq12(list(range(1, 13)))
    assert c * (1 / c) == 1
    with pytest.raises(ZeroDivisionError):
        1 / Fq(0)
    with pytest.raises(ZeroDivisionError):
        1 / Fq12(0)


def test_fq2_imaginary_unit():
    i = Fq2(0, 1)
    assert i * i == -1


def test_fq12_modulus_relation():
    w = Fq12([0, 1] + [0] * 10)
    assert w ** 12 == 2 * w ** 6 - 2


def test_random_scalar_range():
    rng = random.Random(1)
    values = {random_scalar(rng) for _ in range(10)}
    assert all(0 <= v < CURVE_ORDER for v in values)
    assert len(values) == 10


def test_pairing_bilinear():
    p, q = g1_generator(), g2_generator()
    base = pairing(p, q)
    assert base != Fq12(1)
    assert pairing(p * 2, q) == base * base
    assert pairing(p, q * 2) == base * base


def test_pairing_identity():
    assert pairing(CurvePoint.identity(Fq), g2_generator()) == Fq12(1)
    with pytest.raises(TypeError):
        pairing(g2_generator(), g1_generator())