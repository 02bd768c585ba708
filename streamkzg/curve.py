"""Arithmetic on the BLS12-381 pairing-friendly curve.

Scalars of the pairing groups are plain integers taken modulo ``CURVE_ORDER``.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Iterable, Sequence, Union

FIELD_MODULUS = int(
    "1a0111ea397fe69a4b1ba7b6434bacd764774b84f38512bf6730d2a0f6b0f6241"
    "eabfffeb153ffffb9feffffffffaaab",
    16,
)
CURVE_ORDER = int(
    "73eda753299d7d483339d80809a1d80553bda402fffe5bfeffffffff00000001", 16
)
ATE_LOOP_COUNT = 0xD201000000010000
G1_COMPRESSED_SIZE = 48

_Q = FIELD_MODULUS


def _inv_mod(value: int) -> int:
    value %= _Q
    if value == 0:
        raise ZeroDivisionError("inverse of zero field element")
    return pow(value, -1, _Q)


class Fq:
    """An element of the base prime field."""

    __slots__ = ("value",)

    def __init__(self, value: Union[int, "Fq"] = 0):
        self.value = int(value) % _Q

    @staticmethod
    def _coerce(other: Any):
        if isinstance(other, Fq):
            return other.value
        if isinstance(other, int):
            return other
        return None

    def __int__(self) -> int:
        return self.value

    def __add__(self, other):
        o = self._coerce(other)
        return NotImplemented if o is None else Fq(self.value + o)

    __radd__ = __add__

    def __sub__(self, other):
        o = self._coerce(other)
        return NotImplemented if o is None else Fq(self.value - o)

    def __rsub__(self, other):
        o = self._coerce(other)
        return NotImplemented if o is None else Fq(o - self.value)

    def __mul__(self, other):
        o = self._coerce(other)
        return NotImplemented if o is None else Fq(self.value * o)

    __rmul__ = __mul__

    def __truediv__(self, other):
        o = self._coerce(other)
        return NotImplemented if o is None else Fq(self.value * _inv_mod(o))

    def __rtruediv__(self, other):
        o = self._coerce(other)
        return NotImplemented if o is None else Fq(o * _inv_mod(self.value))

    def __neg__(self):
        return Fq(-self.value)

    def __pow__(self, exponent: int):
        if exponent < 0:
            return Fq(pow(_inv_mod(self.value), -exponent, _Q))
        return Fq(pow(self.value, exponent, _Q))

    def __eq__(self, other):
        o = self._coerce(other)
        return NotImplemented if o is None else self.value == o % _Q

    def __hash__(self):
        return hash(("Fq", self.value))

    def __bool__(self):
        return self.value != 0

    def __repr__(self):
        return f"Fq({self.value:#x})"


class Fq2:
    """An element of the quadratic extension ``Fq[i] / (i^2 + 1)``."""

    __slots__ = ("c0", "c1")

    def __init__(self, c0: Union[int, Fq] = 0, c1: Union[int, Fq] = 0):
        self.c0 = int(c0) % _Q
        self.c1 = int(c1) % _Q

    @staticmethod
    def _coerce(other: Any):
        if isinstance(other, Fq2):
            return other.c0, other.c1
        if isinstance(other, (int, Fq)):
            return int(other), 0
        return None

    def __add__(self, other):
        o = self._coerce(other)
        return NotImplemented if o is None else Fq2(self.c0 + o[0], self.c1 + o[1])

    __radd__ = __add__

    def __sub__(self, other):
        o = self._coerce(other)
        return NotImplemented if o is None else Fq2(self.c0 - o[0], self.c1 - o[1])

    def __rsub__(self, other):
        o = self._coerce(other)
        return NotImplemented if o is None else Fq2(o[0] - self.c0, o[1] - self.c1)

    def __mul__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        a, b = self.c0, self.c1
        c, d = o
        return Fq2(a * c - b * d, a * d + b * c)

    __rmul__ = __mul__

    def _inverse(self) -> "Fq2":
        norm = _inv_mod(self.c0 * self.c0 + self.c1 * self.c1)
        return Fq2(self.c0 * norm, -self.c1 * norm)

    def __truediv__(self, other):
        o = self._coerce(other)
        return NotImplemented if o is None else self * Fq2(*o)._inverse()

    def __rtruediv__(self, other):
        o = self._coerce(other)
        return NotImplemented if o is None else Fq2(*o) * self._inverse()

    def __neg__(self):
        return Fq2(-self.c0, -self.c1)

    def __pow__(self, exponent: int):
        base = self if exponent >= 0 else self._inverse()
        result = Fq2(1)
        for bit in bin(abs(exponent))[2:]:
            result = result * result
            if bit == "1":
                result = result * base
        return result

    def __eq__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return (self.c0, self.c1) == (o[0] % _Q, o[1] % _Q)

    def __hash__(self):
        return hash(("Fq2", self.c0, self.c1))

    def __bool__(self):
        return bool(self.c0 or self.c1)

    def __repr__(self):
        return f"Fq2({self.c0:#x}, {self.c1:#x})"


# Fq12 = Fq[w] / (w^12 - 2 w^6 + 2); w^6 = 1 + i embeds Fq2.
_MODULUS_POLY = [2, 0, 0, 0, 0, 0, _Q - 2, 0, 0, 0, 0, 0, 1]


def _trim(p: list[int]) -> list[int]:
    while p and p[-1] == 0:
        p.pop()
    return p


def _pmul(a: list[int], b: list[int]) -> list[int]:
    if not a or not b:
        return []
    out = [0] * (len(a) + len(b) - 1)
    for i, x in enumerate(a):
        if x:
            for j, y in enumerate(b):
                out[i + j] += x * y
    return _trim([c % _Q for c in out])


def _psub(a: list[int], b: list[int]) -> list[int]:
    size = max(len(a), len(b))
    a = a + [0] * (size - len(a))
    b = b + [0] * (size - len(b))
    return _trim([(x - y) % _Q for x, y in zip(a, b)])


def _pdivmod(a: list[int], b: list[int]) -> tuple[list[int], list[int]]:
    rem = list(a)
    db = len(b) - 1
    lead_inv = pow(b[-1], -1, _Q)
    quot = [0] * max(len(a) - db, 1)
    for i in range(len(a) - 1 - db, -1, -1):
        c = rem[i + db] * lead_inv % _Q
        quot[i] = c
        if c:
            for j, bj in enumerate(b):
                rem[i + j] = (rem[i + j] - c * bj) % _Q
    return _trim(quot), _trim(rem[:db])


def _fq12_inverse(coeffs: Sequence[int]) -> list[int]:
    r0, r1 = list(_MODULUS_POLY), _trim(list(coeffs))
    if not r1:
        raise ZeroDivisionError("inverse of zero field element")
    s0: list[int] = []
    s1 = [1]
    while len(r1) > 1:
        quot, rem = _pdivmod(r0, r1)
        r0, r1 = r1, rem
        s0, s1 = s1, _psub(s0, _pmul(quot, s1))
    inv = pow(r1[0], -1, _Q)
    result = [c * inv % _Q for c in s1]
    return result + [0] * (12 - len(result))


class Fq12:
    """An element of the degree-12 extension field, the pairing target."""

    __slots__ = ("coeffs",)

    def __init__(self, coeffs: Union[int, Fq, Iterable[int]] = 0):
        if isinstance(coeffs, (int, Fq)):
            values = [int(coeffs)] + [0] * 11
        else:
            values = [int(c) for c in coeffs]
            if len(values) != 12:
                raise ValueError("an Fq12 element needs exactly 12 coefficients")
        self.coeffs = tuple(c % _Q for c in values)

    @staticmethod
    def _coerce(other: Any):
        if isinstance(other, Fq12):
            return other.coeffs
        if isinstance(other, (int, Fq)):
            return (int(other),) + (0,) * 11
        return None

    def __add__(self, other):
        o = self._coerce(other)
        return NotImplemented if o is None else Fq12(a + b for a, b in zip(self.coeffs, o))

    __radd__ = __add__

    def __sub__(self, other):
        o = self._coerce(other)
        return NotImplemented if o is None else Fq12(a - b for a, b in zip(self.coeffs, o))

    def __rsub__(self, other):
        o = self._coerce(other)
        return NotImplemented if o is None else Fq12(b - a for a, b in zip(self.coeffs, o))

    def __mul__(self, other):
        if isinstance(other, (int, Fq)):
            k = int(other)
            return Fq12(c * k for c in self.coeffs)
        if not isinstance(other, Fq12):
            return NotImplemented
        t = [0] * 23
        for i, a in enumerate(self.coeffs):
            if a:
                for j, b in enumerate(other.coeffs):
                    t[i + j] += a * b
        for i in range(22, 11, -1):
            c = t[i]
            if c:
                t[i - 6] += 2 * c
                t[i - 12] -= 2 * c
        return Fq12(t[:12])

    __rmul__ = __mul__

    def __truediv__(self, other):
        o = self._coerce(other)
        return NotImplemented if o is None else self * Fq12(_fq12_inverse(o))

    def __rtruediv__(self, other):
        o = self._coerce(other)
        return NotImplemented if o is None else Fq12(o) * Fq12(_fq12_inverse(self.coeffs))

    def __neg__(self):
        return Fq12(-c for c in self.coeffs)

    def __pow__(self, exponent: int):
        base = self if exponent >= 0 else Fq12(_fq12_inverse(self.coeffs))
        result = Fq12(1)
        for bit in bin(abs(exponent))[2:]:
            result = result * result
            if bit == "1":
                result = result * base
        return result

    def __eq__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self.coeffs == tuple(c % _Q for c in o)

    def __hash__(self):
        return hash(("Fq12", self.coeffs))

    def __bool__(self):
        return any(self.coeffs)

    def __repr__(self):
        return f"Fq12({list(self.coeffs)!r})"


_CURVE_B = {Fq: Fq(3), Fq2: Fq2(4, 4), Fq12: Fq12(4)}


@dataclass(frozen=True, eq=False)
class CurvePoint:
    """An affine point on ``y^2 = x^3 + b`` over ``Fq`` (G1) or ``Fq2`` (G2)."""

    x: Any
    y: Any
    infinity: bool = False

    @classmethod
    def identity(cls, field: type) -> "CurvePoint":
        """The point at infinity over the given coordinate field."""
        return cls(field(0), field(1), True)

    @property
    def _field(self) -> type:
        return type(self.x)

    def is_identity(self) -> bool:
        """Whether this is the point at infinity."""
        return self.infinity

    def is_on_curve(self) -> bool:
        """Whether the point satisfies the curve equation."""
        if self.infinity:
            return True
        return self.y * self.y == self.x * self.x * self.x + _CURVE_B[self._field]

    def __eq__(self, other):
        if not isinstance(other, CurvePoint):
            return NotImplemented
        if self.infinity or other.infinity:
            return self.infinity and other.infinity
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash(("point", None) if self.infinity else ("point", self.x, self.y))

    def __neg__(self):
        if self.infinity:
            return self
        return CurvePoint(self.x, -self.y)

    def __add__(self, other):
        if not isinstance(other, CurvePoint):
            return NotImplemented
        return _from_jac(_jac_add(_to_jac(self), _to_jac(other)), self._field)

    def __sub__(self, other):
        if not isinstance(other, CurvePoint):
            return NotImplemented
        return self + (-other)

    def __mul__(self, scalar):
        if not isinstance(scalar, int):
            return NotImplemented
        return msm([self], [scalar])

    __rmul__ = __mul__


def _to_jac(p: CurvePoint):
    return None if p.infinity else (p.x, p.y, p._field(1))


def _from_jac(p, field: type) -> CurvePoint:
    if p is None:
        return CurvePoint.identity(field)
    x, y, z = p
    zinv = 1 / z
    zinv2 = zinv * zinv
    return CurvePoint(x * zinv2, y * zinv2 * zinv)


def _jac_double(p):
    if p is None:
        return None
    x, y, z = p
    if not y:
        return None
    a = x * x
    b = y * y
    c = b * b
    d = 2 * ((x + b) * (x + b) - a - c)
    e = 3 * a
    f = e * e
    x3 = f - 2 * d
    return x3, e * (d - x3) - 8 * c, 2 * y * z


def _jac_add(p, q):
    if p is None:
        return q
    if q is None:
        return p
    x1, y1, z1 = p
    x2, y2, z2 = q
    z1z1 = z1 * z1
    z2z2 = z2 * z2
    u1 = x1 * z2z2
    u2 = x2 * z1z1
    s1 = y1 * z2 * z2z2
    s2 = y2 * z1 * z1z1
    if u1 == u2:
        return _jac_double(p) if s1 == s2 else None
    h = u2 - u1
    i = (2 * h) * (2 * h)
    j = h * i
    r = 2 * (s2 - s1)
    v = u1 * i
    x3 = r * r - j - 2 * v
    y3 = r * (v - x3) - 2 * s1 * j
    z3 = ((z1 + z2) * (z1 + z2) - z1z1 - z2z2) * h
    return x3, y3, z3


def msm(bases: Sequence[CurvePoint], scalars: Sequence[int]) -> CurvePoint:
    """Multi-scalar multiplication ``sum(s_i * B_i)`` over the shorter input."""
    field = bases[0]._field if bases else Fq
    pairs = [
        (_to_jac(base), scalar % CURVE_ORDER)
        for base, scalar in zip(bases, scalars)
        if not base.infinity and scalar % CURVE_ORDER
    ]
    if not pairs:
        return CurvePoint.identity(field)
    top = max(s.bit_length() for _, s in pairs)
    acc = None
    for bit in range(top - 1, -1, -1):
        acc = _jac_double(acc)
        for point, scalar in pairs:
            if (scalar >> bit) & 1:
                acc = _jac_add(acc, point)
    return _from_jac(acc, field)


def g1_generator() -> CurvePoint:
    """The standard generator of G1."""
    return CurvePoint(
        Fq(int(
            "17f1d3a73197d7942695638c4fa9ac0fc3688c4f9774b905a14e3a3f171bac58"
            "6c55e83ff97a1aeffb3af00adb22c6bb", 16)),
        Fq(int(
            "08b3f481e3aaa0f1a09e30ed741d8ae4fcf5e095d5d00af600db18cb2c04b3ed"
            "d03cc744a2888ae40caa232946c5e7e1", 16)),
    )


def g2_generator() -> CurvePoint:
    """The standard generator of G2."""
    return CurvePoint(
        Fq2(
            int("024aa2b2f08f0a91260805272dc51051c6e47ad4fa403b02b4510b647ae3d177"
                "0bac0326a805bbefd48056c8c121bdb8", 16),
            int("13e02b6052719f607dacd3a088274f65596bd0d09920b61ab5da61bbdc7f5049"
                "334cf11213945d57e5ac7d055d042b7e", 16),
        ),
        Fq2(
            int("0ce5d527727d6e118cc9cdc6da2e351aadfd9baa8cbdd3a76d429a695160d12c"
                "923ac9cc3baca289e193548608b82801", 16),
            int("0606c4a02ea734cc32acd2b02bc28b99cb3e287e85a763af267492ab572e99ab"
                "3f370d275cec1da1aaa9075ff05f79be", 16),
        ),
    )


def random_scalar(rng: random.Random) -> int:
    """A uniformly random scalar modulo ``CURVE_ORDER``."""
    return rng.randrange(CURVE_ORDER)


_W = Fq12([0, 1] + [0] * 10)
_W_INV = 1 / _W
_W_INV2 = _W_INV * _W_INV
_W_INV3 = _W_INV2 * _W_INV


def _embed(a: Fq2) -> Fq12:
    coeffs = [0] * 12
    coeffs[0] = a.c0 - a.c1
    coeffs[6] = a.c1
    return Fq12(coeffs)


def _line(slope: Fq2, x1: Fq2, y1: Fq2, xp: int, yp: int) -> Fq12:
    m = _embed(slope) * _W_INV
    return m * (Fq12(xp) - _embed(x1) * _W_INV2) - (Fq12(yp) - _embed(y1) * _W_INV3)


def _miller_loop(q: CurvePoint, p: CurvePoint) -> Fq12:
    xp, yp = p.x.value, p.y.value
    rx, ry = q.x, q.y
    f = Fq12(1)
    for bit in range(ATE_LOOP_COUNT.bit_length() - 2, -1, -1):
        slope = (3 * rx * rx) / (2 * ry)
        f = f * f * _line(slope, rx, ry, xp, yp)
        nx = slope * slope - 2 * rx
        rx, ry = nx, slope * (rx - nx) - ry
        if (ATE_LOOP_COUNT >> bit) & 1:
            slope = (q.y - ry) / (q.x - rx)
            f = f * _line(slope, rx, ry, xp, yp)
            nx = slope * slope - rx - q.x
            rx, ry = nx, slope * (rx - nx) - ry
    return f


_FINAL_EXPONENT = (_Q ** 12 - 1) // CURVE_ORDER


def pairing(p: CurvePoint, q: CurvePoint) -> Fq12:
    """The bilinear pairing of a G1 point ``p`` and a G2 point ``q``."""
    if not isinstance(p.x, Fq) or not isinstance(q.x, Fq2):
        raise TypeError("pairing expects a G1 point and a G2 point")
    if p.infinity or q.infinity:
        return Fq12(1)
    return _miller_loop(q, p) ** _FINAL_EXPONENT