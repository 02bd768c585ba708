"""Small numeric helpers and a dense matrix type."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Sequence


def ent(x: float) -> float:
    """Binary entropy of ``x``, which must lie in [0, 1]."""
    if not 0.0 <= x <= 1.0:
        raise ValueError(f"entropy argument must lie in [0, 1], got {x}")
    if x in (0.0, 1.0):
        return 0.0
    return -x * math.log2(x) - (1.0 - x) * math.log2(1.0 - x)


def ceil_mul(a: int, b: tuple[int, int]) -> int:
    """Ceiling of ``a * b`` where ``b`` is the rational ``b[0] / b[1]``."""
    numerator, denominator = b
    return (a * numerator + denominator - 1) // denominator


def ceil_div(x: int, y: int) -> int:
    """Ceiling of ``x / y``."""
    return (x + y - 1) // y


def inner_product(v1: Sequence[Any], v2: Sequence[Any]) -> Any:
    """Sum of pairwise products of two vectors."""
    return sum(a * b for a, b in zip(v1, v2))


def scalar_by_vector(s: Any, v: Sequence[Any]) -> list[Any]:
    """Multiply every entry of ``v`` by ``s``."""
    return [x * s for x in v]


def vector_sum(v1: Sequence[Any], v2: Sequence[Any]) -> list[Any]:
    """Entry-wise sum of two vectors."""
    return [a + b for a, b in zip(v1, v2)]


@dataclass
class Matrix:
    """A dense ``n x m`` matrix stored by rows."""

    n: int = 0
    m: int = 0
    _entries: list[list[Any]] = field(default_factory=list, repr=False)

    @classmethod
    def from_flat(cls, n: int, m: int, entries: Sequence[Any]) -> "Matrix":
        """Build a matrix from a row-major list of ``n * m`` entries."""
        if len(entries) != n * m:
            raise ValueError(
                "Invalid matrix construction: dimensions are "
                f"{n} x {m} but entry vector has {len(entries)} entries"
            )
        rows = [list(entries[row * m:(row + 1) * m]) for row in range(n)]
        return cls(n, m, rows)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]]) -> "Matrix":
        """Build a matrix from a list of equally long rows."""
        if not rows:
            raise ValueError("Invalid matrix construction: no rows given")
        m = len(rows[0])
        if any(len(row) != m for row in rows[1:]):
            raise ValueError(
                "Invalid matrix construction: not all rows have the same length"
            )
        return cls(len(rows), m, [list(row) for row in rows])

    def entry(self, i: int, j: int) -> Any:
        """Entry at row ``i``, column ``j`` (zero based)."""
        return self._entries[i][j]

    def rows(self) -> list[list[Any]]:
        """A copy of the matrix as a list of rows."""
        return [list(row) for row in self._entries]

    def cols(self) -> list[list[Any]]:
        """The matrix as a list of columns."""
        return [list(col) for col in zip(*self._entries)] if self.n else [[] for _ in range(self.m)]

    def row_mul(self, v: Sequence[Any]) -> list[Any]:
        """The product ``v * self`` with ``v`` taken as a row vector."""
        if len(v) != self.n:
            raise ValueError(
                f"Invalid row multiplication: vector has {len(v)} elements "
                f"whereas each matrix column has {self.n}"
            )
        return [inner_product(v, col) for col in self.cols()]