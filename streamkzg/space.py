"""The space-efficient committer, reading keys and polynomials as streams.

The G1 powers of the key are kept in descending order, highest power first,
and polynomials are streamed big-endian, highest-degree coefficient first.
This lets every operation make a single forward pass over both.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from itertools import islice
from typing import Iterable, Iterator, Sequence

from streamkzg.commitment import Commitment, EvaluationProof, VerifierKey
from streamkzg.curve import CURVE_ORDER, CurvePoint, Fq, msm
from streamkzg.folding import FoldedPolynomialTree
from streamkzg.polynomial import vanishing_polynomial
from streamkzg.time import CommitterKey
from streamkzg.utils import ceil_div

_P = CURVE_ORDER

LENGTH_MISMATCH_MSG = "Expecting at least one element in the committer key."


class _ChunkedMSM:
    """Accumulates ``(base, scalar)`` pairs and folds them in bounded chunks."""

    def __init__(self, buffer_size: int):
        self._size = max(buffer_size, 1)
        self._bases: list[CurvePoint] = []
        self._scalars: list[int] = []
        self._result = CurvePoint.identity(Fq)

    def add(self, base: CurvePoint, scalar: int) -> None:
        self._bases.append(base)
        self._scalars.append(scalar)
        if len(self._bases) == self._size:
            self._flush()

    def _flush(self) -> None:
        if self._bases:
            self._result = self._result + msm(self._bases, self._scalars)
            self._bases.clear()
            self._scalars.clear()

    def finalize(self) -> CurvePoint:
        self._flush()
        return self._result


class _GroupedMSM:
    """Like ``_ChunkedMSM`` but sums the scalars of repeated bases first."""

    def __init__(self, buffer_size: int):
        self._size = max(buffer_size, 1)
        self._buffer: dict[CurvePoint, int] = {}
        self._result = CurvePoint.identity(Fq)

    def add(self, base: CurvePoint, scalar: int) -> None:
        self._buffer[base] = (self._buffer.get(base, 0) + scalar) % _P
        if len(self._buffer) == self._size:
            self._flush()

    def _flush(self) -> None:
        if self._buffer:
            self._result = self._result + msm(
                list(self._buffer), list(self._buffer.values())
            )
            self._buffer.clear()

    def finalize(self) -> CurvePoint:
        self._flush()
        return self._result


def _next_base(bases: Iterator[CurvePoint]) -> CurvePoint:
    try:
        return next(bases)
    except StopIteration:
        raise ValueError("the committer key is too short for this polynomial") from None


@dataclass
class CommitterKeyStream:
    """A committer key whose G1 powers are read as a descending stream."""

    powers_of_g: Sequence[CurvePoint] = field(default_factory=tuple)
    powers_of_g2: list[CurvePoint] = field(default_factory=list)

    @classmethod
    def from_committer_key(cls, ck: CommitterKey) -> "CommitterKeyStream":
        """The streaming view of an in-memory committer key."""
        return cls(tuple(reversed(ck.powers_of_g)), list(ck.powers_of_g2))

    def _bases_from(self, skip: int) -> Iterator[CurvePoint]:
        if skip < 0:
            raise ValueError("the committer key is too short for this polynomial")
        return islice(iter(self.powers_of_g), skip, None)

    def as_committer_key(self, max_degree: int) -> CommitterKey:
        """An in-memory key holding the ``max_degree`` lowest powers."""
        bases = list(self._bases_from(len(self.powers_of_g) - max_degree))
        bases.reverse()
        return CommitterKey(bases, list(self.powers_of_g2))

    def verifier_key(self) -> VerifierKey:
        """The matching verification key."""
        if len(self.powers_of_g) == 0:
            raise ValueError(LENGTH_MISMATCH_MSG)
        return VerifierKey([self.powers_of_g[-1]], list(self.powers_of_g2))

    def open(
        self, polynomial: Sequence[int], alpha: int, max_msm_buffer: int
    ) -> tuple[int, EvaluationProof]:
        """Evaluate a big-endian polynomial at ``alpha`` and prove it."""
        quotient = _ChunkedMSM(max_msm_buffer)
        bases = self._bases_from(len(self.powers_of_g) - len(polynomial))
        previous = 0
        for scalar, base in zip(polynomial, bases):
            quotient.add(base, previous)
            previous = (previous * alpha + scalar) % _P
        return previous, EvaluationProof(quotient.finalize())

    def open_multi_points(
        self, polynomial: Sequence[int], points: Sequence[int], max_msm_buffer: int
    ) -> tuple[list[int], EvaluationProof]:
        """Divide a big-endian polynomial by the vanishing polynomial of
        ``points``; return the big-endian remainder and a proof."""
        zeros = vanishing_polynomial(points)
        degree = len(zeros) - 1
        quotient = _ChunkedMSM(max_msm_buffer)
        bases = self._bases_from(len(self.powers_of_g) - len(polynomial) + degree)

        coefficients = iter(polynomial)
        state = deque(c % _P for c in islice(coefficients, len(points)))
        if len(state) < len(points):
            raise ValueError("the polynomial has fewer coefficients than points")

        for coefficient in coefficients:
            quotient_coefficient = state.popleft()
            state.append(coefficient % _P)
            for i in range(len(points)):
                state[i] = (state[i] - zeros[degree - i - 1] * quotient_coefficient) % _P
            quotient.add(_next_base(bases), quotient_coefficient)
        return list(state), EvaluationProof(quotient.finalize())

    def commit(self, polynomial: Sequence[int]) -> Commitment:
        """Commit to a polynomial streamed big-endian."""
        if len(self.powers_of_g) < len(polynomial):
            raise ValueError(
                f"polynomial has {len(polynomial)} coefficients but the key "
                f"holds only {len(self.powers_of_g)} powers"
            )
        bases = list(self._bases_from(len(self.powers_of_g) - len(polynomial)))
        return Commitment(msm(bases, list(polynomial)))

    def batch_commit(self, polynomials: Iterable[Sequence[int]]) -> list[Commitment]:
        """Commit to each streamed polynomial in turn."""
        return [self.commit(p) for p in polynomials]

    def commit_folding(
        self, polynomials: FoldedPolynomialTree, max_msm_buffer: int
    ) -> list[Commitment]:
        """Commitments to every folded polynomial of the tree, in one pass."""
        depth = polynomials.depth()
        accumulators: list[_ChunkedMSM] = []
        folded_bases: list[Iterator[CurvePoint]] = []
        for level in range(1, depth + 1):
            accumulators.append(_ChunkedMSM(max_msm_buffer // depth))
            delta = len(self.powers_of_g) - ceil_div(len(polynomials), 1 << level)
            folded_bases.append(self._bases_from(delta))

        for level, coefficient in polynomials:
            base = _next_base(folded_bases[level - 1])
            accumulators[level - 1].add(base, coefficient)

        return [Commitment(acc.finalize()) for acc in accumulators]

    def open_folding(
        self,
        polynomials: FoldedPolynomialTree,
        points: Sequence[int],
        etas: Sequence[int],
        max_msm_buffer: int,
    ) -> tuple[list[list[int]], EvaluationProof]:
        """Evaluate every folded polynomial at ``points`` and return the
        remainders with one proof batched by ``etas``."""
        depth = polynomials.depth()
        accumulator = _GroupedMSM(max_msm_buffer)
        zeros = vanishing_polynomial(points)
        degree = len(zeros) - 1
        remainders = [deque([0] * len(points)) for _ in range(depth)]
        folded_bases = [
            self._bases_from(
                len(self.powers_of_g) - ceil_div(len(polynomials), 1 << level)
            )
            for level in range(1, depth + 1)
        ]

        for level, coefficient in polynomials:
            if level == 0:
                continue
            base = _next_base(folded_bases[level - 1])
            remainder = remainders[level - 1]
            quotient_coefficient = remainder.popleft()
            remainder.append(coefficient % _P)
            for j in range(len(points)):
                remainder[j] = (
                    remainder[j] - zeros[degree - j - 1] * quotient_coefficient
                ) % _P
            accumulator.add(base, etas[level - 1] * quotient_coefficient % _P)

        return [list(r) for r in remainders], EvaluationProof(accumulator.finalize())