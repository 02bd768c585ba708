"""The time-efficient committer, holding the whole key in memory."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from streamkzg.commitment import Commitment, EvaluationProof, VerifierKey
from streamkzg.curve import (
    CURVE_ORDER,
    CurvePoint,
    Fq,
    g1_generator,
    g2_generator,
    msm,
    random_scalar,
)
from streamkzg.polynomial import (
    linear_combination,
    poly_divmod,
    powers,
    vanishing_polynomial,
)


@dataclass
class CommitterKey:
    """Powers of tau in G1 up to the maximum degree, and in G2 up to the
    maximum number of evaluation points."""

    powers_of_g: list[CurvePoint] = field(default_factory=list)
    powers_of_g2: list[CurvePoint] = field(default_factory=list)

    @classmethod
    def setup(
        cls, max_degree: int, max_eval_points: int, rng: random.Random
    ) -> "CommitterKey":
        """Create a key for polynomials of degree up to ``max_degree`` and
        openings at up to ``max_eval_points`` points at once."""
        tau = random_scalar(rng)
        powers_of_tau = powers(tau, max_degree + 1)
        g = g1_generator() * random_scalar(rng)
        g2 = g2_generator() * random_scalar(rng)
        return cls(
            [g * t for t in powers_of_tau],
            [g2 * t for t in powers_of_tau[: max_eval_points + 1]],
        )

    def max_eval_points(self) -> int:
        """The bound on the number of evaluation points."""
        return len(self.powers_of_g2) - 1

    def verifier_key(self) -> VerifierKey:
        """The matching verification key."""
        bound = self.max_eval_points()
        return VerifierKey(
            list(self.powers_of_g[:bound]), list(self.powers_of_g2[: bound + 1])
        )

    def commit(self, polynomial: Sequence[int]) -> Commitment:
        """Commit to a polynomial given by little-endian coefficients."""
        return Commitment(msm(self.powers_of_g, polynomial))

    def index_by(self, indices: Iterable[int]) -> "CommitterKey":
        """A key whose ``i``-th base is the sum of the bases mapped to ``i``."""
        indexed = [CurvePoint.identity(Fq) for _ in self.powers_of_g]
        for index, g in zip(indices, self.powers_of_g):
            indexed[index] = indexed[index] + g
        return CommitterKey(indexed, list(self.powers_of_g2))

    def batch_commit(self, polynomials: Iterable[Sequence[int]]) -> list[Commitment]:
        """Commit to each polynomial in turn."""
        return [self.commit(p) for p in polynomials]

    def open(
        self, polynomial: Sequence[int], evaluation_point: int
    ) -> tuple[int, EvaluationProof]:
        """Evaluate ``polynomial`` at a point and prove the evaluation."""
        partial: list[int] = []
        previous = 0
        for c in reversed(polynomial):
            previous = (c + previous * evaluation_point) % CURVE_ORDER
            partial.append(previous)
        partial.reverse()
        if not partial:
            return 0, EvaluationProof(msm(self.powers_of_g, []))
        evaluation, *quotient = partial
        return evaluation, EvaluationProof(msm(self.powers_of_g, quotient))

    def open_multi_points(
        self, polynomial: Sequence[int], eval_points: Sequence[int]
    ) -> EvaluationProof:
        """A single proof of the evaluations of ``polynomial`` at all points."""
        quotient, _ = poly_divmod(polynomial, vanishing_polynomial(eval_points))
        return EvaluationProof(self.commit(quotient).point)

    def batch_open_multi_points(
        self,
        polynomials: Sequence[Sequence[int]],
        eval_points: Sequence[int],
        eval_chal: int,
    ) -> EvaluationProof:
        """A single proof for several polynomials at several points,
        batched by powers of ``eval_chal``."""
        if len(eval_points) >= len(self.powers_of_g2):
            raise ValueError(
                f"too many evaluation points: {len(eval_points)}, "
                f"the key supports at most {self.max_eval_points()}"
            )
        etas = powers(eval_chal, len(polynomials))
        batched = linear_combination(polynomials, etas)
        if batched is None:
            batched = [0]
        return self.open_multi_points(batched, eval_points)