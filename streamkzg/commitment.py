"""Commitments, evaluation proofs and the verifier side of the scheme."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from streamkzg.curve import G1_COMPRESSED_SIZE, CurvePoint, Fq, msm, pairing
from streamkzg.polynomial import (
    interpolate_poly,
    lagrange_basis,
    linear_combination,
    powers,
    vanishing_polynomial,
)


@dataclass(frozen=True)
class Commitment:
    """A polynomial commitment: a single G1 point."""

    point: CurvePoint

    def size_in_bytes(self) -> int:
        """Size of the commitment in compressed serialised form."""
        return G1_COMPRESSED_SIZE


@dataclass(frozen=True)
class EvaluationProof:
    """A polynomial evaluation proof: a single G1 point."""

    point: CurvePoint

    def __add__(self, other: "EvaluationProof") -> "EvaluationProof":
        if not isinstance(other, EvaluationProof):
            return NotImplemented
        return EvaluationProof(self.point + other.point)

    @classmethod
    def zero(cls) -> "EvaluationProof":
        """The neutral proof, so that ``sum(proofs, EvaluationProof.zero())`` works."""
        return cls(CurvePoint.identity(Fq))


class VerificationError(Exception):
    """Raised when an evaluation proof does not verify."""

    def __init__(self, message: str = "Error in stream.") -> None:
        super().__init__(message)


@dataclass
class VerifierKey:
    """The verification key: a few powers of tau in G1 and in G2."""

    powers_of_g: list[CurvePoint] = field(default_factory=list)
    powers_of_g2: list[CurvePoint] = field(default_factory=list)

    def verify(
        self,
        commitment: Commitment,
        alpha: int,
        evaluation: int,
        proof: EvaluationProof,
    ) -> None:
        """Check that the committed polynomial takes ``evaluation`` at ``alpha``.

        Raises ``VerificationError`` if the proof is invalid.
        """
        shifted_g2 = msm(self.powers_of_g2, [-alpha, 1])
        lhs = commitment.point - self.powers_of_g[0] * evaluation
        g2 = self.powers_of_g2[0]
        if pairing(lhs, g2) != pairing(proof.point, shifted_g2):
            raise VerificationError()

    def verify_multi_points(
        self,
        commitments: Sequence[Commitment],
        eval_points: Sequence[int],
        evaluations: Sequence[Sequence[int]],
        proof: EvaluationProof,
        open_chal: int,
    ) -> None:
        """Check a batched proof for several polynomials at several points.

        ``evaluations[i][j]`` is the value of polynomial ``i`` at
        ``eval_points[j]``; ``open_chal`` batches the polynomials.
        Raises ``VerificationError`` if the proof is invalid.
        """
        zeros = msm(self.powers_of_g2, vanishing_polynomial(eval_points))
        sca_inverse, lang = lagrange_basis(eval_points)

        etas = powers(open_chal, len(evaluations))
        interpolated = [
            interpolate_poly(eval_points, evals, sca_inverse, lang)
            for evals in evaluations
        ]
        batched = linear_combination(interpolated, etas)
        if batched is None:
            raise ValueError("at least one list of evaluations is required")
        interpolated_commitment = msm(self.powers_of_g, batched)

        combined_commitment = msm([c.point for c in commitments], etas)
        g2 = self.powers_of_g2[0]
        lhs = pairing(combined_commitment - interpolated_commitment, g2)
        if lhs != pairing(proof.point, zeros):
            raise VerificationError()