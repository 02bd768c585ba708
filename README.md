# streamkzg

KZG (Kate) polynomial commitments over the BLS12-381 pairing-friendly curve, written
in pure Python with no dependencies outside the standard library. There are two
flavours of committer:

- `streamkzg.time.CommitterKey` keeps the whole structured reference string in
  memory and takes polynomials as little-endian coefficient lists (constant term
  first).
- `streamkzg.space.CommitterKeyStream` reads the powers of the generator and the
  polynomial coefficients as streams, highest degree first, in a single forward
  pass.

Both give the same commitments and evaluation proofs. Proofs are checked with
`streamkzg.commitment.VerifierKey`, whose `verify` and `verify_multi_points`
methods return nothing on success and raise `VerificationError` on failure.

The test suite uses pytest, available through the `test` extra.

## Modules

- `streamkzg.curve`: the fields `Fq`, `Fq2` and `Fq12`, affine points
  (`CurvePoint`) for G1 and G2, `g1_generator()`, `g2_generator()`,
  `msm(bases, scalars)`, `pairing(p, q)` and `random_scalar(rng)`. Scalars are plain
  integers modulo `CURVE_ORDER`.
- `streamkzg.polynomial`: dense polynomials as integer lists: `poly_add`,
  `poly_mul`, `poly_scale`, `poly_divmod`, `evaluate_le`, `evaluate_be`,
  `powers`, `vanishing_polynomial`, `linear_combination`, `lagrange_basis` and
  `interpolate_poly`.
- `streamkzg.folding`: `FoldedPolynomialTree` and `FoldedPolynomialStream`.
- `streamkzg.commitment`: `Commitment`, `EvaluationProof`, `VerifierKey` and
  `VerificationError`.
- `streamkzg.time`: `CommitterKey`.
- `streamkzg.space`: `CommitterKeyStream`.
- `streamkzg.utils`: `ceil_div`, `ceil_mul`, the binary entropy `ent`, vector
  helpers (`inner_product`, `scalar_by_vector`, `vector_sum`) and a dense
  `Matrix` with `from_flat`, `from_rows`, `entry`, `rows`, `cols` and `row_mul`.

## Usage

```python
import random

from streamkzg.time import CommitterKey

rng = random.Random(0)
ck = CommitterKey.setup(max_degree=10, max_eval_points=3, rng=rng)
vk = ck.verifier_key()

f = [1, 2, 4, 8]
commitment = ck.commit(f)

alpha = 42
evaluation, proof = ck.open(f, alpha)
vk.verify(commitment, alpha, evaluation, proof)  # raises VerificationError on failure
```

### Opening several polynomials at several points

```python
from streamkzg.polynomial import evaluate_le

points = [3, 5, 7]
polys = [[1, 2, 3], [4, 5, 6, 7]]
evals = [[evaluate_le(p, x) for x in points] for p in polys]

commitments = ck.batch_commit(polys)
eta = 11
proof = ck.batch_open_multi_points(polys, points, eta)
vk.verify_multi_points(commitments, points, evals, proof, eta)
```

`batch_open_multi_points` raises `ValueError` when there are more points than the
key's `max_eval_points()`.

### Streaming

```python
from streamkzg.space import CommitterKeyStream

stream_ck = CommitterKeyStream.from_committer_key(ck)
reversed_f = list(reversed(f))
assert stream_ck.commit(reversed_f) == ck.commit(f)
evaluation, proof = stream_ck.open(reversed_f, alpha, max_msm_buffer=1 << 20)
```

`open_multi_points` divides a streamed polynomial by the vanishing polynomial of
the points and returns the big-endian remainder with a proof.
`as_committer_key(max_degree)` turns the stream back into an in-memory key, and
`verifier_key()` gives a key holding the lowest G1 power and all G2 powers.

### Folded polynomials

`FoldedPolynomialTree(coefficients, challenges)` reads big-endian coefficients and
yields every intermediate fold as `(level, coefficient)` pairs; at each level
neighbours `rhs, lhs` combine into `rhs * challenge + lhs`.
`FoldedPolynomialStream` yields only the coefficients of the fully folded
polynomial.

```python
from streamkzg.folding import FoldedPolynomialStream, FoldedPolynomialTree

list(FoldedPolynomialTree([1, 2, 1, 1], [1, 2]))    # [(1, 3), (1, 2), (2, 8)]
list(FoldedPolynomialStream([1, 2, 1, 1], [1, 2]))  # [8]
```

`CommitterKeyStream.commit_folding` commits to every level of a tree in one pass,
and `open_folding` evaluates every level at a set of points and returns the
remainders with one proof batched by the given challenges.

## What it does not do

- There is no trusted setup: `CommitterKey.setup` draws the trapdoor from the
  random generator it is given. A `random.Random` is fine for tests only.
- There is no serialisation of keys, commitments or proofs;
  `Commitment.size_in_bytes()` only reports the compressed G1 size (48 bytes).
- There is no command-line tool.
- All arithmetic, including the pairing, is pure Python and slow: a single
  pairing takes a noticeable fraction of a second or more.