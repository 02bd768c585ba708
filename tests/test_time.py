import random

import pytest

from streamkzg.commitment import EvaluationProof, VerificationError
from streamkzg.curve import random_scalar
from streamkzg.polynomial import evaluate_le
from streamkzg.time import CommitterKey


def _rand_poly(degree, rng):
    return [random_scalar(rng) for _ in range(degree + 1)]


@pytest.fixture(scope="module")
def big_key():
    return CommitterKey.setup(100, 5, random.Random(1))


@pytest.fixture(scope="module")
def small_key():
    return CommitterKey.setup(10, 3, random.Random(2))


def test_srs(small_key):
    vk = small_key.verifier_key()
    assert len(small_key.powers_of_g) == 11
    assert small_key.powers_of_g2 == vk.powers_of_g2
    assert small_key.max_eval_points() == 3
    assert vk.powers_of_g == small_key.powers_of_g[:3]


def test_trivial_commitment(small_key):
    vk = small_key.verifier_key()
    polynomial = [0, 1, 1]
    alpha = 0
    commitment = small_key.commit(polynomial)
    evaluation, proof = small_key.open(polynomial, alpha)
    assert evaluation == 0
    vk.verify(commitment, alpha, evaluation, proof)


def test_commitment(big_key):
    rng = random.Random(3)
    vk = big_key.verifier_key()
    polynomial = _rand_poly(100, rng)
    alpha = 0
    commitment = big_key.commit(polynomial)
    evaluation, proof = big_key.open(polynomial, alpha)
    assert evaluation == evaluate_le(polynomial, alpha)
    vk.verify(commitment, alpha, evaluation, proof)


def test_open_multipoints_correctness(big_key):
    rng = random.Random(4)
    eval_points = [random_scalar(rng) for _ in range(5)]
    polynomials = [_rand_poly(100, rng) for _ in range(15)]
    evals = [[evaluate_le(p, e) for e in eval_points] for p in polynomials]
    vk = big_key.verifier_key()
    commitments = big_key.batch_commit(polynomials)
    eta = rng.getrandbits(128)
    proof = big_key.batch_open_multi_points(polynomials, eval_points, eta)
    vk.verify_multi_points(commitments, eval_points, evals, proof, eta)

    tampered = [list(row) for row in evals]
    tampered[0][0] = tampered[0][0] + 1
    with pytest.raises(VerificationError):
        vk.verify_multi_points(commitments, eval_points, tampered, proof, eta)


def test_open_evaluation_matches_horner(big_key):
    f = [1, 2, 4, 8]
    alpha = 42
    evaluation, proof = big_key.open(f, alpha)
    assert evaluation == evaluate_le(f, alpha)
    assert proof == big_key.open_multi_points(f, [alpha])


def test_open_empty_polynomial(small_key):
    evaluation, proof = small_key.open([], 7)
    assert evaluation == 0
    assert proof == EvaluationProof.zero()


def test_open_constant_polynomial_has_trivial_proof(small_key):
    evaluation, proof = small_key.open([9], 123)
    assert evaluation == 9
    assert proof.point.is_identity()


def test_batch_commit_matches_commit(small_key):
    polys = [[1, 2], [3], [0, 0, 5]]
    assert small_key.batch_commit(polys) == [small_key.commit(p) for p in polys]


def test_index_by_permutation(small_key):
    n = len(small_key.powers_of_g)
    reindexed = small_key.index_by(list(reversed(range(n))))
    assert reindexed.powers_of_g == list(reversed(small_key.powers_of_g))
    assert reindexed.powers_of_g2 == small_key.powers_of_g2


def test_index_by_collapses_to_one_base(small_key):
    n = len(small_key.powers_of_g)
    reindexed = small_key.index_by([0] * n)
    assert all(p.is_identity() for p in reindexed.powers_of_g[1:])
    assert reindexed.commit([1]) == small_key.commit([1] * n)


def test_batch_open_rejects_too_many_points(small_key):
    with pytest.raises(ValueError):
        small_key.batch_open_multi_points([[1, 2, 3]], [1, 2, 3, 4], 5)


def test_batch_open_single_polynomial_matches_open_multi(small_key):
    poly = [4, 0, 6, 1, 9]
    points = [2, 5]
    assert small_key.batch_open_multi_points([poly], points, 11) == (
        small_key.open_multi_points(poly, points)
    )