import random
from itertools import islice

from streamkzg.curve import CURVE_ORDER
from streamkzg.folding import FoldedPolynomialStream, FoldedPolynomialTree
from streamkzg.polynomial import evaluate_be


def test_folded_polynomial():
    stream = FoldedPolynomialStream([1, 2, 1, 1], [1, 2])
    assert len(stream) == 1
    assert next(iter(stream)) == 2 + 2 * (1 + 2)

    stream = FoldedPolynomialStream([1] * 12, [1] * 4)
    assert list(stream)[-1] == 12


def test_folded_polynomial_tree():
    tree = FoldedPolynomialTree([1, 2, 1, 1], [1, 2])
    assert tree.depth() == 2
    assert len(tree) == 4
    assert list(tree) == [(1, 3), (1, 2), (2, 8)]

    tree = FoldedPolynomialTree([1] * 12, [1] * 4)
    rest = islice(iter(tree), 5, None)
    assert next(rest) == (1, 2)
    assert list(rest)[-1] == (4, 12)


def test_full_fold_evaluates_polynomial():
    rng = random.Random(3)
    coefficients = [rng.randrange(CURVE_ORDER) for _ in range(16)]
    beta = rng.randrange(CURVE_ORDER)
    challenges = [pow(beta, 1 << i, CURVE_ORDER) for i in range(4)]
    stream = FoldedPolynomialStream(coefficients, challenges)
    assert list(stream) == [evaluate_be(coefficients, beta)]
    top = [c for level, c in FoldedPolynomialTree(coefficients, challenges) if level == 4]
    assert top == [evaluate_be(coefficients, beta)]


def test_stream_matches_top_level_of_tree():
    rng = random.Random(5)
    coefficients = [rng.randrange(CURVE_ORDER) for _ in range(37)]
    challenges = [rng.randrange(CURVE_ORDER) for _ in range(3)]
    tree = FoldedPolynomialTree(coefficients, challenges)
    stream = FoldedPolynomialStream(coefficients, challenges)
    top = [c for level, c in tree if level == 3]
    assert list(stream) == top
    assert len(stream) == 5
    assert len(top) == 5


def test_level_counts():
    tree = FoldedPolynomialTree([1] * 16, [1, 1])
    levels = [level for level, _ in tree]
    assert levels.count(1) == 8
    assert levels.count(2) == 4
    assert 0 not in levels


def test_zero_depth_stream_passes_through():
    stream = FoldedPolynomialStream([4, 5, 6], [])
    assert list(stream) == [4, 5, 6]
    assert len(stream) == 3
    assert list(FoldedPolynomialTree([4, 5, 6], [])) == []