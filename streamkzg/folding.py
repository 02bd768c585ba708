"""Streaming folds of a coefficient stream under a list of challenges.

Coefficients arrive in big-endian order (highest degree first). At depth ``i``
two neighbouring coefficients ``rhs, lhs`` combine into
``rhs * challenges[i] + lhs``.
"""

from __future__ import annotations

from typing import Iterator, Sequence

from streamkzg.curve import CURVE_ORDER
from streamkzg.utils import ceil_div

_P = CURVE_ORDER


def _init_stack(n: int, depth: int) -> list[tuple[int, int]]:
    # Pad as if the stream were prefixed with zeros up to a multiple of 2^depth.
    stack: list[tuple[int, int]] = []
    chunk_size = 1 << depth
    if n % chunk_size:
        delta = chunk_size - n % chunk_size
        for i in reversed(range(depth)):
            if delta >= 1 << i:
                stack.append((i, 0))
                delta -= 1 << i
    return stack


def _fold_top(stack: list[tuple[int, int]], challenges: Sequence[int]) -> tuple[int, int]:
    _, lhs = stack.pop()
    level, rhs = stack.pop()
    return level + 1, (rhs * challenges[level] + lhs) % _P


class FoldedPolynomialTree:
    """Every intermediate fold of a stream, as ``(level, coefficient)`` pairs.

    Level-0 items (the input itself) are not produced.
    """

    def __init__(self, coefficients: Sequence[int], challenges: Sequence[int]):
        self.coefficients = coefficients
        self.challenges = list(challenges)

    def depth(self) -> int:
        """The number of folding rounds."""
        return len(self.challenges)

    def __len__(self) -> int:
        return len(self.coefficients)

    def __iter__(self) -> Iterator[tuple[int, int]]:
        depth = self.depth()
        stack = _init_stack(len(self.coefficients), depth)
        source = iter(self.coefficients)
        while True:
            if len(stack) > 1 and stack[-1][0] == stack[-2][0]:
                item = _fold_top(stack, self.challenges)
            else:
                try:
                    item = (0, next(source) % _P)
                except StopIteration:
                    return
            if item[0] != depth:
                stack.append(item)
            if item[0] != 0:
                yield item


class FoldedPolynomialStream:
    """The coefficients of the fully folded polynomial only."""

    def __init__(self, coefficients: Sequence[int], challenges: Sequence[int]):
        self.tree = FoldedPolynomialTree(coefficients, challenges)

    def __len__(self) -> int:
        return ceil_div(len(self.tree), 1 << self.tree.depth())

    def __iter__(self) -> Iterator[int]:
        challenges = self.tree.challenges
        target = len(challenges)
        stack = _init_stack(len(self.tree.coefficients), target)
        source = iter(self.tree.coefficients)
        while True:
            if len(stack) > 1 and stack[-1][0] == stack[-2][0]:
                level, element = _fold_top(stack, challenges)
            else:
                try:
                    if target > 0 and (not stack or stack[-1][0] != 0):
                        rhs = next(source)
                        lhs = next(source)
                        level, element = 1, (challenges[0] * rhs + lhs) % _P
                    else:
                        level, element = 0, next(source) % _P
                except StopIteration:
                    return
            if level != target:
                stack.append((level, element))
            else:
                yield element