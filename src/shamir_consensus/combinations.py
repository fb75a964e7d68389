"""Lexicographic enumeration of k-element index subsets."""
from __future__ import annotations

import math
from itertools import islice
from typing import Iterator, List, Tuple

Subset = Tuple[int, ...]


def enumerate_combinations(n: int, k: int) -> Iterator[Subset]:
    """Yield every strictly increasing ``k``-tuple over ``range(n)``.

    Tuples come out in lexicographic order and there are exactly
    ``C(n, k)`` of them. The generator keeps one index array and advances it
    in place: find the rightmost position that can still grow, bump it, and
    reset everything to its right to the smallest values that keep the tuple
    increasing.
    """
    if n < 0:
        raise ValueError("n must be non-negative")
    if k < 1:
        raise ValueError("k must be at least 1")
    if k > n:
        return

    current = list(range(k))
    while True:
        yield tuple(current)
        pos = k - 1
        # position ``pos`` can hold at most n - k + pos
        while pos >= 0 and current[pos] == n - k + pos:
            pos -= 1
        if pos < 0:
            return
        current[pos] += 1
        for i in range(pos + 1, k):
            current[i] = current[i - 1] + 1


class CombinationEnumerator:
    """Restartable iterable over the ``k``-subsets of ``n`` share indices."""

    def __init__(self, n: int, k: int) -> None:
        if n < 0:
            raise ValueError("n must be non-negative")
        if k < 1:
            raise ValueError("k must be at least 1")
        self.n = n
        self.k = k

    def __iter__(self) -> Iterator[Subset]:
        return enumerate_combinations(self.n, self.k)

    def __len__(self) -> int:
        return math.comb(self.n, self.k)

    def batches(self, size: int) -> Iterator[Tuple[int, List[Subset]]]:
        """Yield ``(ordinal_of_first_subset, subsets)`` chunks of ``size``."""
        if size < 1:
            raise ValueError("Batch size must be positive")
        source = iter(self)
        ordinal = 0
        while True:
            chunk = list(islice(source, size))
            if not chunk:
                return
            yield ordinal, chunk
            ordinal += len(chunk)

    def __repr__(self) -> str:
        return f"CombinationEnumerator(n={self.n}, k={self.k})"


__all__ = ["Subset", "enumerate_combinations", "CombinationEnumerator"]
