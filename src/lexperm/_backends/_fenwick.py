"""Fenwick-tree (binary indexed tree) rank index.

The tree stores prefix sums of the *unmasked* indicator vector
``u[i] = not mask[i]``.  Finding the actual index of the rank-th
unmasked slot is then a search for the smallest position whose prefix
sum reaches ``rank + 1``, done top-down in O(log n) by binary lifting:

    pos = 0, need = rank + 1
    for step in (2^k, 2^(k-1), …, 1):
        if pos + step <= n and tree[pos + step] < need:
            pos  += step
            need -= tree[pos]
    → actual index = pos   (0-based)

Masking and unmasking are point updates of -1 / +1, also O(log n).
"""

from __future__ import annotations

import numpy as np


class FenwickRankIndex:
    """Rank index backed by a 1-based Fenwick tree of unmasked counts."""

    def __init__(self, mask: np.ndarray) -> None:
        n = int(mask.size)
        self._size = n
        self._total = int(n - np.count_nonzero(mask))
        # O(n) construction: seed each node with its own count, then
        # push it into its parent.
        tree = [0] * (n + 1)
        for i, is_masked in enumerate(mask.tolist(), start=1):
            tree[i] += 0 if is_masked else 1
            parent = i + (i & -i)
            if parent <= n:
                tree[parent] += tree[i]
        self._tree = tree
        self._top_step = 1 << (n.bit_length() - 1) if n else 0

    def _update(self, actual_index: int, delta: int) -> None:
        i = actual_index + 1
        while i <= self._size:
            self._tree[i] += delta
            i += i & -i

    def select(self, rank: int) -> int | None:
        if rank < 0 or rank >= self._total:
            return None
        pos = 0
        need = rank + 1
        step = self._top_step
        while step:
            nxt = pos + step
            if nxt <= self._size and self._tree[nxt] < need:
                pos = nxt
                need -= self._tree[nxt]
            step >>= 1
        return pos

    def mark_masked(self, actual_index: int) -> None:
        self._update(actual_index, -1)
        self._total -= 1

    def mark_unmasked(self, actual_index: int) -> None:
        self._update(actual_index, 1)
        self._total += 1


class FenwickBackend:
    """Backend producing :class:`FenwickRankIndex` instances."""

    @property
    def name(self) -> str:
        return "fenwick"

    def create(self, mask: np.ndarray) -> FenwickRankIndex:
        return FenwickRankIndex(mask)
