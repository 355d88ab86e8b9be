"""Fixed-capacity sequence view with logical removal of entries.

A :class:`MaskedSequence` wraps a sequence of values and a parallel
boolean mask (``True`` = logically absent).  Entries are never moved or
deleted, so the original slot order is preserved for comparison
purposes while masked entries drop out of rank-based addressing.

Two addressing modes
--------------------
* **Actual index** — the slot in the underlying storage.  Used by
  :meth:`~MaskedSequence.is_masked_at_actual`,
  :meth:`~MaskedSequence.mask_at_actual` and
  :meth:`~MaskedSequence.unmask_at_actual`; O(1).
* **Rank** — the k-th entry (0-indexed) among the currently unmasked
  entries, in original order.  Translated to an actual index by the
  rank index of the active backend (see :mod:`lexperm._backends`).

Example over ``[10, 20, 30, 40]`` after masking actual index 1::

    actual:  0   1   2   3
    values:  10  20  30  40
    mask:    .   X   .   .
    rank:    0   -   1   2

``get_by_rank(1)`` therefore returns ``30``.

Invalid ranks are a contract violation of the caller and raise
:class:`~lexperm.errors.MaskedIndexError`.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

import numpy as np

from ._backends import RankBackendProtocol, resolve_backend
from .errors import MaskedIndexError

T = TypeVar("T")


class MaskedSequence(Generic[T]):
    """Indexed view supporting masking by rank or by actual index.

    Args:
        values: Initial values.  Copied into a list of fixed length;
            the view never grows or shrinks.
        backend: Rank backend name (``"scan"`` / ``"fenwick"``) or
            instance.  ``None`` uses the configured policy.

    Attributes:
        values: The stored values, in original order.
        mask: Boolean array, ``True`` where the entry is masked.
        remaining: Number of unmasked entries.
    """

    def __init__(
        self,
        values: Iterable[T],
        backend: str | RankBackendProtocol | None = None,
    ) -> None:
        self.values: list[T] = list(values)
        self.mask = np.zeros(len(self.values), dtype=bool)
        self.remaining = len(self.values)
        if backend is None or isinstance(backend, str):
            backend = resolve_backend(backend)
        self._index = backend.create(self.mask)

    # ---- rank addressing -------------------------------------------------

    def rank_to_actual(self, rank: int) -> int | None:
        """Return the actual index of the *rank*-th unmasked entry.

        Returns ``None`` if *rank* is not in ``[0, remaining)``.
        """
        if rank < 0 or rank >= self.remaining:
            return None
        return self._index.select(rank)

    def _require_actual(self, rank: int) -> int:
        actual = self.rank_to_actual(rank)
        if actual is None:
            raise MaskedIndexError(
                f"MaskedSequence rank {rank} out of range "
                f"(remaining={self.remaining})"
            )
        return actual

    def get_by_rank(self, rank: int) -> T:
        """Return the value of the *rank*-th unmasked entry.

        Raises:
            MaskedIndexError: If *rank* is not in ``[0, remaining)``.
        """
        return self.values[self._require_actual(rank)]

    def set_by_rank(self, rank: int, value: T) -> None:
        """Overwrite the value of the *rank*-th unmasked entry.

        Raises:
            MaskedIndexError: If *rank* is not in ``[0, remaining)``.
        """
        self.values[self._require_actual(rank)] = value

    def mask_by_rank(self, rank: int) -> None:
        """Mask the *rank*-th unmasked entry.

        Raises:
            MaskedIndexError: If *rank* is not in ``[0, remaining)``.
        """
        self.mask_at_actual(self._require_actual(rank))

    # ---- actual addressing -----------------------------------------------

    def _check_actual(self, actual_index: int) -> None:
        if not 0 <= actual_index < self.mask.size:
            raise MaskedIndexError(
                f"MaskedSequence actual index {actual_index} out of range "
                f"(capacity={self.mask.size})"
            )

    def is_masked_at_actual(self, actual_index: int) -> bool:
        self._check_actual(actual_index)
        return bool(self.mask[actual_index])

    def mask_at_actual(self, actual_index: int) -> None:
        """Mask the entry at *actual_index*; no-op if already masked."""
        self._check_actual(actual_index)
        if not self.mask[actual_index]:
            self.mask[actual_index] = True
            self.remaining -= 1
            self._index.mark_masked(actual_index)

    def unmask_at_actual(self, actual_index: int) -> None:
        """Unmask the entry at *actual_index*; no-op if not masked."""
        self._check_actual(actual_index)
        if self.mask[actual_index]:
            self.mask[actual_index] = False
            self.remaining += 1
            self._index.mark_unmasked(actual_index)

    # ---- container protocol ----------------------------------------------

    def __len__(self) -> int:
        return self.remaining

    def __iter__(self) -> Iterator[T]:
        for value, is_masked in zip(self.values, self.mask.tolist(), strict=True):
            if not is_masked:
                yield value

    def __repr__(self) -> str:
        return (
            f"MaskedSequence(values={self.values!r}, "
            f"mask={self.mask.tolist()!r}, remaining={self.remaining})"
        )
