"""Lazy lexicographic enumeration of all permutations of a sequence.

:class:`LexicographicIterator` drives a :class:`~lexperm.factoradic.Factoradic`
from ordinal 0 to n!−1.  Each call to ``next()`` decodes the current
digits into an index permutation, maps the indices onto the caller's
sequence and then increments the counter.  Only one permutation exists
in memory at a time, so the n! reference set is never materialised.

Ordering is by *original position*: element 0 of the source sorts before
element 1, and so on.  This coincides with value order only when the
source is already sorted.

    >>> list(lexicographically("abc"))
    [('a', 'b', 'c'), ('a', 'c', 'b'), ('b', 'a', 'c'),
     ('b', 'c', 'a'), ('c', 'a', 'b'), ('c', 'b', 'a')]

Aliasing contract
-----------------
The iterator keeps a reference to the caller's sequence, not a copy, and
every produced tuple holds the caller's own element objects.  The
sequence must not be mutated while the iterator is alive.  This is not
checked at run time.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator, Sequence
from typing import Generic, TypeVar

from ._backends import RankBackendProtocol
from .factoradic import Factoradic

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LexicographicIterator(Iterator[tuple[T, ...]], Generic[T]):
    """Pull-based iterator over the n! permutations of *sequence*.

    The iterator is either *active* (counter not overflowed) or
    *exhausted*.  Once exhausted it raises ``StopIteration`` on every
    call; it cannot be reset, only replaced by a new instance.

    Args:
        sequence: Source elements.  Borrowed for the iterator's lifetime.
        backend: Rank backend used when decoding each permutation;
            ``None`` uses the configured policy.
    """

    def __init__(
        self,
        sequence: Sequence[T],
        backend: str | RankBackendProtocol | None = None,
    ) -> None:
        self._sequence = sequence
        self._backend = backend
        self._counter = Factoradic(len(sequence))
        self._position = 0
        self._total = math.factorial(len(sequence))

    @property
    def exhausted(self) -> bool:
        return self._counter.has_overflowed

    @property
    def position(self) -> int | None:
        """Ordinal of the permutation the next call returns, or ``None``."""
        return None if self.exhausted else self._position

    def __iter__(self) -> LexicographicIterator[T]:
        return self

    def __next__(self) -> tuple[T, ...]:
        if self._counter.has_overflowed:
            raise StopIteration

        indices = self._counter.to_permutation(backend=self._backend)
        sequence = self._sequence
        result = tuple(sequence[i] for i in indices.tolist())

        self._counter.increment()
        self._position += 1
        if self._counter.has_overflowed:
            logger.debug(
                "Enumeration of %d elements exhausted after %d permutations",
                len(sequence),
                self._position,
            )
        return result

    def __length_hint__(self) -> int:
        if self.exhausted:
            return 0
        return self._total - self._position


def lexicographically(
    sequence: Sequence[T],
    backend: str | RankBackendProtocol | None = None,
) -> LexicographicIterator[T]:
    """Return a lazy iterator over the permutations of *sequence*.

    Permutations come out as tuples in increasing lexicographic order of
    original positions, exactly ``len(sequence)!`` of them.  An empty
    sequence yields a single empty tuple.

    Args:
        sequence: Source elements; must not be mutated during iteration.
        backend: Rank backend name or instance, ``None`` for the policy
            default.

    Returns:
        A :class:`LexicographicIterator`.
    """
    return LexicographicIterator(sequence, backend=backend)
