"""Fixed-length counter in the factorial number system.

Every integer k ∈ [0, n!) has a unique big-endian representation with
n digits d₀, d₁, …, dₙ₋₁ where digit dᵢ sits in the ``(n−1−i)``'s place
and is bounded by that place value:

    k = d₀·(n−1)! + d₁·(n−2)! + ··· + dₙ₋₁·0!,   0 <= dᵢ <= n−1−i

The rightmost digit (place 0) is therefore always 0.

Counting
--------
:meth:`Factoradic.increment` is an ordinary mixed-radix carry: starting
from the least significant digit, a digit already at its place value
wraps to 0 and carries left, otherwise it is bumped by one and the carry
stops.  Carrying past the most significant digit means every one of the
n! values has been visited; the digits have wrapped back to zero and the
counter switches to its *overflowed* state for good.  Overflow is kept as
an explicit flag rather than inferred from the digits so that a
freshly-wrapped counter is never confused with one at ordinal 0.

Decoding (Lehmer code)
----------------------
The digit sequence is a Lehmer code: digit dᵢ selects the dᵢ-th smallest
index not yet used.  Walking the digits left to right over a masked view
of ``[0, 1, …, n−1]`` yields the permutation of rank k in lexicographic
order.

Example for n=3, digits [1, 1, 0] (k = 1·2! + 1·1! = 3):
    pool=[0,1,2] → rank 1 = 1, pool=[0,2] → rank 1 = 2, pool=[0] → 0
    result = [1, 2, 0]
"""

from __future__ import annotations

import logging
import math
import operator
import warnings
from collections.abc import Iterable

import numpy as np

from ._backends import RankBackendProtocol
from .errors import FactoradicOverflowError, InvalidDigitError
from .masked import MaskedSequence

logger = logging.getLogger(__name__)

# 20! < 2**64 <= 21!: beyond this size the ordinal no longer fits the
# unsigned 64-bit range.
_UINT64_MAX_SIZE = 20


class Factoradic:
    """A number in the factorial number system with a fixed digit count.

    Args:
        size: Number of digits (the permutation length).  Zero is legal
            and denotes the single empty permutation.

    Attributes:
        digits: Big-endian digit array (``digits[0]`` is most significant).
        has_overflowed: ``True`` once the counter has been incremented
            past its maximum ``(n−1, n−2, …, 1, 0)``.
    """

    __hash__ = None  # mutable

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        self.digits = np.zeros(size, dtype=np.intp)
        self.has_overflowed = False

    @classmethod
    def new(cls, size: int) -> Factoradic:
        """Return a counter of *size* digits at ordinal 0."""
        return cls(size)

    @classmethod
    def from_digits(cls, digits: Iterable[int]) -> Factoradic:
        """Build a counter from an explicit big-endian digit sequence.

        Args:
            digits: One digit per position; ``digits[i]`` must lie in
                ``[0, len(digits) - 1 - i]``.

        Returns:
            A non-overflowed counter holding *digits*.

        Raises:
            InvalidDigitError: If any digit is negative or exceeds the
                place value at its position.  The first offending
                position is reported.
            TypeError: If *digits* are not integers.
        """
        try:
            values = [operator.index(digit) for digit in digits]
        except TypeError:
            raise TypeError("digits must be a flat sequence of integers") from None

        # Checked as Python ints so oversized digits never reach numpy.
        size = len(values)
        for pos, digit in enumerate(values):
            maximum = size - 1 - pos
            if not 0 <= digit <= maximum:
                raise InvalidDigitError(pos, digit, maximum)

        result = cls(size)
        result.digits[:] = values
        return result

    @classmethod
    def from_integer(cls, ordinal: int, size: int) -> Factoradic:
        """Build the counter whose :meth:`to_integer` equals *ordinal*.

        Args:
            ordinal: Value in ``[0, size!)``.
            size: Number of digits.

        Raises:
            ValueError: If *ordinal* is out of range for *size*.
        """
        total = math.factorial(size)
        if not 0 <= ordinal < total:
            raise ValueError(
                f"ordinal must be in [0, {total}) for size={size}, got {ordinal}"
            )
        result = cls(size)
        k = ordinal
        for i, place in enumerate(range(size - 1, -1, -1)):
            result.digits[i], k = divmod(k, math.factorial(place))
        return result

    @property
    def size(self) -> int:
        return int(self.digits.size)

    def increment(self) -> Factoradic:
        """Advance to the next value, carrying through saturated digits.

        After the maximum value the digits wrap to zero and
        :attr:`has_overflowed` becomes ``True``; from then on the call is
        a no-op.

        Returns:
            ``self``, for chaining.
        """
        if self.has_overflowed:
            return self

        digits = self.digits
        size = digits.size
        for i in range(size - 1, -1, -1):
            place = size - 1 - i
            if digits[i] == place:
                digits[i] = 0
            else:
                digits[i] += 1
                return self

        self.has_overflowed = True
        logger.debug("Factoradic of size %d overflowed", size)
        return self

    def _check_not_overflowed(self) -> None:
        if self.has_overflowed:
            raise FactoradicOverflowError(
                "Factoradic has overflowed and no longer denotes a value"
            )

    def to_integer(self) -> int:
        """Return the ordinal ``Σ digit · place!`` of the current state.

        Only ordinals below 2**64 are meaningful; a ``RuntimeWarning`` is
        emitted for counters with more than 20 digits.

        Raises:
            FactoradicOverflowError: If the counter has overflowed.
        """
        self._check_not_overflowed()
        if self.size > _UINT64_MAX_SIZE:
            warnings.warn(
                f"Factoradic of size {self.size} may exceed the unsigned "
                f"64-bit ordinal range (size <= {_UINT64_MAX_SIZE}).",
                RuntimeWarning,
                stacklevel=2,
            )
        total = 0
        factorial = 1
        for place, digit in enumerate(reversed(self.digits.tolist())):
            if place:
                factorial *= place
            total += digit * factorial
        return total

    def to_permutation(
        self, backend: str | RankBackendProtocol | None = None
    ) -> np.ndarray:
        """Decode the digits into a permutation of ``[0, size)``.

        Args:
            backend: Rank backend for the intermediate masked view;
                ``None`` uses the configured policy.

        Returns:
            Integer array of shape ``(size,)`` containing each of
            ``0 … size-1`` exactly once.

        Raises:
            FactoradicOverflowError: If the counter has overflowed.
        """
        self._check_not_overflowed()
        pool: MaskedSequence[int] = MaskedSequence(range(self.size), backend=backend)
        result = np.empty(self.size, dtype=np.intp)
        for i, digit in enumerate(self.digits.tolist()):
            result[i] = pool.get_by_rank(digit)
            pool.mask_by_rank(digit)
        return result

    def __len__(self) -> int:
        return self.size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Factoradic):
            return NotImplemented
        return (
            self.has_overflowed == other.has_overflowed
            and np.array_equal(self.digits, other.digits)
        )

    def __repr__(self) -> str:
        return (
            f"Factoradic(digits={self.digits.tolist()!r}, "
            f"has_overflowed={self.has_overflowed})"
        )
