"""Exception hierarchy for lexperm.

Two failure classes exist:

* **Validation failures** — :class:`InvalidDigitError`, raised when an
  externally supplied digit vector does not fit the factorial number
  system.  Callers building counters from untrusted input are expected
  to catch it.
* **Contract violations** — :class:`MaskedIndexError`, raised when a
  :class:`~lexperm.masked.MaskedSequence` is addressed with a rank at or
  beyond its remaining count.  Decoding only ever derives ranks from
  validated digits, so this signals a bug in the calling code and is
  never worth retrying.

:class:`FactoradicOverflowError` covers reading an exhausted counter.
Overflow itself is a normal termination signal, not an error.
"""

from __future__ import annotations


class LexpermError(Exception):
    """Base class for all lexperm errors."""


class InvalidDigitError(LexpermError, ValueError):
    """A factoradic digit exceeds the place value at its position.

    Attributes:
        position: Index of the offending digit (0 = most significant).
        digit: The rejected digit.
        maximum: Largest digit allowed at *position*.
    """

    def __init__(self, position: int, digit: int, maximum: int) -> None:
        self.position = position
        self.digit = digit
        self.maximum = maximum
        super().__init__(
            f"Invalid digit {digit} at position {position}: "
            f"must be in [0, {maximum}]."
        )


class MaskedIndexError(LexpermError, IndexError):
    """A rank was outside ``[0, remaining)`` for a masked sequence."""


class FactoradicOverflowError(LexpermError, OverflowError):
    """The counter has overflowed and no longer denotes a permutation."""
