"""lexperm — Lexicographic permutation enumeration via factoradics.

Enumerates the n! permutations of a sequence one at a time, in
lexicographic order of original positions, using a counter in the
factorial number system whose digits are Lehmer-decoded through a
masked view of the index range.

Public API:
    .. autosummary::
        lexicographically
        LexicographicIterator
        Factoradic
        MaskedSequence
        InvalidDigitError
        MaskedIndexError
        FactoradicOverflowError
        LexpermError
        get_rank_backend
        set_rank_backend
"""

from ._config import get_rank_backend, set_rank_backend
from .errors import (
    FactoradicOverflowError,
    InvalidDigitError,
    LexpermError,
    MaskedIndexError,
)
from .factoradic import Factoradic
from .iterator import LexicographicIterator, lexicographically
from .masked import MaskedSequence

__all__ = [
    "Factoradic",
    "FactoradicOverflowError",
    "InvalidDigitError",
    "LexicographicIterator",
    "LexpermError",
    "MaskedIndexError",
    "MaskedSequence",
    "get_rank_backend",
    "lexicographically",
    "set_rank_backend",
]

__version__ = "0.1.0"
