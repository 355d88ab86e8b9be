"""Backend abstraction layer for rank-to-actual index translation.

A :class:`~lexperm.masked.MaskedSequence` addresses its entries either by
*actual* index (slot in the underlying storage) or by *rank* (the k-th
entry among those still unmasked, in original order).  Translating a
rank into an actual index is the only non-trivial operation of the view,
and it is delegated to a rank index built by the active backend.

Each backend implements :class:`RankBackendProtocol`, whose ``create``
method returns a :class:`RankIndexProtocol` bound to one mask array.
The masked view notifies its index of every mask/unmask so that
incremental structures stay in sync.

Two backends ship with the package:

* ``"scan"`` — walks the mask in original order.  O(n) per lookup,
  O(1) per mask/unmask.  Decoding one permutation costs O(n²), which
  is fine for the small n where enumerating n! permutations is
  feasible at all.
* ``"fenwick"`` — a binary indexed tree over the unmasked-count
  vector.  O(log n) per lookup and per mask/unmask.

Resolution follows the policy set by :mod:`.._config`:

1. Programmatic override via :func:`~lexperm.set_rank_backend`.
2. ``LEXPERM_RANK_BACKEND`` environment variable.
3. Default: ``"scan"``.

Adding a new backend requires a module ``_backends/_<name>.py`` with a
class implementing :class:`RankBackendProtocol`, a branch in
:func:`resolve_backend`, and the name in ``_VALID_BACKENDS`` in
:mod:`.._config`.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

import numpy as np

from .._config import get_rank_backend

logger = logging.getLogger(__name__)

# ------------------------------------------------------------------ #
# Protocols
# ------------------------------------------------------------------ #


@runtime_checkable
class RankIndexProtocol(Protocol):
    """Rank lookup structure bound to a single mask array."""

    def select(self, rank: int) -> int | None:
        """Return the actual index of the *rank*-th unmasked slot.

        Returns ``None`` when *rank* is negative or not smaller than
        the number of unmasked slots.
        """
        ...

    def mark_masked(self, actual_index: int) -> None:
        """Record that *actual_index* has just been masked."""
        ...

    def mark_unmasked(self, actual_index: int) -> None:
        """Record that *actual_index* has just been unmasked."""
        ...


@runtime_checkable
class RankBackendProtocol(Protocol):
    """Factory for :class:`RankIndexProtocol` instances.

    Attributes:
        name: Short identifier (e.g. ``"scan"``, ``"fenwick"``).
    """

    @property
    def name(self) -> str: ...

    def create(self, mask: np.ndarray) -> RankIndexProtocol:
        """Build a rank index over *mask* (``True`` = masked).

        The index may keep a reference to *mask*; the caller owns it
        and must report every change through ``mark_masked`` /
        ``mark_unmasked``.
        """
        ...


# ------------------------------------------------------------------ #
# Backend resolution
# ------------------------------------------------------------------ #

# Singleton cache — instantiated once per backend name.
_BACKEND_CACHE: dict[str, RankBackendProtocol] = {}


def resolve_backend(name: str | None = None) -> RankBackendProtocol:
    """Return a :class:`RankBackendProtocol` instance for *name*.

    When *name* is ``None`` (the default), the policy from
    :func:`~lexperm._config.get_rank_backend` is used.

    Args:
        name: ``"scan"``, ``"fenwick"`` (case-insensitive), or ``None``
            for policy default.

    Returns:
        A backend instance ready to build rank indices.

    Raises:
        ValueError: If *name* is not a recognised backend.
    """
    if name is None:
        name = get_rank_backend()
    name = name.strip().lower()

    if name in _BACKEND_CACHE:
        return _BACKEND_CACHE[name]

    if name == "scan":
        from ._scan import ScanBackend

        backend: RankBackendProtocol = ScanBackend()

    elif name == "fenwick":
        from ._fenwick import FenwickBackend

        backend = FenwickBackend()

    else:
        msg = f"Unknown rank backend {name!r}.  Choose 'scan' or 'fenwick'."
        raise ValueError(msg)

    logger.debug("Resolved rank backend %r", name)
    _BACKEND_CACHE[name] = backend
    return backend
