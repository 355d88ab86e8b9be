"""Linear-scan rank index (always available, the default).

Every lookup walks the mask in original order and picks the *rank*-th
unmasked slot.  Nothing is cached, so mask and unmask notifications are
free and the index can never drift out of sync with the mask.
"""

from __future__ import annotations

import numpy as np


class ScanRankIndex:
    """Rank index that re-scans the shared mask on every lookup."""

    def __init__(self, mask: np.ndarray) -> None:
        self._mask = mask

    def select(self, rank: int) -> int | None:
        if rank < 0:
            return None
        unmasked = np.flatnonzero(~self._mask)
        if rank >= unmasked.size:
            return None
        return int(unmasked[rank])

    def mark_masked(self, actual_index: int) -> None:
        pass

    def mark_unmasked(self, actual_index: int) -> None:
        pass


class ScanBackend:
    """Backend producing :class:`ScanRankIndex` instances."""

    @property
    def name(self) -> str:
        return "scan"

    def create(self, mask: np.ndarray) -> ScanRankIndex:
        return ScanRankIndex(mask)
