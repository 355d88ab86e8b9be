"""Process-wide choice of rank index for masked sequences.

Every :class:`~lexperm.masked.MaskedSequence` built without an explicit
``backend`` argument asks this module which rank index to use.  The
choice only affects speed; all backends give identical results.

The active name is looked up in three places, in order:

* an override installed with :func:`set_rank_backend`;
* the ``LEXPERM_RANK_BACKEND`` environment variable;
* otherwise ``"scan"``.

Names are ``"scan"`` and ``"fenwick"``, matched case-insensitively.
Passing ``"auto"`` to :func:`set_rank_backend` drops the override.

Examples:
    From the shell::

        export LEXPERM_RANK_BACKEND=fenwick

    From Python::

        import lexperm
        lexperm.set_rank_backend("fenwick")
        ...
        lexperm.set_rank_backend("auto")
"""

from __future__ import annotations

import os

_VALID_BACKENDS = {"scan", "fenwick", "auto"}

_DEFAULT_BACKEND = "scan"

# None until set_rank_backend() is called.
_backend_override: str | None = None


def get_rank_backend() -> str:
    """Name of the rank backend new masked sequences will use.

    An override from :func:`set_rank_backend` wins, then a recognised
    ``LEXPERM_RANK_BACKEND`` value; unrecognised environment values are
    ignored.

    Returns:
        ``"scan"`` or ``"fenwick"``.
    """
    if _backend_override is not None and _backend_override != "auto":
        return _backend_override

    env = os.environ.get("LEXPERM_RANK_BACKEND", "").strip().lower()
    if env in ("scan", "fenwick"):
        return env

    return _DEFAULT_BACKEND


def set_rank_backend(name: str) -> None:
    """Pin the rank backend for this process.

    Args:
        name: ``"scan"`` or ``"fenwick"`` to pin a backend, or
            ``"auto"`` to fall back to the environment and default.

    Raises:
        ValueError: If *name* is not one of the accepted names.
    """
    global _backend_override
    normalised = name.strip().lower()
    if normalised not in _VALID_BACKENDS:
        raise ValueError(
            f"Unknown rank backend '{name}'. Choose from: {sorted(_VALID_BACKENDS)}"
        )
    _backend_override = normalised
