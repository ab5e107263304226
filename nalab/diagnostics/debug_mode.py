"""Process-wide switch for the invariant checks in nalab.

When enabled:

- :func:`nalab.optimize.line_search.bisection` re-evaluates ``phi'`` at both
  ends of the bracket after every halving and raises ``LineSearchError`` if
  the sign change is lost (two extra oracle calls per step);
- :func:`nalab.linalg.qr.naive_qr` asserts each embedded reflector is
  orthogonal, and :func:`nalab.linalg.qr.fast_qr` asserts the accumulated
  ``Q`` is.

The initial state comes from ``NALAB_DEBUG`` (``1``, ``true``, ``yes`` or
``on``, case-insensitive) when the module is imported.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator, Optional

_DEBUG_ENV_VAR = "NALAB_DEBUG"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env_flag(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _TRUTHY


_debug_enabled: bool = _env_flag(os.getenv(_DEBUG_ENV_VAR))


def is_debug_enabled() -> bool:
    """Return whether the bracket and orthogonality checks are active."""
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """Turn the checks on or off for the whole process, overriding ``NALAB_DEBUG``."""
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Set the debug flag for the duration of a ``with`` block.

    The previous value is restored on exit, also when the block raises,
    e.g. with the ``LineSearchError`` of a failed bracket check.

    Example
    -------
    >>> from nalab.linalg import fast_qr
    >>> import numpy as np
    >>> with debug_context(True):
    ...     Q, R = fast_qr(np.eye(2))
    """
    global _debug_enabled
    prev = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = prev
