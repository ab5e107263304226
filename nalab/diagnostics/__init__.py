"""Diagnostics and debugging utilities for nalab."""

from .core import (
    assert_orthogonal,
    assert_symmetric,
    assert_upper_triangular,
    check_matrix,
    check_vector,
    is_orthogonal,
    is_symmetric,
    is_upper_triangular,
)
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "check_vector",
    "check_matrix",
    "is_symmetric",
    "assert_symmetric",
    "is_orthogonal",
    "assert_orthogonal",
    "is_upper_triangular",
    "assert_upper_triangular",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
