"""nalab - steepest descent and Householder QR numerical kernels."""

__version__ = "0.1.0"

# Diagnostics
from .diagnostics import (
    assert_orthogonal,
    assert_symmetric,
    assert_upper_triangular,
    debug_context,
    is_debug_enabled,
    is_orthogonal,
    is_symmetric,
    is_upper_triangular,
    set_debug_enabled,
)

# Householder QR
from .linalg import (
    HouseholderQR,
    Reflector,
    fast_qr,
    householder,
    householder_qr,
    naive_qr,
    qr_solve,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Optimization
from .optimize import (
    BisectionResult,
    LineSearchError,
    OptimizeResult,
    Problem,
    Status,
    autograd_derivative,
    bisection,
    central_difference,
    exact_line_search,
    find_interval,
    quadratic_steepest_descent,
    restrict,
    steepest_descent,
)

__all__ = [
    "__version__",
    # Diagnostics
    "assert_orthogonal",
    "assert_symmetric",
    "assert_upper_triangular",
    "debug_context",
    "is_debug_enabled",
    "is_orthogonal",
    "is_symmetric",
    "is_upper_triangular",
    "set_debug_enabled",
    # Householder QR
    "HouseholderQR",
    "Reflector",
    "fast_qr",
    "householder",
    "householder_qr",
    "naive_qr",
    "qr_solve",
    # Logging
    "configure_logging",
    "get_logger",
    "set_log_level",
    # Optimization
    "BisectionResult",
    "LineSearchError",
    "OptimizeResult",
    "Problem",
    "Status",
    "autograd_derivative",
    "bisection",
    "central_difference",
    "exact_line_search",
    "find_interval",
    "quadratic_steepest_descent",
    "restrict",
    "steepest_descent",
]
