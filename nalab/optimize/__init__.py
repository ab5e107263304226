"""Steepest-descent minimization with exact and bisection line searches.

Example
-------
>>> import numpy as np
>>> from nalab.optimize import quadratic_steepest_descent
>>> Q = np.array([[8.0, 8.0], [8.0, 18.0]])
>>> res = quadratic_steepest_descent(Q, np.zeros(2), np.array([0.3, -0.2]))
>>> bool(np.allclose(res.x, 0.0, atol=1e-6))
True
"""

from .core import (
    BISECTION_MAXITER,
    BRACKET_MAXITER,
    CURVATURE_TOL,
    DEFAULT_EPS,
    DEFAULT_MAXITER,
    LineSearchError,
    OptimizeResult,
    Problem,
    Status,
    check_convergence,
)
from .gradient import steepest_descent
from .line_search import (
    BisectionResult,
    bisection,
    exact_line_search,
    find_interval,
    restrict,
)
from .quadratic import quadratic_objective, quadratic_steepest_descent
from .utils import (
    approx_grad,
    autograd_derivative,
    central_difference,
    gradient_derivative,
)

__all__ = [
    "BISECTION_MAXITER",
    "BRACKET_MAXITER",
    "BisectionResult",
    "CURVATURE_TOL",
    "DEFAULT_EPS",
    "DEFAULT_MAXITER",
    "LineSearchError",
    "OptimizeResult",
    "Problem",
    "Status",
    "approx_grad",
    "autograd_derivative",
    "bisection",
    "central_difference",
    "check_convergence",
    "exact_line_search",
    "find_interval",
    "gradient_derivative",
    "quadratic_objective",
    "quadratic_steepest_descent",
    "restrict",
    "steepest_descent",
]
