"""Core interfaces shared across the steepest-descent routines."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

import numpy as np

Array = np.ndarray
Objective = Callable[[Array], float]
Gradient = Callable[[Array], Array]
LineFunction = Callable[[float], float]
Derivative = Callable[[LineFunction, float], float]

DEFAULT_EPS = 1e-6
DEFAULT_MAXITER = 1000
CURVATURE_TOL = 1e-12
BRACKET_MAXITER = 60
BISECTION_MAXITER = 100


class Status(Enum):
    """Exit status of an iterative routine."""

    CONVERGED = "converged"
    DEGENERATE_CURVATURE = "degenerate_curvature"
    MAX_ITER = "max_iter"


class LineSearchError(RuntimeError):
    """Raised when a line search cannot produce a usable step."""


@dataclass(frozen=True)
class Problem:
    """Container describing an unconstrained minimization problem."""

    fun: Objective
    grad: Optional[Gradient] = None
    dim: Optional[int] = None


@dataclass
class OptimizeResult:
    """Standard result object returned by the descent solvers."""

    x: Array
    fun: float
    nit: int
    success: bool
    status: Status
    message: str
    grad_norm: float
    nfev: int = 0
    njev: int = 0
    history: List[Array] = field(default_factory=list)


def check_convergence(grad_norm: float, tol: float) -> bool:
    """Return True if gradient norm satisfies tolerance."""
    return grad_norm <= tol


def check_positive(value: float, name: str) -> None:
    """Raise ValueError unless ``value`` is strictly positive."""
    if not value > 0:
        raise ValueError(f"{name} must be positive, got {value}")


__all__ = [
    "Array",
    "Objective",
    "Gradient",
    "LineFunction",
    "Derivative",
    "Problem",
    "OptimizeResult",
    "Status",
    "LineSearchError",
    "check_convergence",
    "check_positive",
    "DEFAULT_EPS",
    "DEFAULT_MAXITER",
    "CURVATURE_TOL",
    "BRACKET_MAXITER",
    "BISECTION_MAXITER",
]
