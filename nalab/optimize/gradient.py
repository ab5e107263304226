"""Steepest descent for general differentiable objectives."""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np

from nalab.logging import get_logger

from .core import (
    BISECTION_MAXITER,
    BRACKET_MAXITER,
    DEFAULT_EPS,
    DEFAULT_MAXITER,
    Derivative,
    OptimizeResult,
    Problem,
    Status,
    check_convergence,
    check_positive,
)
from .line_search import exact_line_search, restrict
from .utils import approx_grad, gradient_derivative

logger = get_logger(__name__)


def _compute_gradient(problem: Problem, x: np.ndarray) -> np.ndarray:
    if problem.grad is not None:
        return np.asarray(problem.grad(x), dtype=float)
    return approx_grad(problem.fun, x)


def steepest_descent(
    problem: Problem,
    x0: np.ndarray,
    eps: float = DEFAULT_EPS,
    maxiter: int = DEFAULT_MAXITER,
    derivative: Optional[Derivative] = None,
    normalize: bool = True,
    bracket_maxiter: int = BRACKET_MAXITER,
    bisection_maxiter: int = BISECTION_MAXITER,
    callback: Optional[Callable[[np.ndarray, float, np.ndarray], None]] = None,
    history: bool = True,
) -> OptimizeResult:
    """
    Steepest descent with a bracketing + bisection line search.

    Each iteration moves along ``d = -g`` (scaled to unit length when
    ``normalize`` is set) by the step returned from
    :func:`nalab.optimize.line_search.exact_line_search`.

    Args:
        problem: Objective, with an optional analytic gradient.
        x0: Starting point.
        eps: Tolerance on ``||g||`` and on the line-search derivative.
        maxiter: Iteration cap.
        derivative: Line-search derivative oracle. Defaults to the
            directional derivative of ``problem.grad`` when available and to
            central differences otherwise.
        normalize: Use the unit steepest-descent direction.
        bracket_maxiter: Cap forwarded to ``find_interval``.
        bisection_maxiter: Cap forwarded to ``bisection``.
        callback: Called as ``callback(x, f(x), g)`` after every step.
        history: Record every iterate, ``x0`` first.

    Raises:
        ValueError: If ``x0`` is not 1D or ``eps`` is not positive.
        LineSearchError: If no bracket is found along a direction.
    """
    check_positive(eps, "eps")
    x = np.asarray(x0, dtype=float).copy()
    if x.ndim != 1:
        raise ValueError(f"x0 must be a 1D array, got shape {x.shape}")
    if problem.dim is not None and x.size != problem.dim:
        raise ValueError(f"x0 has length {x.size}, expected {problem.dim}")

    nfev = 0
    njev = 0

    def fun(point):
        nonlocal nfev
        nfev += 1
        return problem.fun(point)

    def grad_fn(point: np.ndarray) -> np.ndarray:
        nonlocal njev
        njev += 1
        return problem.grad(point)

    # every evaluation, line search included, goes through the counters
    counted = Problem(
        fun=fun,
        grad=grad_fn if problem.grad is not None else None,
        dim=problem.dim,
    )

    hist: list[np.ndarray] = []
    if history:
        hist.append(x.copy())
    nit = 0
    status = Status.MAX_ITER
    message = "Maximum iterations reached."
    grad_norm = float("inf")

    while nit < maxiter:
        grad = _compute_gradient(counted, x)
        grad_norm = float(np.linalg.norm(grad))
        if check_convergence(grad_norm, eps):
            status = Status.CONVERGED
            message = "Gradient tolerance satisfied."
            break

        direction = -grad / grad_norm if normalize else -grad
        phi = restrict(counted.fun, x, direction)
        oracle = derivative
        if oracle is None and counted.grad is not None:
            oracle = gradient_derivative(counted.grad, x, direction)
        search = exact_line_search(
            phi,
            eps=eps,
            derivative=oracle,
            bracket_maxiter=bracket_maxiter,
            bisection_maxiter=bisection_maxiter,
        )
        if not search.converged:
            logger.warning(
                "iter %d: line search stopped early, using alpha=%g", nit, search.alpha
            )

        x = x + search.alpha * direction
        nit += 1
        logger.debug(
            "iter %d: alpha=%g, |g|=%g, %d oracle calls",
            nit,
            search.alpha,
            grad_norm,
            search.nderiv,
        )
        if callback is not None:
            fx = fun(x)
            callback(x.copy(), fx, grad.copy())
        if history:
            hist.append(x.copy())
    else:
        grad = _compute_gradient(counted, x)
        grad_norm = float(np.linalg.norm(grad))

    if status is Status.MAX_ITER:
        logger.warning("steepest_descent hit maxiter=%d (|g|=%g)", maxiter, grad_norm)
    else:
        logger.info("steepest_descent converged after %d iterations", nit)

    fx = fun(x)
    return OptimizeResult(
        x=x,
        fun=float(fx),
        nit=nit,
        success=status is Status.CONVERGED,
        status=status,
        message=message,
        grad_norm=grad_norm,
        nfev=nfev,
        njev=njev,
        history=hist,
    )


__all__ = ["steepest_descent"]
