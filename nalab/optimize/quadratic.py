"""Steepest descent with exact line search for quadratic objectives.

For ``g = Q x + q`` and direction ``d = -g`` the restriction
``phi(alpha) = f(x - alpha g)`` is a parabola whose minimiser is

    alpha = ||g||^2 / (g^T Q g),

so every step is an exact line search.
"""

from __future__ import annotations

import numpy as np

from nalab.diagnostics.core import assert_symmetric, check_matrix, check_vector
from nalab.logging import get_logger

from .core import (
    CURVATURE_TOL,
    DEFAULT_EPS,
    DEFAULT_MAXITER,
    Array,
    Objective,
    OptimizeResult,
    Status,
    check_convergence,
    check_positive,
)

logger = get_logger(__name__)


def quadratic_objective(Q: Array, q: Array) -> Objective:
    """Return ``f(x) = 0.5 x^T Q x + q^T x``, whose gradient is ``Q x + q``."""
    Q = np.asarray(Q, dtype=float)
    q = np.asarray(q, dtype=float)

    def fun(x: Array) -> float:
        return float(0.5 * x @ (Q @ x) + q @ x)

    return fun


def quadratic_steepest_descent(
    Q: Array,
    q: Array,
    x0: Array,
    eps: float = DEFAULT_EPS,
    maxiter: int = DEFAULT_MAXITER,
) -> OptimizeResult:
    """
    Minimize a convex quadratic by steepest descent with exact steps.

    The iteration uses the gradient ``g = Q x + q``, so it minimizes
    ``f(x) = 0.5 x^T Q x + q^T x`` and converges to the solution of
    ``Q x = -q``. ``result.fun`` is this ``f`` (see
    :func:`quadratic_objective`), not ``x^T Q x + q^T x``, which differs
    from it by ``0.5 x^T Q x``.

    Args:
        Q: Symmetric positive semidefinite ``n x n`` matrix.
        q: Linear term of length ``n``.
        x0: Starting point of length ``n``.
        eps: Stop once ``||Q x + q|| <= eps``.
        maxiter: Iteration cap; reaching it is not an error.

    Returns:
        OptimizeResult whose ``history`` holds every iterate, ``x0`` first.
        ``status`` is ``CONVERGED``, ``DEGENERATE_CURVATURE`` (``g^T Q g``
        at most ``1e-12``: the current point is returned as a best effort)
        or ``MAX_ITER``.

    Raises:
        ValueError: If ``Q`` is not square and exactly symmetric, or if
            ``q`` or ``x0`` do not have length ``n``.
    """
    Q = check_matrix(Q, name="Q", square=True)
    assert_symmetric(Q)
    n = Q.shape[0]
    q = check_vector(q, name="q", size=n)
    x = check_vector(x0, name="x0", size=n)
    check_positive(eps, "eps")
    fun = quadratic_objective(Q, q)

    history = [x.copy()]
    status = Status.MAX_ITER
    message = "Maximum iterations reached."
    grad_norm = float("inf")
    nit = 0

    while nit < maxiter:
        grad = Q @ x + q
        grad_norm = float(np.linalg.norm(grad))
        if check_convergence(grad_norm, eps):
            status = Status.CONVERGED
            message = "Gradient tolerance satisfied."
            break

        curvature = float(grad @ (Q @ grad))
        if curvature <= CURVATURE_TOL:
            status = Status.DEGENERATE_CURVATURE
            message = "No curvature along the descent direction; problem may be unbounded below."
            logger.warning(
                "stopping at iteration %d: g^T Q g = %g <= %g", nit, curvature, CURVATURE_TOL
            )
            break

        alpha = grad_norm**2 / curvature
        x = x - alpha * grad
        history.append(x.copy())
        nit += 1
        logger.debug("iter %d: alpha=%g, |g|=%g", nit, alpha, grad_norm)
    else:
        grad = Q @ x + q
        grad_norm = float(np.linalg.norm(grad))

    if status is Status.MAX_ITER:
        logger.warning("quadratic_steepest_descent hit maxiter=%d (|g|=%g)", maxiter, grad_norm)
    else:
        logger.info("quadratic_steepest_descent: %s after %d iterations", status.value, nit)

    return OptimizeResult(
        x=x,
        fun=fun(x),
        nit=nit,
        success=status is Status.CONVERGED,
        status=status,
        message=message,
        grad_norm=grad_norm,
        history=history,
    )


__all__ = ["quadratic_objective", "quadratic_steepest_descent"]
