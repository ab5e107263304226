"""Bracketing and bisection line search on a one-dimensional restriction.

Given ``phi(alpha) = f(x + alpha d)`` for a descent direction ``d``,
:func:`find_interval` doubles ``alpha`` until ``phi'`` stops being strongly
negative, and :func:`bisection` halves ``[0, alpha_bar]`` until
``|phi'(alpha)| <= eps``. Both take the derivative oracle as an argument.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np
import torch

from nalab.diagnostics.debug_mode import is_debug_enabled
from nalab.logging import get_logger

from .core import (
    BISECTION_MAXITER,
    BRACKET_MAXITER,
    DEFAULT_EPS,
    Array,
    Derivative,
    LineFunction,
    LineSearchError,
    Objective,
    Status,
    check_positive,
)
from .utils import central_difference

logger = get_logger(__name__)


@dataclass
class BisectionResult:
    """
    Outcome of :func:`bisection`.

    Attributes:
        alpha: Last evaluated step size.
        iterates: Brackets ``(lower, upper)``, starting with ``(0, alpha_bar)``.
        nit: Number of halvings performed.
        converged: Whether ``|phi'(alpha)| <= eps`` was reached.
        status: ``Status.CONVERGED`` or ``Status.MAX_ITER``.
        nderiv: Number of derivative-oracle calls, bracketing included when
            produced by :func:`exact_line_search`.
    """

    alpha: float
    iterates: List[Tuple[float, float]] = field(default_factory=list)
    nit: int = 0
    converged: bool = True
    status: Status = Status.CONVERGED
    nderiv: int = 0


def restrict(fun: Objective, x: Array, d: Array) -> LineFunction:
    """
    Return ``phi(alpha) = fun(x + alpha d)``.

    When ``alpha`` is a ``torch.Tensor`` the point is built as a tensor, so
    ``phi`` can be differentiated by :func:`~nalab.optimize.utils.autograd_derivative`
    provided ``fun`` is written with operations torch supports.
    """
    x = np.asarray(x, dtype=float).copy()
    d = np.asarray(d, dtype=float).copy()

    def phi(alpha):
        if isinstance(alpha, torch.Tensor):
            x_t = torch.as_tensor(x, dtype=alpha.dtype)
            d_t = torch.as_tensor(d, dtype=alpha.dtype)
            return fun(x_t + alpha * d_t)
        return fun(x + alpha * d)

    return phi


def find_interval(
    phi: LineFunction,
    eps: float = DEFAULT_EPS,
    derivative: Optional[Derivative] = None,
    alpha0: float = 1.0,
    max_iter: int = BRACKET_MAXITER,
) -> float:
    """
    Find ``alpha_bar`` such that ``phi'`` changes sign in ``(0, alpha_bar]``.

    Starting from ``alpha0`` the step is doubled while
    ``phi'(alpha) <= -eps``. The first step failing that test is returned.

    Args:
        phi: Restriction of the objective to the search ray.
        eps: Tolerance on the derivative.
        derivative: Oracle ``(phi, alpha) -> phi'(alpha)``; central
            differences when omitted.
        alpha0: Initial step.
        max_iter: Maximum number of derivative evaluations.

    Raises:
        ValueError: If ``eps``, ``alpha0`` or ``max_iter`` is not positive.
        LineSearchError: If ``phi`` is still decreasing after ``max_iter``
            evaluations, e.g. when it is unbounded below along the ray.
    """
    check_positive(eps, "eps")
    check_positive(alpha0, "alpha0")
    check_positive(max_iter, "max_iter")
    dphi = derivative if derivative is not None else central_difference
    alpha = float(alpha0)
    for _ in range(max_iter):
        slope = dphi(phi, alpha)
        if slope > -eps:
            logger.debug("find_interval: alpha_bar=%g (dphi=%g)", alpha, slope)
            return alpha
        alpha *= 2.0
    raise LineSearchError(
        f"find_interval did not converge: phi still decreasing at alpha={alpha / 2.0:g} "
        f"after {max_iter} evaluations"
    )


def bisection(
    phi: LineFunction,
    alpha_bar: float,
    eps: float = DEFAULT_EPS,
    derivative: Optional[Derivative] = None,
    max_iter: int = BISECTION_MAXITER,
) -> BisectionResult:
    """
    Locate a near-stationary point of ``phi`` in ``[0, alpha_bar]``.

    The midpoint of ``[lo, hi]`` replaces ``lo`` when ``phi'`` is negative
    there and ``hi`` otherwise, until ``|phi'(alpha)| <= eps``. The search
    starts by testing ``alpha_bar`` itself.

    Args:
        phi: Restriction of the objective to the search ray.
        alpha_bar: Upper end of the bracket, typically from
            :func:`find_interval`.
        eps: Tolerance on ``|phi'|``.
        derivative: Oracle ``(phi, alpha) -> phi'(alpha)``; central
            differences when omitted.
        max_iter: Maximum number of halvings.

    Returns:
        BisectionResult. When ``max_iter`` is exhausted the result carries
        ``converged=False`` and ``Status.MAX_ITER``.

    Raises:
        ValueError: If ``alpha_bar``, ``eps`` or ``max_iter`` is not positive.
        LineSearchError: In debug mode, if the bracket stops containing a
            sign change of ``phi'``.
    """
    check_positive(alpha_bar, "alpha_bar")
    check_positive(eps, "eps")
    check_positive(max_iter, "max_iter")
    oracle = derivative if derivative is not None else central_difference
    nderiv = 0

    def dphi(phi_: LineFunction, a: float) -> float:
        nonlocal nderiv
        nderiv += 1
        return oracle(phi_, a)

    lo = 0.0
    hi = float(alpha_bar)
    alpha = hi
    iterates: List[Tuple[float, float]] = [(lo, hi)]
    slope = dphi(phi, alpha)
    nit = 0

    while abs(slope) > eps:
        if nit >= max_iter:
            logger.warning(
                "bisection stopped after %d halvings with |dphi|=%g > eps=%g",
                nit,
                abs(slope),
                eps,
            )
            return BisectionResult(
                alpha=alpha,
                iterates=iterates,
                nit=nit,
                converged=False,
                status=Status.MAX_ITER,
                nderiv=nderiv,
            )
        alpha = 0.5 * (hi + lo)
        slope = dphi(phi, alpha)
        if slope < 0:
            lo = alpha
        else:
            hi = alpha
        iterates.append((lo, hi))
        nit += 1
        if is_debug_enabled():
            _check_bracket(phi, dphi, lo, hi, eps)

    logger.debug("bisection: alpha=%g after %d halvings", alpha, nit)
    return BisectionResult(alpha=alpha, iterates=iterates, nit=nit, nderiv=nderiv)


def _check_bracket(
    phi: LineFunction, dphi: Derivative, lo: float, hi: float, eps: float
) -> None:
    d_lo = dphi(phi, lo)
    d_hi = dphi(phi, hi)
    if d_lo > eps or d_hi < -eps:
        raise LineSearchError(
            f"bracket [{lo:g}, {hi:g}] lost its sign change: "
            f"dphi(lo)={d_lo:g}, dphi(hi)={d_hi:g}"
        )


def exact_line_search(
    phi: LineFunction,
    eps: float = DEFAULT_EPS,
    derivative: Optional[Derivative] = None,
    alpha0: float = 1.0,
    bracket_maxiter: int = BRACKET_MAXITER,
    bisection_maxiter: int = BISECTION_MAXITER,
) -> BisectionResult:
    """
    Run :func:`find_interval` followed by :func:`bisection`.

    ``nderiv`` on the result covers the oracle calls of both stages.
    """
    oracle = derivative if derivative is not None else central_difference
    bracket_calls = 0

    def dphi(phi_: LineFunction, a: float) -> float:
        nonlocal bracket_calls
        bracket_calls += 1
        return oracle(phi_, a)

    alpha_bar = find_interval(
        phi, eps=eps, derivative=dphi, alpha0=alpha0, max_iter=bracket_maxiter
    )
    result = bisection(
        phi, alpha_bar, eps=eps, derivative=oracle, max_iter=bisection_maxiter
    )
    result.nderiv += bracket_calls
    return result


__all__ = [
    "BisectionResult",
    "restrict",
    "find_interval",
    "bisection",
    "exact_line_search",
]
