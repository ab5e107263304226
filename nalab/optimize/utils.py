"""Derivative oracles and finite-difference helpers.

A derivative oracle has the signature ``derivative(phi, alpha) -> float`` and
returns ``phi'(alpha)`` for a scalar function ``phi`` of one real variable.
The line searches accept any such callable.
"""

from __future__ import annotations

from typing import Callable

import numpy as np
import torch

from .core import Array, Derivative, Gradient, LineFunction, Objective


def approx_grad(
    fun: Objective, x: Array, eps: float = 1e-6, return_evals: bool = False
) -> Array | tuple[Array, int]:
    """Compute a central-difference gradient approximation.

    Parameters
    ----------
    fun:
        Objective function returning a scalar given x.
    x:
        Point where the gradient is approximated.
    eps:
        Perturbation size for finite differences.
    """
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = np.asarray(x, dtype=float).copy()
    grad = np.zeros_like(x, dtype=float)
    evals = 0
    for i in range(x.size):
        ei = np.zeros_like(x)
        ei[i] = eps
        fx_plus = fun(x + ei)
        fx_minus = fun(x - ei)
        evals += 2
        grad[i] = (fx_plus - fx_minus) / (2.0 * eps)
    if return_evals:
        return grad, evals
    return grad


def central_difference(phi: LineFunction, alpha: float, h: float = 1e-6) -> float:
    """Return ``(phi(alpha + h) - phi(alpha - h)) / 2h``."""
    if h <= 0:
        raise ValueError("h must be positive")
    alpha = float(alpha)
    return float((phi(alpha + h) - phi(alpha - h)) / (2.0 * h))


def autograd_derivative(
    phi: Callable[[torch.Tensor], torch.Tensor], alpha: float
) -> float:
    """
    Differentiate ``phi`` at ``alpha`` with PyTorch autograd.

    ``phi`` must be written in torch operations and accept a 0-D
    ``float64`` tensor.

    Raises:
        ValueError: If ``phi`` does not return a 0-D tensor.
        RuntimeError: If autograd did not produce a gradient for ``alpha``.
    """
    alpha_local = torch.tensor(float(alpha), dtype=torch.float64, requires_grad=True)

    value = phi(alpha_local)

    if not isinstance(value, torch.Tensor) or value.ndim != 0:
        raise ValueError("phi must return a scalar tensor (0D)")

    value.backward()

    grad = alpha_local.grad
    if grad is None:
        raise RuntimeError("Autograd did not produce a gradient for alpha.")
    return float(grad.item())


def gradient_derivative(grad: Gradient, x: Array, d: Array) -> Derivative:
    """
    Build an oracle from a known gradient: ``phi'(alpha) = grad(x + alpha d) . d``.

    The returned callable ignores its ``phi`` argument.
    """
    x = np.asarray(x, dtype=float).copy()
    d = np.asarray(d, dtype=float).copy()

    def derivative(phi: LineFunction, alpha: float) -> float:
        return float(np.dot(grad(x + alpha * d), d))

    return derivative


__all__ = [
    "approx_grad",
    "central_difference",
    "autograd_derivative",
    "gradient_derivative",
]
