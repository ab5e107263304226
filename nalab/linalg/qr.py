"""
Householder QR factorizations.

Three renditions of the same algorithm are provided:

* :func:`naive_qr` embeds every reflector in an ``m x m`` identity and applies
  it with full matrix products (``O(n^4)`` for square input).
* :func:`fast_qr` writes the eliminated column directly and applies the
  reflector to the trailing block only, as ``M - 2 u (u^T M)`` (``O(n^3)``).
* :func:`householder_qr` keeps ``Q`` implicit as the list of reflector
  generators and expands it only on demand.

All three return the same ``Q`` and ``R`` up to rounding, since they share the
sign convention of :func:`nalab.linalg.householder.householder`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from nalab.diagnostics.core import assert_orthogonal, check_matrix
from nalab.diagnostics.debug_mode import is_debug_enabled
from nalab.linalg.householder import householder
from nalab.logging import get_logger

logger = get_logger(__name__)


def naive_qr(A: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    QR factorization by explicit products with embedded reflectors.

    For each column ``i`` the reflector of ``R[i:, i]`` is placed in the
    lower-right block of ``Q_i``, then ``R <- Q_i R`` and ``Q <- Q Q_i``.

    Args:
        A: ``m x n`` matrix.

    Returns:
        ``(Q, R)`` with ``Q`` orthogonal (``m x m``), ``R`` upper triangular
        (``m x n``) and ``Q @ R == A`` up to rounding.

    Raises:
        ValueError: If ``A`` is not a non-empty 2D array.
    """
    R = check_matrix(A)
    m, n = R.shape
    Q = np.eye(m)
    for i in range(min(m, n)):
        H, _ = householder(R[i:, i])
        Qi = np.eye(m)
        Qi[i:, i:] = H
        if is_debug_enabled():
            assert_orthogonal(Qi)
        R = Qi @ R
        Q = Q @ Qi
    logger.debug("naive_qr factorized %dx%d matrix", m, n)
    return Q, R


def fast_qr(A: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    QR factorization updating only the active sub-blocks.

    The diagonal entry of the eliminated column is set to the reflector's
    target ``beta`` and the entries below it to zero. The trailing block
    ``M = R[i:, i+1:]`` becomes ``M - 2 u (u^T M)`` and ``Q`` is updated on
    its trailing columns with the same expansion.

    Args:
        A: ``m x n`` matrix.

    Returns:
        ``(Q, R)`` matching :func:`naive_qr` up to rounding.

    Raises:
        ValueError: If ``A`` is not a non-empty 2D array.
    """
    R = check_matrix(A)
    m, n = R.shape
    Q = np.eye(m)
    for i in range(min(m, n)):
        reflector = householder(R[i:, i])
        u = reflector.vector
        R[i, i] = reflector.beta
        R[i + 1 :, i] = 0.0
        if i + 1 < n:
            R[i:, i + 1 :] = reflector.apply(R[i:, i + 1 :])
        # Q <- Q diag(I, H)
        Q[:, i:] -= 2.0 * np.outer(Q[:, i:] @ u, u)
    if is_debug_enabled():
        assert_orthogonal(Q, atol=1e-8)
    logger.debug("fast_qr factorized %dx%d matrix", m, n)
    return Q, R


@dataclass
class HouseholderQR:
    """
    QR factorization with ``Q`` stored as its reflector generators.

    ``Q = Q_1 Q_2 ... Q_k`` where ``Q_i = diag(I_i, I - 2 u_i u_i^T)``.

    Attributes:
        R: Upper-triangular factor (``m x n``).
        vectors: Unit generators ``u_i``; ``vectors[i]`` has length ``m - i``.
    """

    R: np.ndarray
    vectors: List[np.ndarray] = field(default_factory=list)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.R.shape

    def apply_qt(self, B: np.ndarray) -> np.ndarray:
        """Return ``Q^T @ B`` without forming ``Q``."""
        out = np.array(B, dtype=float, copy=True)
        if out.shape[0] != self.R.shape[0]:
            raise ValueError(
                f"B has {out.shape[0]} rows, expected {self.R.shape[0]}"
            )
        for i, u in enumerate(self.vectors):
            out[i:] -= 2.0 * _outer_or_scale(u, u @ out[i:])
        return out

    def apply_q(self, B: np.ndarray) -> np.ndarray:
        """Return ``Q @ B`` without forming ``Q``."""
        out = np.array(B, dtype=float, copy=True)
        if out.shape[0] != self.R.shape[0]:
            raise ValueError(
                f"B has {out.shape[0]} rows, expected {self.R.shape[0]}"
            )
        for i in range(len(self.vectors) - 1, -1, -1):
            u = self.vectors[i]
            out[i:] -= 2.0 * _outer_or_scale(u, u @ out[i:])
        return out

    def q(self) -> np.ndarray:
        """Expand the orthogonal factor as a dense ``m x m`` matrix."""
        return self.apply_q(np.eye(self.R.shape[0]))

    def solve(self, b: np.ndarray) -> np.ndarray:
        """
        Solve ``min ||A x - b||`` (exactly ``A x = b`` for square ``A``).

        Raises:
            ValueError: If ``A`` has more columns than rows or ``b`` has the
                wrong length.
            numpy.linalg.LinAlgError: If ``R`` has a zero diagonal entry.
        """
        m, n = self.R.shape
        if m < n:
            raise ValueError(f"solve requires m >= n, got shape {self.R.shape}")
        b = np.asarray(b, dtype=float)
        if b.ndim != 1:
            raise ValueError(f"b must be a 1D array, got shape {b.shape}")
        y = self.apply_qt(b)
        return back_substitution(self.R[:n, :n], y[:n])


def _outer_or_scale(u: np.ndarray, coeffs) -> np.ndarray:
    if np.ndim(coeffs) == 0:
        return u * coeffs
    return np.outer(u, coeffs)


def householder_qr(A: np.ndarray) -> HouseholderQR:
    """
    Compact QR factorization keeping ``Q`` as a sequence of reflectors.

    Costs ``O(m n^2)``; nothing of size ``m x m`` is formed until
    :meth:`HouseholderQR.q` is called.

    Raises:
        ValueError: If ``A`` is not a non-empty 2D array.
    """
    R = check_matrix(A)
    m, n = R.shape
    vectors: List[np.ndarray] = []
    for i in range(min(m, n)):
        reflector = householder(R[i:, i])
        R[i, i] = reflector.beta
        R[i + 1 :, i] = 0.0
        if i + 1 < n:
            R[i:, i + 1 :] = reflector.apply(R[i:, i + 1 :])
        vectors.append(reflector.vector)
    return HouseholderQR(R=R, vectors=vectors)


def back_substitution(U: np.ndarray, y: np.ndarray) -> np.ndarray:
    """
    Solve ``U x = y`` for square upper-triangular ``U``.

    Raises:
        numpy.linalg.LinAlgError: If a diagonal entry of ``U`` is zero.
    """
    n = U.shape[0]
    diag = np.abs(np.diag(U))
    if np.any(diag == 0.0):
        raise np.linalg.LinAlgError("Singular triangular factor")
    x = np.zeros(n)
    for i in range(n - 1, -1, -1):
        x[i] = (y[i] - U[i, i + 1 :] @ x[i + 1 :]) / U[i, i]
    return x


def qr_solve(A: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Solve ``A x = b`` in the least-squares sense via :func:`householder_qr`."""
    return householder_qr(A).solve(b)


__all__ = [
    "naive_qr",
    "fast_qr",
    "HouseholderQR",
    "householder_qr",
    "back_substitution",
    "qr_solve",
]
