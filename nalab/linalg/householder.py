"""Householder reflectors.

For vectors ``x`` and ``y`` of equal norm, ``v = x - y``, ``u = v / ||v||``
and ``H = I - 2 u u^T`` satisfy ``H x = y``. Choosing
``y = (±||x||, 0, ..., 0)`` gives the reflector used to zero a column below
its first entry.

References:
    - Trefethen & Bau, *Numerical Linear Algebra* (1997), Lecture 10
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from nalab.diagnostics.core import check_vector


@dataclass(frozen=True)
class Reflector:
    """
    Householder reflection ``H = I - 2 u u^T``.

    Attributes:
        matrix: The dense reflection ``H`` (orthogonal, symmetric, involutory).
        vector: Unit generator ``u``; all zeros when ``H`` is the identity.
        beta: First entry of the target ``y = H x = (beta, 0, ..., 0)``.
    """

    matrix: np.ndarray
    vector: np.ndarray
    beta: float

    def __iter__(self) -> Iterator[np.ndarray]:
        # allows ``H, u = householder(x)``
        yield self.matrix
        yield self.vector

    def apply(self, mat: np.ndarray) -> np.ndarray:
        """Return ``H @ mat`` as ``mat - 2 u (u^T mat)`` without forming ``H``."""
        mat = np.asarray(mat, dtype=float)
        u = self.vector
        if mat.ndim == 1:
            return mat - 2.0 * u * (u @ mat)
        return mat - 2.0 * np.outer(u, u @ mat)


def householder(x: np.ndarray) -> Reflector:
    """
    Build the reflector sending ``x`` to ``(±||x||, 0, ..., 0)``.

    The sign of the target is the opposite of ``x[0]`` (negative when
    ``x[0] >= 0``) so that ``x - y`` does not suffer cancellation. If ``x``
    already equals ``(||x||, 0, ..., 0)`` the identity reflector with a zero
    generator is returned, since ``v = x - y`` would vanish. The zero vector
    falls in that case.

    Args:
        x: Non-empty 1D vector.

    Returns:
        Reflector with ``matrix @ x == (beta, 0, ..., 0)`` up to rounding.

    Raises:
        ValueError: If ``x`` is not a non-empty 1D array.
    """
    x = check_vector(x)
    n = x.size
    norm_x = float(np.linalg.norm(x))
    y = np.zeros(n)
    y[0] = norm_x

    if np.array_equal(x, y):
        return Reflector(matrix=np.eye(n), vector=np.zeros(n), beta=norm_x)

    if x[0] >= 0:
        y[0] = -y[0]

    v = x - y
    u = v / np.linalg.norm(v)
    H = np.eye(n) - 2.0 * np.outer(u, u)
    return Reflector(matrix=H, vector=u, beta=float(y[0]))


__all__ = ["Reflector", "householder"]
