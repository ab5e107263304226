"""Core diagnostic functions for vectors and matrices."""

from __future__ import annotations

import numpy as np


def check_vector(x: np.ndarray, name: str = "x", size: int | None = None) -> np.ndarray:
    """
    Return ``x`` as a float copy after validating that it is a 1-D vector.

    Parameters
    ----------
    x:
        Array-like input.
    name:
        Name used in error messages.
    size:
        Expected length, if any.

    Raises
    ------
    ValueError
        If ``x`` is not 1-D, is empty, or has the wrong length.
    """
    arr = np.array(x, dtype=float, copy=True)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be a 1D array, got shape {arr.shape}")
    if arr.size == 0:
        raise ValueError(f"{name} must not be empty")
    if size is not None and arr.size != size:
        raise ValueError(f"{name} has length {arr.size}, expected {size}")
    return arr


def check_matrix(mat: np.ndarray, name: str = "A", square: bool = False) -> np.ndarray:
    """
    Return ``mat`` as a float copy after validating that it is a 2-D matrix.

    Raises
    ------
    ValueError
        If ``mat`` is not 2-D, is empty, or is not square when ``square``
        is requested.
    """
    arr = np.array(mat, dtype=float, copy=True)
    if arr.ndim != 2:
        raise ValueError(f"{name} must be a 2D array, got shape {arr.shape}")
    if arr.size == 0:
        raise ValueError(f"{name} must not be empty")
    if square and arr.shape[0] != arr.shape[1]:
        raise ValueError(f"{name} must be square, got shape {arr.shape}")
    return arr


def is_symmetric(mat: np.ndarray, atol: float = 0.0) -> bool:
    """
    Check whether a matrix equals its transpose.

    With the default ``atol=0`` the comparison is exact.
    """
    mat = np.asarray(mat)
    if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
        return False
    return bool(np.all(np.abs(mat - mat.T) <= atol))


def assert_symmetric(mat: np.ndarray, atol: float = 0.0) -> None:
    """
    Assert that a matrix is symmetric.

    Raises
    ------
    ValueError
        If the matrix is not symmetric within the tolerance.
    """
    if not is_symmetric(mat, atol=atol):
        raise ValueError("Q not symmetric")


def is_orthogonal(mat: np.ndarray, atol: float = 1e-10) -> bool:
    """Check whether ``mat.T @ mat`` is the identity within ``atol``."""
    mat = np.asarray(mat, dtype=float)
    if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
        return False
    gram = mat.T @ mat
    return bool(np.allclose(gram, np.eye(mat.shape[0]), rtol=0.0, atol=atol))


def assert_orthogonal(mat: np.ndarray, atol: float = 1e-10) -> None:
    """
    Assert that a matrix is orthogonal.

    Raises
    ------
    ValueError
        If ``mat.T @ mat`` deviates from the identity by more than ``atol``.
    """
    if not is_orthogonal(mat, atol=atol):
        raise ValueError(f"Matrix is not orthogonal within tolerance {atol}.")


def is_upper_triangular(mat: np.ndarray, atol: float = 1e-10) -> bool:
    """Check that every entry below the main diagonal is within ``atol`` of zero."""
    mat = np.asarray(mat, dtype=float)
    if mat.ndim != 2:
        return False
    return bool(np.all(np.abs(np.tril(mat, k=-1)) <= atol))


def assert_upper_triangular(mat: np.ndarray, atol: float = 1e-10) -> None:
    """
    Assert that a matrix is upper triangular.

    Raises
    ------
    ValueError
        If an entry below the diagonal exceeds ``atol`` in magnitude.
    """
    if not is_upper_triangular(mat, atol=atol):
        raise ValueError(f"Matrix is not upper triangular within tolerance {atol}.")


__all__ = [
    "check_vector",
    "check_matrix",
    "is_symmetric",
    "assert_symmetric",
    "is_orthogonal",
    "assert_orthogonal",
    "is_upper_triangular",
    "assert_upper_triangular",
]
