"""Householder reflectors and QR factorizations.

Example
-------
>>> import numpy as np
>>> from nalab.linalg import fast_qr
>>> A = np.array([[2.0, 1.0], [1.0, 3.0]])
>>> Q, R = fast_qr(A)
>>> bool(np.allclose(Q @ R, A))
True
"""

from .householder import Reflector, householder
from .qr import (
    HouseholderQR,
    back_substitution,
    fast_qr,
    householder_qr,
    naive_qr,
    qr_solve,
)

__all__ = [
    "HouseholderQR",
    "Reflector",
    "back_substitution",
    "fast_qr",
    "householder",
    "householder_qr",
    "naive_qr",
    "qr_solve",
]
