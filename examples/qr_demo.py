"""
Example: Householder QR in nalab

Builds a single reflector, then factors the same matrix with the naive,
fast and compact variants and compares the results.
"""

import numpy as np

from nalab import fast_qr, householder, householder_qr, naive_qr, qr_solve


def example_reflector():
    print("=" * 60)
    print("Example 1: Householder reflector")
    print("=" * 60)

    x = np.array([3.0, 4.0, 0.0])
    H, u = householder(x)
    print(f"x = {x}")
    print(f"H x = {H @ x}")
    print(f"u = {u}")
    print()


def example_factorizations():
    print("=" * 60)
    print("Example 2: Naive vs fast QR")
    print("=" * 60)

    rng = np.random.default_rng(0)
    A = rng.standard_normal((4, 4))

    Q1, R1 = naive_qr(A)
    Q2, R2 = fast_qr(A)
    compact = householder_qr(A)
    print(f"||QR - A|| naive:   {np.linalg.norm(Q1 @ R1 - A):.2e}")
    print(f"||QR - A|| fast:    {np.linalg.norm(Q2 @ R2 - A):.2e}")
    print(f"||Q^T Q - I|| fast: {np.linalg.norm(Q2.T @ Q2 - np.eye(4)):.2e}")
    print(f"naive vs fast R:    {np.linalg.norm(R1 - R2):.2e}")
    print(f"compact vs fast Q:  {np.linalg.norm(compact.q() - Q2):.2e}")

    b = rng.standard_normal(4)
    x = qr_solve(A, b)
    print(f"||A x - b|| via QR: {np.linalg.norm(A @ x - b):.2e}")
    print()


if __name__ == "__main__":
    example_reflector()
    example_factorizations()
    print("QR examples finished")
