"""Benchmark the naive, fast and compact Householder QR variants."""

import time
from typing import Callable, Dict

import numpy as np

from nalab.linalg import fast_qr, householder_qr, naive_qr


def benchmark_factorization(
    factorize: Callable[[np.ndarray], object],
    n: int,
    repeats: int = 10,
    seed: int = 0,
) -> Dict[str, float]:
    """Benchmark one QR variant on a random ``n x n`` matrix.

    Args:
        factorize: Factorization function taking a matrix.
        n: Matrix size.
        repeats: Number of timed runs.
        seed: Seed for the random matrix.

    Returns:
        Dictionary with timing results.
    """
    A = np.random.default_rng(seed).standard_normal((n, n))

    # Warmup
    factorize(A)

    start = time.perf_counter()
    for _ in range(repeats):
        factorize(A)
    end = time.perf_counter()

    total_time = end - start
    return {
        "n": n,
        "total_time_sec": total_time,
        "time_per_call_sec": total_time / repeats,
    }


if __name__ == "__main__":
    print("Benchmarking Householder QR...")

    for n in (16, 32, 64):
        print(f"n = {n}:")
        for name, factorize in (
            ("naive", naive_qr),
            ("fast", fast_qr),
            ("compact", householder_qr),
        ):
            results = benchmark_factorization(factorize, n)
            print(f"  {name:8s} {results['time_per_call_sec'] * 1e3:8.2f} ms")
