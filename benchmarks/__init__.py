"""Performance benchmarks for nalab.

This package contains microbenchmarks comparing the QR factorization variants.
"""
