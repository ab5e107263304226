"""Pytest configuration and shared fixtures for nalab tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- Debug-mode reset so tests do not leak global state
"""

import os

import numpy as np
import pytest
import torch

from nalab.diagnostics.debug_mode import is_debug_enabled, set_debug_enabled


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).

    Returns:
        A seeded numpy.random.Generator instance.
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set global random seeds for reproducibility."""
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    np.random.seed(seed)
    torch.manual_seed(seed)


@pytest.fixture(scope="function", autouse=True)
def restore_debug_mode():
    """Restore the global debug flag after each test."""
    prev = is_debug_enabled()
    yield
    set_debug_enabled(prev)
