"""Tests for nalab.diagnostics."""

import numpy as np
import pytest

from nalab.diagnostics import (
    assert_orthogonal,
    assert_symmetric,
    assert_upper_triangular,
    check_matrix,
    check_vector,
    debug_context,
    is_debug_enabled,
    is_orthogonal,
    is_symmetric,
    is_upper_triangular,
    set_debug_enabled,
)


def test_is_symmetric_exact_by_default():
    mat = np.array([[1.0, 2.0], [2.0, 3.0]])
    assert is_symmetric(mat)
    perturbed = mat.copy()
    perturbed[0, 1] += 1e-14
    assert not is_symmetric(perturbed)
    assert is_symmetric(perturbed, atol=1e-12)


def test_is_symmetric_rejects_non_square():
    assert not is_symmetric(np.ones((2, 3)))


def test_assert_symmetric_raises():
    with pytest.raises(ValueError, match="not symmetric"):
        assert_symmetric(np.array([[1.0, 2.0], [0.0, 1.0]]))


def test_orthogonality_checks():
    theta = 0.3
    rot = np.array([[np.cos(theta), -np.sin(theta)], [np.sin(theta), np.cos(theta)]])
    assert is_orthogonal(rot)
    assert_orthogonal(rot)
    assert not is_orthogonal(2.0 * rot)
    with pytest.raises(ValueError):
        assert_orthogonal(2.0 * rot)


def test_upper_triangular_checks():
    upper = np.triu(np.arange(1.0, 10.0).reshape(3, 3))
    assert is_upper_triangular(upper)
    assert_upper_triangular(upper)
    upper[2, 0] = 1.0
    assert not is_upper_triangular(upper)
    with pytest.raises(ValueError):
        assert_upper_triangular(upper)


def test_check_vector_copies_and_validates():
    original = np.array([1, 2, 3])
    vec = check_vector(original, size=3)
    assert vec.dtype == float
    vec[0] = 10.0
    assert original[0] == 1
    with pytest.raises(ValueError):
        check_vector(np.ones((2, 2)))
    with pytest.raises(ValueError):
        check_vector(np.array([]))
    with pytest.raises(ValueError, match="expected 2"):
        check_vector(original, size=2)


def test_check_matrix_square():
    with pytest.raises(ValueError, match="square"):
        check_matrix(np.ones((2, 3)), square=True)
    with pytest.raises(ValueError):
        check_matrix(np.ones(3))
    assert check_matrix(np.eye(2), square=True).shape == (2, 2)


def test_debug_context_restores_flag():
    set_debug_enabled(False)
    with debug_context(True):
        assert is_debug_enabled()
    assert not is_debug_enabled()


def test_debug_context_restores_flag_after_error():
    set_debug_enabled(False)
    with pytest.raises(RuntimeError):
        with debug_context(True):
            raise RuntimeError("boom")
    assert not is_debug_enabled()


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, False),
        ("0", False),
        ("", False),
        ("1", True),
        ("TRUE", True),
        (" on ", True),
        ("yes", True),
    ],
)
def test_debug_env_flag_parsing(value, expected):
    from nalab.diagnostics.debug_mode import _env_flag

    assert _env_flag(value) is expected
