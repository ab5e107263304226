import numpy as np
import pytest
import torch

from nalab.diagnostics import debug_context
from nalab.optimize import (
    LineSearchError,
    Status,
    autograd_derivative,
    bisection,
    central_difference,
    exact_line_search,
    find_interval,
    gradient_derivative,
    restrict,
)


def sphere(x: np.ndarray) -> float:
    return float(3 * x @ x)


def sphere_grad(x: np.ndarray) -> np.ndarray:
    return 6 * x


def _ray():
    x = np.array([-2.0, -1.0])
    g = sphere_grad(x)
    d = -g / np.linalg.norm(g)
    return x, d


def test_find_interval_brackets_the_minimizer():
    x, d = _ray()
    phi = restrict(sphere, x, d)
    alpha_bar = find_interval(phi, 1e-6)
    # minimizer along the ray sits at ||x|| = sqrt(5)
    assert alpha_bar >= np.sqrt(5.0)
    assert alpha_bar == 4.0
    assert central_difference(phi, alpha_bar) > -1e-6


def test_find_interval_returns_start_when_not_decreasing():
    phi = lambda a: (a - 0.25) ** 2  # noqa: E731
    assert find_interval(phi, 1e-6) == 1.0


def test_find_interval_raises_when_unbounded():
    phi = lambda a: -a  # noqa: E731
    with pytest.raises(LineSearchError, match="did not converge"):
        find_interval(phi, 1e-6, max_iter=20)


def test_find_interval_validates_arguments():
    phi = lambda a: a**2  # noqa: E731
    with pytest.raises(ValueError):
        find_interval(phi, eps=0.0)
    with pytest.raises(ValueError):
        find_interval(phi, alpha0=-1.0)


def test_bisection_finds_stationary_point():
    x, d = _ray()
    phi = restrict(sphere, x, d)
    result = bisection(phi, 4.0, 1e-6)
    assert result.converged
    assert result.status is Status.CONVERGED
    assert result.alpha == pytest.approx(np.sqrt(5.0), abs=1e-6)
    assert abs(central_difference(phi, result.alpha)) <= 1e-6
    assert result.iterates[0] == (0.0, 4.0)
    assert len(result.iterates) == result.nit + 1


def test_bisection_bracket_invariant_and_halving():
    x, d = _ray()
    phi = restrict(sphere, x, d)
    dphi = gradient_derivative(sphere_grad, x, d)
    result = bisection(phi, 4.0, 1e-8, derivative=dphi)
    widths = [hi - lo for lo, hi in result.iterates]
    for prev, nxt in zip(widths, widths[1:]):
        assert nxt == pytest.approx(prev / 2.0)
    for lo, hi in result.iterates:
        assert dphi(phi, lo) <= 0.0 <= dphi(phi, hi)
        assert lo <= np.sqrt(5.0) <= hi


def test_bisection_accepts_alpha_bar_when_already_stationary():
    phi = lambda a: (a - 2.0) ** 2  # noqa: E731
    result = bisection(phi, 2.0, 1e-6)
    assert result.alpha == 2.0
    assert result.nit == 0
    assert result.iterates == [(0.0, 2.0)]


def test_bisection_reports_max_iter():
    x, d = _ray()
    phi = restrict(sphere, x, d)
    result = bisection(phi, 4.0, 1e-12, max_iter=3)
    assert not result.converged
    assert result.status is Status.MAX_ITER
    assert result.nit == 3
    assert len(result.iterates) == 4


def test_bisection_debug_mode_detects_bad_bracket():
    # phi' > 0 on the whole interval: not a descent direction
    phi = lambda a: (a + 1.0) ** 2  # noqa: E731
    with debug_context(True):
        with pytest.raises(LineSearchError):
            bisection(phi, 1.0, 1e-6)


def test_bisection_debug_mode_passes_valid_bracket():
    x, d = _ray()
    phi = restrict(sphere, x, d)
    with debug_context(True):
        result = bisection(phi, 4.0, 1e-6)
    assert result.converged


def test_exact_line_search_with_autograd_oracle():
    x = torch.tensor([-2.0, -1.0], dtype=torch.float64)
    g = 6 * x
    d = -g / torch.linalg.norm(g)

    def phi(alpha):
        point = x + alpha * d
        return 3 * (point @ point)

    result = exact_line_search(phi, 1e-6, derivative=autograd_derivative)
    assert result.converged
    assert result.alpha == pytest.approx(np.sqrt(5.0), abs=1e-6)


def test_oracles_agree():
    x, d = _ray()
    phi = restrict(sphere, x, d)
    exact = gradient_derivative(sphere_grad, x, d)(phi, 0.7)
    assert central_difference(phi, 0.7) == pytest.approx(exact, abs=1e-6)


def _counting(oracle, calls):
    def derivative(phi, alpha):
        calls.append(alpha)
        return oracle(phi, alpha)

    return derivative


def test_bisection_reports_oracle_calls():
    x, d = _ray()
    phi = restrict(sphere, x, d)
    calls = []
    result = bisection(phi, 4.0, 1e-6, derivative=_counting(central_difference, calls))
    assert result.nderiv == len(calls) == result.nit + 1


def test_bisection_debug_checks_are_counted():
    x, d = _ray()
    phi = restrict(sphere, x, d)
    calls = []
    with debug_context(True):
        result = bisection(
            phi, 4.0, 1e-6, derivative=_counting(central_difference, calls)
        )
    assert result.nderiv == len(calls) == 3 * result.nit + 1


def test_exact_line_search_counts_bracketing_calls():
    x, d = _ray()
    phi = restrict(sphere, x, d)
    calls = []
    dphi = _counting(gradient_derivative(sphere_grad, x, d), calls)
    result = exact_line_search(phi, 1e-6, derivative=dphi)
    # bracketing tries 1, 2, 4 before bisection starts at 4
    assert calls[:4] == [1.0, 2.0, 4.0, 4.0]
    assert result.nderiv == len(calls) == 3 + result.nit + 1
    assert result.alpha == pytest.approx(np.sqrt(5.0), abs=1e-6)


def test_exact_line_search_counts_default_oracle():
    x, d = _ray()
    calls = []

    def phi(alpha):
        calls.append(alpha)
        return sphere(x + alpha * d)

    result = exact_line_search(phi, 1e-6)
    # central differences evaluate phi twice per derivative
    assert len(calls) == 2 * result.nderiv
