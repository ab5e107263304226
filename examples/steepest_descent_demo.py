"""
Example: Steepest descent in nalab

Minimizes the quadratic from the classic two-variable example with the exact
line search, then a general objective with the bracketing + bisection line
search driven by finite differences and by torch autograd.
"""

import numpy as np

from nalab import (
    Problem,
    autograd_derivative,
    bisection,
    find_interval,
    quadratic_steepest_descent,
    restrict,
    steepest_descent,
)


def example_quadratic():
    """Example: exact line search on f(x) = 1/2 x^T Q x + q^T x."""
    print("=" * 60)
    print("Example 1: Quadratic steepest descent")
    print("=" * 60)

    Q = np.array([[8.0, 8.0], [8.0, 18.0]])
    q = np.array([1.0, 1.0])
    x0 = np.array([0.05, 0.0])

    result = quadratic_steepest_descent(Q, q, x0, eps=1e-6)
    print(f"Status: {result.status.value}")
    print(f"Solution: x = {result.x}")
    print(f"Linear solve: {np.linalg.solve(Q, -q)}")
    print(f"Iterations: {result.nit}")
    print()


def example_line_search():
    """Example: bracket then bisect along the normalized steepest-descent ray."""
    print("=" * 60)
    print("Example 2: Bracketing and bisection")
    print("=" * 60)

    def f(x):
        return 3 * (x @ x)

    x1 = np.array([-2.0, -1.0])
    g = 6 * x1
    d = -g / np.linalg.norm(g)
    phi = restrict(f, x1, d)

    alpha_bar = find_interval(phi, 1e-6, derivative=autograd_derivative)
    result = bisection(phi, alpha_bar, 1e-6, derivative=autograd_derivative)
    print(f"Bracket end: {alpha_bar}")
    print(f"Step: {result.alpha:.8f} after {result.nit} halvings")
    for lo, hi in result.iterates[:5]:
        print(f"  [{lo:.6f}, {hi:.6f}]")
    print()


def example_general():
    """Example: steepest descent on a non-quadratic objective."""
    print("=" * 60)
    print("Example 3: General steepest descent")
    print("=" * 60)

    def f(x):
        return float(np.sum(x**4) + np.sum(x**2))

    problem = Problem(fun=f, dim=3)
    result = steepest_descent(problem, np.array([1.0, -0.5, 0.25]))
    print(f"Status: {result.status.value}")
    print(f"Minimizer: {result.x}")
    print(f"Gradient norm: {result.grad_norm:.2e}")
    print()


if __name__ == "__main__":
    example_quadratic()
    example_line_search()
    example_general()
    print("Steepest descent examples finished")
