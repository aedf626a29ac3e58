"""
Example: Brent's method and Newton's method with the stepwise executor

Minimizes ``f(x) = exp(-x) - exp(5 - x/2)`` on the bracket [-10, 10] with
Brent's method, then the Rosenbrock function with Newton's method, logging
every iteration through a LoggingObserver.
"""

import logging
import math

import numpy as np

from stepwise import (
    Brent,
    Executor,
    LoggingObserver,
    Newton,
    ObserverMode,
    Problem,
    configure_logging,
)


def example_brent():
    """Brent's method on a one-dimensional bracket."""
    print("=" * 60)
    print("Example 1: Brent's method")
    print("=" * 60)

    def cost(x: float) -> float:
        return math.exp(-x) - math.exp(5 - x / 2)

    result = (
        Executor(Problem(fun=cost), Brent(-10.0, 10.0), math.nan)
        .add_observer(LoggingObserver("brent"), ObserverMode.ALWAYS)
        .max_iters(100)
        .run()
    )
    print(result)
    # xmin = 2 log(2 exp(-5)), f(xmin) = -exp(10) / 4
    print(f"Analytic minimum: x = {2 * math.log(2 * math.exp(-5))}")
    print()


def example_newton():
    """Newton's method on the Rosenbrock function."""
    print("=" * 60)
    print("Example 2: Newton's method")
    print("=" * 60)

    def rosen(x: np.ndarray) -> float:
        return (1 - x[0]) ** 2 + 100 * (x[1] - x[0] ** 2) ** 2

    def rosen_grad(x: np.ndarray) -> np.ndarray:
        return np.array(
            [
                -2 * (1 - x[0]) - 400 * x[0] * (x[1] - x[0] ** 2),
                200 * (x[1] - x[0] ** 2),
            ]
        )

    def rosen_hess(x: np.ndarray) -> np.ndarray:
        return np.array(
            [
                [1200 * x[0] ** 2 - 400 * x[1] + 2, -400 * x[0]],
                [-400 * x[0], 200],
            ]
        )

    problem = Problem(fun=rosen, grad=rosen_grad, hess=rosen_hess, dim=2)
    result = (
        Executor(problem, Newton(gtol=1e-10, evaluate_cost=True), np.array([-1.2, 1.0]))
        .add_observer(LoggingObserver("newton"), ObserverMode.every(2))
        .max_iters(20)
        .run()
    )
    print(result)
    print()


if __name__ == "__main__":
    configure_logging(level=logging.INFO)
    example_brent()
    example_newton()
