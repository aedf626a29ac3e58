"""Newton's method for multivariate minimization.

References
----------
J. Nocedal and S. J. Wright (2006). Numerical Optimization. Springer.
"""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np

from .core import Array, TerminationReason
from .errors import InvalidParameterError
from .linalg import dot as _dot
from .linalg import invert as _invert
from .operator import OpWrapper
from .solver import Solver
from .state import IterData, IterState


def _check_gamma(gamma: float) -> float:
    if not 0.0 < gamma <= 1.0:
        raise InvalidParameterError(f"Newton: gamma must be in (0, 1], got {gamma}.")
    return float(gamma)


class Newton(Solver):
    """
    Newton's method: ``x_{k+1} = x_k - gamma * H(x_k)^{-1} grad(x_k)``.

    Each iteration evaluates the gradient and the Hessian of the operator.
    With the default settings the solver never stops on its own; bound the
    run with ``max_iters`` or ``target_cost`` on the executor, or pass
    ``gtol`` to stop once the gradient norm is small enough.
    A scalar parameter is treated as a vector of length one and stays a
    float; the gradient and Hessian may then be plain numbers.

    Parameters
    ----------
    gamma:
        Step length multiplier in ``(0, 1]``.
    gtol:
        Optional gradient-norm tolerance.
    evaluate_cost:
        Also evaluate the cost at every new iterate (one more operator
        call per iteration), which enables best-point tracking and
        ``target_cost``.
    invert, dot:
        Linear-algebra primitives; default to NumPy.
    """

    name = "Newton"

    def __init__(
        self,
        gamma: float = 1.0,
        gtol: Optional[float] = None,
        evaluate_cost: bool = False,
        invert: Callable[[Array], Array] = _invert,
        dot: Callable[[Array, Array], Array] = _dot,
    ) -> None:
        self.gamma = _check_gamma(gamma)
        if gtol is not None and not gtol > 0:
            raise InvalidParameterError(f"Newton: gtol must be positive, got {gtol}.")
        self.gtol = gtol
        self.evaluate_cost = evaluate_cost
        self.invert = invert
        self.dot = dot

    def set_gamma(self, gamma: float) -> "Newton":
        self.gamma = _check_gamma(gamma)
        return self

    def next_iter(self, op: OpWrapper, state: IterState) -> IterData:
        scalar = np.ndim(state.param) == 0
        param = np.atleast_1d(np.asarray(state.param, dtype=float))
        point = float(param[0]) if scalar else param
        grad = np.atleast_1d(np.asarray(op.gradient(point), dtype=float))
        grad_norm = float(np.linalg.norm(grad))
        kv = {"grad_norm": grad_norm}

        if self.gtol is not None and grad_norm <= self.gtol:
            return IterData(
                param=point,
                cost=state.cost,
                termination_reason=TerminationReason.TARGET_PRECISION_REACHED,
                kv=kv,
            )

        hessian = np.atleast_2d(np.asarray(op.hessian(point), dtype=float))
        direction = self.dot(self.invert(hessian), grad)
        new_param = param - self.gamma * np.asarray(direction, dtype=float)
        if scalar:
            new_param = float(new_param[0])

        cost = float(op.apply(new_param)) if self.evaluate_cost else None
        return IterData(param=new_param, cost=cost, kv=kv)


__all__ = ["Newton"]
