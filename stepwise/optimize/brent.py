"""Brent's derivative-free univariate minimizer.

Combines golden-section search with parabolic interpolation: it keeps the
reliability of golden-section search but converges faster when the function
is smooth near the minimum.

References
----------
R. P. Brent (1973). "An algorithm with guaranteed convergence for finding a
minimum of a function of one variable", Algorithms for Minimization without
Derivatives, Prentice-Hall.
"""

from __future__ import annotations

import math

import numpy as np

from .core import TerminationReason
from .errors import InvalidParameterError
from .operator import OpWrapper
from .solver import Solver
from .state import IterData, IterState

# (3 - sqrt(5)) / 2, the golden-section fraction
GOLDEN = (3.0 - math.sqrt(5.0)) / 2.0
EPS_DEFAULT = float(np.sqrt(np.finfo(float).eps))
T_DEFAULT = 1e-5


def _sign(value: float) -> float:
    return math.copysign(1.0, value)


class Brent(Solver):
    """
    Brent's method on the bracket ``[lower, upper]``.

    The bracket must contain a local minimum. The returned approximation
    ``x`` is within ``3 * tol`` of it, where ``tol = eps * |x| + t``.

    Parameters
    ----------
    lower, upper:
        Bounds of the bracket, ``lower <= upper``.
    eps:
        Relative tolerance. Values below the square root of machine
        precision (the default) are useless.
    t:
        Absolute tolerance.
    """

    name = "Brent"

    def __init__(
        self, lower: float, upper: float, eps: float = EPS_DEFAULT, t: float = T_DEFAULT
    ) -> None:
        a = float(lower)
        b = float(upper)
        if not (math.isfinite(a) and math.isfinite(b)):
            raise InvalidParameterError(f"Brent: bounds must be finite, got [{a}, {b}].")
        if a > b:
            raise InvalidParameterError(
                f"Brent: lower bound must not exceed upper bound, got [{a}, {b}]."
            )
        self.a = a
        self.b = b
        self.eps = EPS_DEFAULT
        self.t = T_DEFAULT
        self.set_tolerance(eps, t)
        # x: lowest cost so far, w: second lowest, v: previous w, u: last trial
        self.u = self.v = self.w = self.x = math.nan
        self.fv = self.fw = self.fx = math.nan
        # e: step taken two iterations ago, d: last step
        self.e = 0.0
        self.d = 0.0
        self.c = GOLDEN

    def set_tolerance(self, eps: float, t: float) -> "Brent":
        if not eps > 0 or not t > 0:
            raise InvalidParameterError(
                f"Brent: tolerances must be positive, got eps={eps}, t={t}."
            )
        self.eps = float(eps)
        self.t = float(t)
        return self

    def init(self, op: OpWrapper, state: IterState) -> IterData:
        u = self.a + self.c * (self.b - self.a)
        self.u = self.v = self.w = self.x = u
        f = float(op.apply(u))
        self.fv = self.fw = self.fx = f
        return IterData(param=self.x, cost=self.fx)

    def next_iter(self, op: OpWrapper, state: IterState) -> IterData:
        x, v, w = self.x, self.v, self.w
        fx, fv, fw = self.fx, self.fv, self.fw
        a, b = self.a, self.b

        tol = self.eps * abs(x) + self.t
        tol2 = 2.0 * tol
        m = (a + b) / 2.0
        if abs(x - m) <= tol2 - (b - a) / 2.0:
            return IterData(
                param=x,
                cost=fx,
                termination_reason=TerminationReason.TARGET_PRECISION_REACHED,
            )

        p = (x - v) * (x - v) * (fx - fw) - (x - w) * (x - w) * (fx - fv)
        q = 2.0 * ((x - w) * (fx - fv) - (x - v) * (fx - fw))
        if q < 0.0:
            p, q = -p, -q

        if (
            abs(self.e) <= tol
            or p < q * (a - x)
            or p > q * (b - x)
            or 2.0 * abs(p) >= q * abs(self.e)
        ):
            # golden section
            self.e = (b if x < m else a) - x
            self.d = self.c * self.e
        else:
            # parabolic interpolation
            self.e = self.d
            d = p / q
            # keep away from the bracket ends
            if x + d - a < tol2 or b - x - d < tol2:
                d = _sign(m - x) * tol
            self.d = d

        # keep away from x
        step = self.d if abs(self.d) >= tol else _sign(self.d) * tol
        u = x + step
        self.u = u
        fu = float(op.apply(u))

        if fu <= fx:
            if u < x:
                self.b = x
            else:
                self.a = x
            self.v, self.fv = w, fw
            self.w, self.fw = x, fx
            self.x, self.fx = u, fu
        else:
            if u < x:
                self.a = u
            else:
                self.b = u
            if fu <= fw or w == x:
                self.v, self.fv = w, fw
                self.w, self.fw = u, fu
            elif fu <= fv or v == x or v == w:
                self.v, self.fv = u, fu

        return IterData(param=self.x, cost=self.fx)


__all__ = ["Brent"]
