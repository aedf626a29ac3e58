"""Iteration bookkeeping: solver step output, run state and final result."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from typing import Any, Optional

import numpy as np

from .core import TerminationReason


def _copy_param(param: Any) -> Any:
    if isinstance(param, np.ndarray):
        return param.copy()
    return param


@dataclass
class IterData:
    """Output of a single solver step.

    Any field left as ``None`` is not updated by the executor. ``kv`` holds
    solver diagnostics that are forwarded to observers.
    """

    param: Any = None
    cost: Optional[float] = None
    termination_reason: Optional[TerminationReason] = None
    kv: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class StateSnapshot:
    """Read-only copy of an :class:`IterState`."""

    param: Any
    cost: float
    prev_param: Any
    prev_cost: float
    best_param: Any
    best_cost: float
    prev_best_param: Any
    prev_best_cost: float
    iter: int
    last_best_iter: int
    max_iters: Optional[int]
    target_cost: float
    cost_count: int
    gradient_count: int
    hessian_count: int
    termination_reason: TerminationReason

    @property
    def terminated(self) -> bool:
        return self.termination_reason.terminated


@dataclass
class IterState:
    """Mutable state of one run, owned and updated by the executor.

    A cost of ``inf`` means the parameter has not been evaluated. The best
    point only changes on strict improvement, so ties keep the point that
    was found first.
    """

    param: Any
    cost: float = math.inf
    prev_param: Any = None
    prev_cost: float = math.inf
    best_param: Any = None
    best_cost: float = math.inf
    prev_best_param: Any = None
    prev_best_cost: float = math.inf
    iter: int = 0
    last_best_iter: int = 0
    max_iters: Optional[int] = None
    target_cost: float = -math.inf
    cost_count: int = 0
    gradient_count: int = 0
    hessian_count: int = 0
    termination_reason: TerminationReason = TerminationReason.NOT_TERMINATED

    def __post_init__(self) -> None:
        if self.best_param is None:
            self.best_param = _copy_param(self.param)

    @property
    def terminated(self) -> bool:
        return self.termination_reason.terminated

    def update(self, param: Any, cost: Optional[float]) -> bool:
        """Move the current point to ``prev`` and record a new one.

        Returns True when the new point is a strict improvement on the best.
        """
        self.prev_param = self.param
        self.prev_cost = self.cost
        self.param = _copy_param(param)
        self.cost = math.inf if cost is None else float(cost)
        if self.cost < self.best_cost:
            self.prev_best_param = self.best_param
            self.prev_best_cost = self.best_cost
            self.best_param = _copy_param(self.param)
            self.best_cost = self.cost
            self.last_best_iter = self.iter
            return True
        return False

    def set_termination_reason(self, reason: TerminationReason) -> None:
        # the first terminal reason wins
        if not self.terminated:
            self.termination_reason = reason

    def set_func_counts(self, counts: dict[str, int]) -> None:
        self.cost_count = counts["cost_count"]
        self.gradient_count = counts["gradient_count"]
        self.hessian_count = counts["hessian_count"]

    def increment_iter(self) -> None:
        self.iter += 1

    def snapshot(self) -> StateSnapshot:
        values = {f.name: _copy_param(getattr(self, f.name)) for f in fields(StateSnapshot)}
        return StateSnapshot(**values)


@dataclass(frozen=True)
class OptimizeResult:
    """Final, immutable outcome of an executor run."""

    state: StateSnapshot
    solver: str

    @property
    def x(self) -> Any:
        return self.state.param

    @property
    def fun(self) -> float:
        return self.state.cost

    @property
    def best_x(self) -> Any:
        return self.state.best_param

    @property
    def best_fun(self) -> float:
        return self.state.best_cost

    @property
    def prev_x(self) -> Any:
        return self.state.prev_param

    @property
    def prev_fun(self) -> float:
        return self.state.prev_cost

    @property
    def nit(self) -> int:
        return self.state.iter

    @property
    def nfev(self) -> int:
        return self.state.cost_count

    @property
    def njev(self) -> int:
        return self.state.gradient_count

    @property
    def nhev(self) -> int:
        return self.state.hessian_count

    @property
    def termination_reason(self) -> TerminationReason:
        return self.state.termination_reason

    @property
    def message(self) -> str:
        return self.state.termination_reason.text

    @property
    def success(self) -> bool:
        return self.state.termination_reason in (
            TerminationReason.TARGET_PRECISION_REACHED,
            TerminationReason.TARGET_COST_REACHED,
        )

    def __str__(self) -> str:
        lines = [
            f"OptimizeResult ({self.solver}):",
            f"    param (best):  {self.best_x}",
            f"    cost (best):   {self.best_fun}",
            f"    iters (best):  {self.state.last_best_iter}",
            f"    iters (total): {self.nit}",
            f"    termination:   {self.message}",
            "    function evaluation counts:",
            f"        cost:     {self.nfev}",
            f"        gradient: {self.njev}",
            f"        hessian:  {self.nhev}",
        ]
        return "\n".join(lines)


__all__ = ["IterData", "IterState", "OptimizeResult", "StateSnapshot"]
