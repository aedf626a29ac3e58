"""Executor driving a solver over a cost operator until termination."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from ..logging import get_logger
from .errors import InvalidParameterError
from .observers import Observer, ObserverMode, Observers
from .operator import OpWrapper
from .solver import Solver
from .state import IterData, IterState, OptimizeResult

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExecutorConfig:
    """
    Run configuration for an :class:`Executor`.

    Args:
        max_iters: Maximum number of iterations. ``None`` means unbounded.
        target_cost: The run stops once the current cost is at or below this
            value. Defaults to ``-inf`` (disabled).
        observers: Ordered ``(observer, mode)`` pairs.
    """

    max_iters: Optional[int] = None
    target_cost: float = -math.inf
    observers: tuple[tuple[Observer, ObserverMode], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.max_iters is not None and self.max_iters < 0:
            raise InvalidParameterError(f"max_iters must be >= 0, got {self.max_iters}.")
        if math.isnan(self.target_cost):
            raise InvalidParameterError("target_cost must not be NaN.")
        for entry in self.observers:
            if len(entry) != 2 or not isinstance(entry[1], ObserverMode):
                raise InvalidParameterError(
                    f"observers must hold (observer, ObserverMode) pairs, got {entry!r}."
                )


class Executor:
    """
    Run a solver on a cost operator.

    The executor owns the :class:`OpWrapper` and the :class:`IterState` of a
    single run. It calls ``solver.init`` once, then ``solver.next_iter``
    until the solver signals termination, ``max_iters`` is reached or the
    cost drops to ``target_cost``. Keyword overrides replace the matching
    fields of ``config`` and are validated the same way.

    Example
    -------
    >>> import math
    >>> from stepwise.optimize import Brent, Executor, Problem
    >>> problem = Problem(fun=lambda x: (x - 1.0) ** 2)
    >>> res = Executor(problem, Brent(-3.0, 4.0), math.nan).max_iters(100).run()
    >>> round(res.x, 4)
    1.0
    """

    def __init__(
        self,
        operator: Any,
        solver: Solver,
        init_param: Any,
        config: Optional[ExecutorConfig] = None,
        **overrides: Any,
    ) -> None:
        config = replace(config or ExecutorConfig(), **overrides)
        self.op = OpWrapper(operator)
        self.solver = solver
        self.state = IterState(
            param=init_param,
            max_iters=config.max_iters,
            target_cost=config.target_cost,
        )
        self.observers = Observers()
        for observer, mode in config.observers:
            self.observers.push(observer, mode)

    def max_iters(self, max_iters: int) -> "Executor":
        if max_iters < 0:
            raise InvalidParameterError(f"max_iters must be >= 0, got {max_iters}.")
        self.state.max_iters = int(max_iters)
        return self

    def target_cost(self, target_cost: float) -> "Executor":
        if math.isnan(target_cost):
            raise InvalidParameterError("target_cost must not be NaN.")
        self.state.target_cost = float(target_cost)
        return self

    def add_observer(
        self, observer: Observer, mode: ObserverMode = ObserverMode.ALWAYS
    ) -> "Executor":
        self.observers.push(observer, mode)
        return self

    def run(self) -> OptimizeResult:
        """Execute the run and return its final result."""
        name = self.solver.name
        logger.info("Starting %s (max_iters=%s)", name, self.state.max_iters)
        try:
            self._run()
        except Exception:
            logger.error("%s aborted at iteration %d", name, self.state.iter, exc_info=True)
            raise
        logger.info(
            "%s finished after %d iterations: %s (best cost %s)",
            name,
            self.state.iter,
            self.state.termination_reason.text,
            self.state.best_cost,
        )
        return OptimizeResult(state=self.state.snapshot(), solver=name)

    def _run(self) -> None:
        data = self.solver.init(self.op, self.state)
        if data is not None:
            self._update(data)
        self.state.set_func_counts(self.op.counts())
        self.observers.observe_init(self.solver.name, data.kv if data is not None else {})

        while True:
            if not self.state.terminated:
                self.state.set_termination_reason(self.solver.terminate_internal(self.state))
            if self.state.terminated:
                break

            data = self.solver.next_iter(self.op, self.state)
            self._update(data)
            self.state.increment_iter()
            logger.debug(
                "iter %d: cost=%s best_cost=%s",
                self.state.iter,
                self.state.cost,
                self.state.best_cost,
            )
            if not self.observers.is_empty():
                self.observers.observe_iter(self.state.snapshot(), data.kv)

            if self.state.terminated:
                break

    def _update(self, data: IterData) -> None:
        param = self.state.param if data.param is None else data.param
        self.state.update(param, data.cost)
        self.state.set_func_counts(self.op.counts())
        if data.termination_reason is not None:
            self.state.set_termination_reason(data.termination_reason)


__all__ = ["Executor", "ExecutorConfig"]
