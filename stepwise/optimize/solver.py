"""Contract shared by every solver driven by the executor."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from .core import TerminationReason
from .operator import OpWrapper
from .state import IterData, IterState


class Solver(ABC):
    """Base class for iterative solvers.

    A solver keeps its algorithm-specific state private. It only reads the
    executor's :class:`IterState` and reports each step through an
    :class:`IterData`; all bookkeeping of current, previous and best points
    is done by the executor.
    """

    name: str = "Solver"

    def init(self, op: OpWrapper, state: IterState) -> Optional[IterData]:
        """Prepare the solver before the first iteration.

        May evaluate the operator. Returning ``None`` leaves the state as is.
        """
        return None

    @abstractmethod
    def next_iter(self, op: OpWrapper, state: IterState) -> IterData:
        """Perform one iteration."""

    def terminate(self, state: IterState) -> TerminationReason:
        """Solver-specific stopping test, checked before every iteration."""
        return TerminationReason.NOT_TERMINATED

    def terminate_internal(self, state: IterState) -> TerminationReason:
        if state.max_iters is not None and state.iter >= state.max_iters:
            return TerminationReason.MAX_ITERS_REACHED
        if state.cost <= state.target_cost:
            return TerminationReason.TARGET_COST_REACHED
        return self.terminate(state)


__all__ = ["Solver"]
