"""Core types shared by the executor and all solvers."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Union

import numpy as np

Array = np.ndarray
Param = Union[float, Array]
Objective = Callable[[Any], float]
Gradient = Callable[[Any], Any]
Hessian = Callable[[Any], Array]


class TerminationReason(Enum):
    """Reason why a run stopped.

    ``NOT_TERMINATED`` is the only non-terminal member; every other member
    ends the run successfully.
    """

    NOT_TERMINATED = "not_terminated"
    MAX_ITERS_REACHED = "max_iters_reached"
    TARGET_PRECISION_REACHED = "target_precision_reached"
    TARGET_COST_REACHED = "target_cost_reached"

    @property
    def terminated(self) -> bool:
        return self is not TerminationReason.NOT_TERMINATED

    @property
    def text(self) -> str:
        return _TEXT[self]

    def __str__(self) -> str:
        return self.text


_TEXT = {
    TerminationReason.NOT_TERMINATED: "Not terminated",
    TerminationReason.MAX_ITERS_REACHED: "Maximum number of iterations reached",
    TerminationReason.TARGET_PRECISION_REACHED: "Target precision reached",
    TerminationReason.TARGET_COST_REACHED: "Target cost value reached",
}


__all__ = [
    "Array",
    "Gradient",
    "Hessian",
    "Objective",
    "Param",
    "TerminationReason",
]
