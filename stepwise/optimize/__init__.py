"""Iterative optimization engine: executor, solver contract and solvers.

Example
-------
>>> import math
>>> from stepwise.optimize import Brent, Executor, Problem
>>> def cost(x):
...     return math.exp(-x) - math.exp(5 - x / 2)
>>> res = Executor(Problem(fun=cost), Brent(-10.0, 10.0), math.nan).max_iters(100).run()
>>> res.termination_reason.name
'TARGET_PRECISION_REACHED'
"""

from .brent import Brent
from .core import Array, Gradient, Hessian, Objective, Param, TerminationReason
from .errors import (
    CapabilityNotImplementedError,
    EvaluationError,
    InvalidParameterError,
    NumericalError,
    OptimizeError,
)
from .executor import Executor, ExecutorConfig
from .linalg import dot, invert
from .newton import Newton
from .observers import LoggingObserver, Observer, ObserverMode, Observers
from .operator import CostOperator, OpWrapper, Problem
from .parameter import modify_param, random_param
from .solver import Solver
from .state import IterData, IterState, OptimizeResult, StateSnapshot

__all__ = [
    "Array",
    "Brent",
    "CapabilityNotImplementedError",
    "CostOperator",
    "EvaluationError",
    "Executor",
    "ExecutorConfig",
    "Gradient",
    "Hessian",
    "InvalidParameterError",
    "IterData",
    "IterState",
    "LoggingObserver",
    "Newton",
    "NumericalError",
    "Objective",
    "Observer",
    "ObserverMode",
    "Observers",
    "OpWrapper",
    "OptimizeError",
    "OptimizeResult",
    "Param",
    "Problem",
    "Solver",
    "StateSnapshot",
    "TerminationReason",
    "dot",
    "invert",
    "modify_param",
    "random_param",
]
