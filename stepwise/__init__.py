"""stepwise - an iterative optimization engine with pluggable solvers."""

__version__ = "0.1.0"

from .logging import configure_logging, get_logger, set_log_level
from .optimize import (
    Brent,
    CapabilityNotImplementedError,
    CostOperator,
    EvaluationError,
    Executor,
    ExecutorConfig,
    InvalidParameterError,
    LoggingObserver,
    Newton,
    NumericalError,
    ObserverMode,
    OptimizeError,
    OptimizeResult,
    Problem,
    Solver,
    TerminationReason,
    modify_param,
    random_param,
)

__all__ = [
    "Brent",
    "CapabilityNotImplementedError",
    "CostOperator",
    "EvaluationError",
    "Executor",
    "ExecutorConfig",
    "InvalidParameterError",
    "LoggingObserver",
    "Newton",
    "NumericalError",
    "ObserverMode",
    "OptimizeError",
    "OptimizeResult",
    "Problem",
    "Solver",
    "TerminationReason",
    "__version__",
    "configure_logging",
    "get_logger",
    "set_log_level",
]
