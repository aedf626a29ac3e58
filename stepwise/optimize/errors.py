"""Exception hierarchy raised by the optimization engine."""

from __future__ import annotations

import numpy as np


class OptimizeError(Exception):
    """Base class for all errors raised by :mod:`stepwise.optimize`."""


class InvalidParameterError(OptimizeError, ValueError):
    """A solver or executor was configured with an invalid value."""


class EvaluationError(OptimizeError, RuntimeError):
    """The cost operator failed while computing a value.

    The exception raised by the operator is available as ``__cause__``.
    """


class CapabilityNotImplementedError(OptimizeError, NotImplementedError):
    """The cost operator does not provide a requested capability."""

    def __init__(self, capability: str, operator: object | None = None) -> None:
        self.capability = capability
        owner = type(operator).__name__ if operator is not None else "operator"
        super().__init__(f"{owner} does not implement '{capability}'.")


class NumericalError(OptimizeError, np.linalg.LinAlgError):
    """A numerical routine failed, e.g. inverting a singular Hessian."""


__all__ = [
    "CapabilityNotImplementedError",
    "EvaluationError",
    "InvalidParameterError",
    "NumericalError",
    "OptimizeError",
]
