"""Cost operators and the counting wrapper used during a run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .core import Gradient, Hessian, Objective
from .errors import CapabilityNotImplementedError, EvaluationError, OptimizeError

CAPABILITIES = ("apply", "gradient", "hessian")


class CostOperator:
    """Base class for user-defined cost functions.

    Subclasses must implement :meth:`apply`. :meth:`gradient` and
    :meth:`hessian` are optional; a capability counts as supported exactly
    when the subclass overrides the corresponding method.
    """

    def apply(self, param: Any) -> float:
        raise CapabilityNotImplementedError("apply", self)

    def gradient(self, param: Any) -> Any:
        raise CapabilityNotImplementedError("gradient", self)

    def hessian(self, param: Any) -> Any:
        raise CapabilityNotImplementedError("hessian", self)

    def supports(self, capability: str) -> bool:
        if capability not in CAPABILITIES:
            return False
        return getattr(type(self), capability) is not getattr(CostOperator, capability)


@dataclass(frozen=True)
class Problem(CostOperator):
    """Cost operator assembled from plain callables."""

    fun: Objective
    grad: Optional[Gradient] = None
    hess: Optional[Hessian] = None
    dim: Optional[int] = None

    def apply(self, param: Any) -> float:
        return self.fun(param)

    def gradient(self, param: Any) -> Any:
        if self.grad is None:
            raise CapabilityNotImplementedError("gradient", self)
        return self.grad(param)

    def hessian(self, param: Any) -> Any:
        if self.hess is None:
            raise CapabilityNotImplementedError("hessian", self)
        return self.hess(param)

    def supports(self, capability: str) -> bool:
        if capability == "apply":
            return True
        if capability == "gradient":
            return self.grad is not None
        if capability == "hessian":
            return self.hess is not None
        return False


class OpWrapper:
    """Forwards calls to a cost operator and counts them per capability.

    Counters only ever increase. A call refused because the operator lacks
    the capability is not counted, since no evaluation took place.
    """

    def __init__(self, op: Any) -> None:
        if not callable(getattr(op, "apply", None)):
            raise TypeError(f"{type(op).__name__} has no callable 'apply' method.")
        self.op = op
        self.cost_count = 0
        self.gradient_count = 0
        self.hessian_count = 0

    def supports(self, capability: str) -> bool:
        supports = getattr(self.op, "supports", None)
        if callable(supports):
            return bool(supports(capability))
        return callable(getattr(self.op, capability, None))

    def apply(self, param: Any) -> float:
        self._require("apply")
        self.cost_count += 1
        return self._call("apply", param)

    def gradient(self, param: Any) -> Any:
        self._require("gradient")
        self.gradient_count += 1
        return self._call("gradient", param)

    def hessian(self, param: Any) -> Any:
        self._require("hessian")
        self.hessian_count += 1
        return self._call("hessian", param)

    def counts(self) -> dict[str, int]:
        return {
            "cost_count": self.cost_count,
            "gradient_count": self.gradient_count,
            "hessian_count": self.hessian_count,
        }

    def _require(self, capability: str) -> None:
        if not self.supports(capability):
            raise CapabilityNotImplementedError(capability, self.op)

    def _call(self, capability: str, param: Any) -> Any:
        try:
            return getattr(self.op, capability)(param)
        except OptimizeError:
            raise
        except Exception as exc:
            raise EvaluationError(
                f"{type(self.op).__name__}.{capability} failed: {exc}"
            ) from exc


__all__ = ["CAPABILITIES", "CostOperator", "OpWrapper", "Problem"]
