"""Observers notified by the executor after initialization and each iteration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Protocol

from ..logging import get_logger
from .errors import InvalidParameterError
from .state import StateSnapshot


@dataclass(frozen=True)
class ObserverMode:
    """When an observer fires.

    Use ``ObserverMode.ALWAYS``, ``ObserverMode.NEVER`` or
    ``ObserverMode.every(n)``.
    """

    kind: str
    n: int = 1

    ALWAYS: ClassVar["ObserverMode"]
    NEVER: ClassVar["ObserverMode"]

    def __post_init__(self) -> None:
        if self.kind not in ("always", "every", "never"):
            raise InvalidParameterError(f"Unknown observer mode '{self.kind}'.")
        if self.n < 1:
            raise InvalidParameterError(f"Observer interval must be >= 1, got {self.n}.")

    @classmethod
    def every(cls, n: int) -> "ObserverMode":
        return cls("every", int(n))

    def fires(self, iteration: int) -> bool:
        if self.kind == "always":
            return True
        if self.kind == "never":
            return False
        return iteration % self.n == 0


ObserverMode.ALWAYS = ObserverMode("always")
ObserverMode.NEVER = ObserverMode("never")


class Observer(Protocol):
    """Read-only listener of a run."""

    def observe_init(self, name: str, kv: Mapping[str, Any]) -> None: ...

    def observe_iter(self, state: StateSnapshot, kv: Mapping[str, Any]) -> None: ...


class Observers:
    """Ordered collection of observers and their firing modes.

    Notification is synchronous and in registration order; an exception
    raised by an observer propagates to the caller.
    """

    def __init__(self) -> None:
        self._entries: list[tuple[Observer, ObserverMode]] = []

    def push(self, observer: Observer, mode: ObserverMode = ObserverMode.ALWAYS) -> None:
        if not isinstance(mode, ObserverMode):
            raise InvalidParameterError(f"Expected an ObserverMode, got {mode!r}.")
        self._entries.append((observer, mode))

    def __len__(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def observe_init(self, name: str, kv: Mapping[str, Any]) -> None:
        for observer, mode in self._entries:
            if mode.kind != "never":
                observer.observe_init(name, kv)

    def observe_iter(self, state: StateSnapshot, kv: Mapping[str, Any]) -> None:
        for observer, mode in self._entries:
            if mode.fires(state.iter):
                observer.observe_iter(state, kv)


class LoggingObserver:
    """Writes one record per notification to a stepwise logger."""

    def __init__(self, name: str = "observer", level: int = logging.INFO) -> None:
        self.logger = get_logger(name)
        self.level = level

    def observe_init(self, name: str, kv: Mapping[str, Any]) -> None:
        self.logger.log(self.level, "%s %s", name, _format_kv(kv))

    def observe_iter(self, state: StateSnapshot, kv: Mapping[str, Any]) -> None:
        self.logger.log(
            self.level,
            "iter: %d, cost: %s, best_cost: %s, cost_count: %d, gradient_count: %d, "
            "hessian_count: %d%s",
            state.iter,
            state.cost,
            state.best_cost,
            state.cost_count,
            state.gradient_count,
            state.hessian_count,
            (", " + _format_kv(kv)) if kv else "",
        )


def _format_kv(kv: Mapping[str, Any]) -> str:
    return ", ".join(f"{key}: {value}" for key, value in kv.items())


__all__ = ["LoggingObserver", "Observer", "ObserverMode", "Observers"]
