"""Random sampling and perturbation of bounded parameter vectors.

All randomness comes from an explicitly passed ``numpy.random.Generator`` so
that runs are reproducible.
"""

from __future__ import annotations

from typing import Callable, Optional, Union

import numpy as np

from .core import Array
from .errors import InvalidParameterError

RngLike = Union[np.random.Generator, int]


def _as_generator(rng: RngLike) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    if isinstance(rng, (int, np.integer)):
        return np.random.default_rng(int(rng))
    raise InvalidParameterError(
        f"rng must be a numpy Generator or an integer seed, got {type(rng).__name__}."
    )


def _check_bounds(lower: Array, upper: Array) -> tuple[Array, Array]:
    lower = np.asarray(lower, dtype=float)
    upper = np.asarray(upper, dtype=float)
    if lower.shape != upper.shape:
        raise InvalidParameterError(
            f"lower and upper must have the same shape, got {lower.shape} and {upper.shape}."
        )
    if not np.all(lower < upper):
        raise InvalidParameterError("Parameter: lower bound must be lower than upper bound.")
    return lower, upper


def random_param(lower: Array, upper: Array, rng: RngLike) -> Array:
    """Draw a parameter vector uniformly from the box ``[lower, upper]``.

    Raises
    ------
    InvalidParameterError
        If the shapes differ or ``lower[i] >= upper[i]`` for any ``i``.
    """
    lower, upper = _check_bounds(lower, upper)
    generator = _as_generator(rng)
    return generator.uniform(lower, upper)


def modify_param(
    param: Array,
    lower: Array,
    upper: Array,
    rng: RngLike,
    constraint: Optional[Callable[[Array], bool]] = None,
    max_attempts: int = 1000,
) -> Array:
    """Perturb one randomly chosen coordinate of ``param`` by ``U(-1, 1)``.

    The perturbed coordinate is clamped into its bounds. Candidates are drawn
    until ``constraint`` accepts one.
    """
    lower, upper = _check_bounds(lower, upper)
    param = np.asarray(param, dtype=float)
    if param.shape != lower.shape:
        raise InvalidParameterError(
            f"param has shape {param.shape}, bounds have shape {lower.shape}."
        )
    if max_attempts < 1:
        raise InvalidParameterError(f"max_attempts must be >= 1, got {max_attempts}.")
    generator = _as_generator(rng)
    flat = param.reshape(-1)
    lo = lower.reshape(-1)
    hi = upper.reshape(-1)

    for _ in range(max_attempts):
        candidate = flat.copy()
        idx = int(generator.integers(flat.size))
        candidate[idx] = np.clip(flat[idx] + generator.uniform(-1.0, 1.0), lo[idx], hi[idx])
        candidate = candidate.reshape(param.shape)
        if constraint is None or constraint(candidate):
            return candidate
    raise RuntimeError(f"No admissible parameter found after {max_attempts} attempts.")


__all__ = ["modify_param", "random_param"]
