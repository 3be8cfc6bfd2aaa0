"""src/rescomp/models/reservoir/activation.py
Element-wise nonlinearities applied to the reservoir pre-activation.
"""
from __future__ import annotations

from typing import Callable

import jax
import jax.numpy as jnp
import numpy as np

from rescomp.core.errors import ConfigurationError
from rescomp.core.types import to_np_f64


class ActivationFunctionWrapper:
    """Applies `func(values)`."""

    def __init__(self, func: Callable[[np.ndarray], np.ndarray]) -> None:
        self.func = func

    def __call__(self, values: np.ndarray) -> np.ndarray:
        return self.func(values)

    def __repr__(self) -> str:
        return f"ActivationFunctionWrapper({getattr(self.func, '__name__', self.func)!r})"


class BiasedActivationFunction:
    """Applies `func(bias, values)` with a fixed per-unit bias vector."""

    def __init__(self, bias: np.ndarray, func: Callable[[np.ndarray, np.ndarray], np.ndarray]) -> None:
        bias = np.array(bias, dtype=np.float64)
        if bias.ndim != 1:
            raise ConfigurationError(f"bias must be 1D, got shape {bias.shape}")
        bias.setflags(write=False)
        self.bias = bias
        self.func = func

    @classmethod
    def new_uniform_random(
        cls,
        size: int,
        func: Callable[[np.ndarray, np.ndarray], np.ndarray],
        scale: float,
        seed: int = 0,
    ) -> "BiasedActivationFunction":
        """Bias drawn from `scale * U(-1, 1)`."""
        if int(size) < 1:
            raise ConfigurationError(f"size must be positive, got {size}")
        key = jax.random.PRNGKey(int(seed))
        bias = float(scale) * jax.random.uniform(key, (int(size),), minval=-1.0, maxval=1.0, dtype=jnp.float64)
        return cls(to_np_f64(bias), func)

    def __call__(self, values: np.ndarray) -> np.ndarray:
        return self.func(self.bias, values)

    def __repr__(self) -> str:
        return f"BiasedActivationFunction(size={self.bias.shape[0]})"


def tanh() -> ActivationFunctionWrapper:
    return ActivationFunctionWrapper(np.tanh)


def biased_tanh(bias: np.ndarray, values: np.ndarray) -> np.ndarray:
    return np.tanh(values + bias)


__all__ = ["ActivationFunctionWrapper", "BiasedActivationFunction", "tanh", "biased_tanh"]
