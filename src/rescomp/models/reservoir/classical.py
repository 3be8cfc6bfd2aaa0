"""src/rescomp/models/reservoir/classical.py
Dense echo state network time evolutions and the builder that draws their adjacency matrix.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import jax
import jax.numpy as jnp
import numpy as np

from rescomp.core.errors import ConfigurationError
from rescomp.core.interfaces import ActivationFunction
from rescomp.core.types import as_matrix, to_jax_f64, to_np_f64
from rescomp.models.reservoir.activation import BiasedActivationFunction, biased_tanh, tanh
from rescomp.models.reservoir.base import TimeEvolutionBase
from rescomp.models.reservoir.config import EchoStateNetworkConfig


class EchoStateNetworkBuilder:
    """Holds an adjacency matrix until it is frozen into a time evolution."""

    def __init__(self, adjacency: np.ndarray) -> None:
        matrix = np.array(as_matrix(adjacency, name="adjacency"), dtype=np.float64)
        if matrix.shape[0] != matrix.shape[1] or matrix.shape[0] < 1:
            raise ConfigurationError(f"Adjacency matrix must be square and non-empty, got {matrix.shape}")
        self.adjacency = matrix

    @property
    def size(self) -> int:
        return self.adjacency.shape[0]

    @classmethod
    def random(cls, size: int, average_degree: float, seed: int = 0) -> "EchoStateNetworkBuilder":
        """Off-diagonal links with probability average_degree / (size - 1), weights U(-1, 1)."""
        size = int(size)
        if size < 1:
            raise ConfigurationError(f"size must be positive, got {size}")
        if size == 1:
            return cls(np.zeros((1, 1), dtype=np.float64))
        p = float(average_degree) / (size - 1)
        if not (0.0 <= p <= 1.0):
            raise ConfigurationError(f"average_degree must be in [0, {size - 1}], got {average_degree}")

        k_mask, k_values = jax.random.split(jax.random.PRNGKey(int(seed)))
        mask = jax.random.bernoulli(k_mask, p=p, shape=(size, size))
        mask = jnp.logical_and(mask, ~jnp.eye(size, dtype=bool))
        values = jax.random.uniform(k_values, (size, size), minval=-1.0, maxval=1.0, dtype=jnp.float64)
        return cls(to_np_f64(jnp.where(mask, values, 0.0)))

    def spectral_radius(self, radius: float) -> "EchoStateNetworkBuilder":
        """Rescale so the largest eigenvalue modulus equals `radius`; a nilpotent matrix is left unchanged."""
        if float(radius) <= 0.0:
            raise ConfigurationError(f"spectral radius must be > 0, got {radius}")
        eig = float(jnp.max(jnp.abs(jnp.linalg.eigvals(to_jax_f64(self.adjacency)))))
        if eig > 0.0:
            self.adjacency = self.adjacency * (float(radius) / eig)
        return self

    def build_discrete_network(self, activation: ActivationFunction) -> "DiscreteEchoStateNetwork":
        return DiscreteEchoStateNetwork(self.adjacency, activation)

    def build_leaky_integrator_network(
        self, activation: ActivationFunction, alpha: float
    ) -> "LeakyIntegratorEchoStateNetwork":
        return LeakyIntegratorEchoStateNetwork(self.adjacency, activation, alpha)


class DiscreteEchoStateNetwork(TimeEvolutionBase):
    """state <- f(A @ state + u)"""

    def __init__(self, adjacency: np.ndarray, activation: ActivationFunction) -> None:
        matrix = np.array(as_matrix(adjacency, name="adjacency"), dtype=np.float64)
        if matrix.shape[0] != matrix.shape[1]:
            raise ConfigurationError(f"Adjacency matrix must be square, got {matrix.shape}")
        super().__init__(n_units=matrix.shape[0])
        bias = getattr(activation, "bias", None)
        if bias is not None and np.shape(bias) != (self.n_units,):
            raise ConfigurationError(
                f"Activation bias must have shape ({self.n_units},) to match the adjacency, got {np.shape(bias)}"
            )
        matrix.setflags(write=False)
        self.adjacency = matrix
        self.activation = activation

    def _pre_activation(self, state: np.ndarray, projected_input: np.ndarray) -> np.ndarray:
        # allocates; the network holds no per-call scratch and may be shared between clones
        return np.matmul(self.adjacency, state) + projected_input

    def _step(self, state: np.ndarray, projected_input: np.ndarray) -> None:
        state[:] = self.activation(self._pre_activation(state, projected_input))

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["activation"] = repr(self.activation)
        return data

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n_units={self.n_units})"


class LeakyIntegratorEchoStateNetwork(DiscreteEchoStateNetwork):
    """state <- (1 - alpha) * state + alpha * f(A @ state + u)"""

    def __init__(self, adjacency: np.ndarray, activation: ActivationFunction, alpha: float) -> None:
        alpha = float(alpha)
        if not (0.0 < alpha <= 1.0):
            raise ConfigurationError(f"leak rate alpha must be in (0, 1], got {alpha}")
        super().__init__(adjacency, activation)
        self.alpha = alpha

    def _step(self, state: np.ndarray, projected_input: np.ndarray) -> None:
        activated = self.activation(self._pre_activation(state, projected_input))
        state *= 1.0 - self.alpha
        state += self.alpha * activated

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["alpha"] = self.alpha
        return data


def from_config(config: EchoStateNetworkConfig, activation: Optional[ActivationFunction] = None) -> DiscreteEchoStateNetwork:
    """Build the network described by `config`; tanh (biased when bias_scale > 0) unless given."""
    config.validate(context="EchoStateNetworkConfig")
    n_units = int(config.n_units)
    if activation is None:
        if config.bias_scale > 0.0:
            activation = BiasedActivationFunction.new_uniform_random(
                n_units, biased_tanh, config.bias_scale, seed=config.seed + 1
            )
        else:
            activation = tanh()
    builder = EchoStateNetworkBuilder.random(n_units, config.average_degree, seed=config.seed)
    builder.spectral_radius(config.spectral_radius)
    if config.leak_rate is None:
        return builder.build_discrete_network(activation)
    return builder.build_leaky_integrator_network(activation, config.leak_rate)


__all__ = [
    "EchoStateNetworkBuilder",
    "DiscreteEchoStateNetwork",
    "LeakyIntegratorEchoStateNetwork",
    "from_config",
]
