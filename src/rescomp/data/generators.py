"""src/rescomp/data/generators.py
Synthetic time series for training and demos. Every generator returns a
(channels, time) float64 matrix.
"""

from __future__ import annotations

import enum
from typing import Callable, Dict, Optional

import numpy as np

from rescomp.core.errors import ConfigurationError


class Dataset(str, enum.Enum):
    """Built-in synthetic series. Values match GENERATORS keys exactly."""

    SINE_COSINE = "sine-cosine"
    LORENZ = "lorenz"

    def __str__(self) -> str:
        return self.value


def _add_noise(data: np.ndarray, noise_level: float, seed: Optional[int]) -> np.ndarray:
    if noise_level < 0.0:
        raise ConfigurationError(f"noise_level must be >= 0, got {noise_level}")
    if noise_level == 0.0:
        return data
    rng = np.random.default_rng(seed)
    return data + rng.normal(0.0, noise_level, size=data.shape)


def generate_sine_cosine(
    n_steps: int,
    dt: float = 0.02,
    frequency: float = 1.0,
    noise_level: float = 0.0,
    seed: Optional[int] = None,
) -> np.ndarray:
    """Two channels [sin(2πft), cos(2πft)] sampled every dt."""
    if n_steps < 1:
        raise ConfigurationError(f"n_steps must be positive, got {n_steps}")
    t = np.arange(n_steps, dtype=np.float64) * dt
    phase = 2.0 * np.pi * frequency * t
    data = np.stack([np.sin(phase), np.cos(phase)], axis=0)
    return _add_noise(data, noise_level, seed)


def generate_lorenz(
    n_steps: int,
    dt: float = 0.01,
    sigma: float = 10.0,
    rho: float = 28.0,
    beta: float = 8.0 / 3.0,
    initial: tuple[float, float, float] = (1.0, 1.0, 1.0),
    transient: int = 0,
    noise_level: float = 0.0,
    seed: Optional[int] = None,
) -> np.ndarray:
    """Lorenz-63 trajectory [x, y, z] integrated with the explicit Euler method.

        dx/dt = σ(y - x)
        dy/dt = x(ρ - z) - y
        dz/dt = xy - βz

    The first `transient` integration steps are discarded.
    """
    if n_steps < 1:
        raise ConfigurationError(f"n_steps must be positive, got {n_steps}")
    if transient < 0:
        raise ConfigurationError(f"transient must be >= 0, got {transient}")
    x, y, z = (float(v) for v in initial)
    data = np.zeros((3, n_steps), dtype=np.float64)

    for i in range(transient + n_steps):
        dx = sigma * (y - x)
        dy = x * (rho - z) - y
        dz = x * y - beta * z

        x += dx * dt
        y += dy * dt
        z += dz * dt

        if i >= transient:
            data[:, i - transient] = (x, y, z)

    return _add_noise(data, noise_level, seed)


GENERATORS: Dict[str, Callable[..., np.ndarray]] = {
    Dataset.SINE_COSINE.value: generate_sine_cosine,
    Dataset.LORENZ.value: generate_lorenz,
}


def generate(dataset: Dataset | str, n_steps: int, **kwargs) -> np.ndarray:
    key = Dataset(dataset).value
    return GENERATORS[key](n_steps, **kwargs)


__all__ = ["Dataset", "GENERATORS", "generate", "generate_sine_cosine", "generate_lorenz"]
