"""src/rescomp/core/interfaces.py
Protocol interfaces for the four roles the reservoir engine is generic over.

Matrices are (channels, time) float64 arrays; vectors are 1D float64 arrays.
Single-vector methods (`project`, `measure`) may return an internal scratch
buffer that is overwritten by the next call on the same object.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class InputProjection(Protocol):
    """Maps a window of raw input columns (current + strided history) to one projected vector."""

    def output_dimensions(self) -> int:
        ...

    def input_dimension(self) -> int:
        ...

    def embeddings(self) -> int:
        ...

    def required_input_columns(self) -> int:
        ...

    def project(self, window: np.ndarray) -> np.ndarray:
        ...

    def project_into(self, window: np.ndarray, target: np.ndarray) -> None:
        ...

    def project_many(self, inputs: np.ndarray) -> np.ndarray:
        ...

    def project_many_into(self, inputs: np.ndarray, targets: np.ndarray) -> None:
        ...


@runtime_checkable
class TimeEvolution(Protocol):
    """Advances a reservoir state in place given one projected input vector."""

    def input_dimension(self) -> int:
        ...

    def output_dimension(self) -> int:
        ...

    def time_evolution(self, state: np.ndarray, projected_input: np.ndarray) -> None:
        ...


@runtime_checkable
class StateMeasurement(Protocol):
    """Feature map from reservoir state (dimension D) to a measurement vector (dimension M)."""

    def output_dimension(self) -> int:
        ...

    def measure(self, state: np.ndarray) -> np.ndarray:
        ...

    def measure_into(self, state: np.ndarray, target: np.ndarray) -> None:
        ...

    def measure_many(self, states: np.ndarray) -> np.ndarray:
        ...

    def measure_many_into(self, states: np.ndarray, targets: np.ndarray) -> None:
        ...


@runtime_checkable
class StateProjection(Protocol):
    """Readout from measurement space to target space."""

    def output_dimension(self) -> int:
        ...

    def input_dimension(self) -> int:
        ...

    def project(self, measurement: np.ndarray) -> np.ndarray:
        ...

    def project_into(self, measurement: np.ndarray, target: np.ndarray) -> None:
        ...

    def project_many(self, measurements: np.ndarray) -> np.ndarray:
        ...

    def project_many_into(self, measurements: np.ndarray, targets: np.ndarray) -> None:
        ...


@runtime_checkable
class ActivationFunction(Protocol):
    """Element-wise nonlinearity applied to the reservoir pre-activation."""

    def __call__(self, values: np.ndarray) -> np.ndarray:
        ...


__all__ = [
    "InputProjection",
    "TimeEvolution",
    "StateMeasurement",
    "StateProjection",
    "ActivationFunction",
]
