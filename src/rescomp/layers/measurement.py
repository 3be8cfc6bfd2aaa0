"""src/rescomp/layers/measurement.py
Step 3 State measurement: reservoir state (dim D) -> feature vector (dim M) fed to the readout.

Matrix forms treat each column as one state and must agree column by column with
the vector forms.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from rescomp.core.errors import ConfigurationError, DimensionMismatchError
from rescomp.core.types import as_matrix, as_vector
from rescomp.layers.projection import _check_target


class BaseStateMeasurement(ABC):
    """Shared shape checks and scratch buffer for state measurements."""

    def __init__(self, state_dimension: int) -> None:
        state_dimension = int(state_dimension)
        if state_dimension < 1:
            raise ConfigurationError(f"state_dimension must be positive, got {state_dimension}")
        self._state_dimension = state_dimension
        self._result = np.zeros(self.output_dimension(), dtype=np.float64)

    def state_dimension(self) -> int:
        return self._state_dimension

    @abstractmethod
    def output_dimension(self) -> int:
        ...

    @abstractmethod
    def _apply(self, states: np.ndarray, out: np.ndarray) -> None:
        """Write the features of `states` (columns = states) into `out` (columns = features)."""

    def _check_state(self, state: np.ndarray) -> np.ndarray:
        arr = as_vector(state, name="state")
        if arr.shape[0] != self._state_dimension:
            raise DimensionMismatchError(f"State must have length {self._state_dimension}, got {arr.shape[0]}")
        return arr

    def _check_states(self, states: np.ndarray) -> np.ndarray:
        arr = as_matrix(states, name="states")
        if arr.shape[0] != self._state_dimension:
            raise DimensionMismatchError(f"States must have {self._state_dimension} rows, got {arr.shape[0]}")
        return arr

    def measure(self, state: np.ndarray) -> np.ndarray:
        arr = self._check_state(state)
        self._apply(arr[:, None], self._result[:, None])
        return self._result

    def measure_into(self, state: np.ndarray, target: np.ndarray) -> None:
        arr = self._check_state(state)
        _check_target(target, (self.output_dimension(),))
        self._apply(arr[:, None], target[:, None])

    def measure_many(self, states: np.ndarray) -> np.ndarray:
        arr = self._check_states(states)
        result = np.zeros((self.output_dimension(), arr.shape[1]), dtype=np.float64)
        self._apply(arr, result)
        return result

    def measure_many_into(self, states: np.ndarray, targets: np.ndarray) -> None:
        arr = self._check_states(states)
        _check_target(targets, (self.output_dimension(), arr.shape[1]), name="targets")
        self._apply(arr, targets)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(state_dimension={self._state_dimension}, output_dimension={self.output_dimension()})"


class DefaultStateMeasurement(BaseStateMeasurement):
    """Identity measurement."""

    def output_dimension(self) -> int:
        return self._state_dimension

    def _apply(self, states: np.ndarray, out: np.ndarray) -> None:
        out[...] = states


class LuStateMeasurement(BaseStateMeasurement):
    """Squares every odd-indexed component (1, 3, 5, ...), keeps the even ones.

    Breaks the odd symmetry of tanh reservoirs, which otherwise cannot reproduce
    even-order terms of the driving system.
    """

    def output_dimension(self) -> int:
        return self._state_dimension

    def _apply(self, states: np.ndarray, out: np.ndarray) -> None:
        out[...] = states
        out[1::2] = states[1::2] ** 2


class ExtendedLuStateMeasurement(BaseStateMeasurement):
    """Concatenates the raw state with its element-wise square: output is [state, state**2]."""

    def output_dimension(self) -> int:
        return 2 * self._state_dimension

    def _apply(self, states: np.ndarray, out: np.ndarray) -> None:
        d = self._state_dimension
        out[:d] = states
        out[d:] = states ** 2


class ConstantExtensionStateMeasurement(BaseStateMeasurement):
    """Appends a constant entry to the state, giving the linear readout a bias term."""

    def __init__(self, state_dimension: int, constant: float = 1.0) -> None:
        self._constant = float(constant)
        super().__init__(state_dimension)

    @property
    def constant(self) -> float:
        return self._constant

    def output_dimension(self) -> int:
        return self._state_dimension + 1

    def _apply(self, states: np.ndarray, out: np.ndarray) -> None:
        out[:-1] = states
        out[-1] = self._constant


__all__ = [
    "BaseStateMeasurement",
    "DefaultStateMeasurement",
    "LuStateMeasurement",
    "ExtendedLuStateMeasurement",
    "ConstantExtensionStateMeasurement",
]
