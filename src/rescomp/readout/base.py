"""src/rescomp/readout/base.py
ABC for state projections (readout, Step 4).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict

import numpy as np

from rescomp.core.errors import DimensionMismatchError
from rescomp.core.types import as_matrix, as_vector
from rescomp.layers.projection import _check_target


class StateProjectionBase(ABC):
    """Abstract base for readouts mapping measurement vectors (dim M) to outputs."""

    @abstractmethod
    def output_dimension(self) -> int:
        ...

    @abstractmethod
    def input_dimension(self) -> int:
        ...

    @abstractmethod
    def _apply(self, measurements: np.ndarray, out: np.ndarray) -> None:
        """Map one vector or one column per measurement into `out`."""

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a plain config dict."""

    def _check_measurement(self, measurement: np.ndarray) -> np.ndarray:
        arr = as_vector(measurement, name="measurement")
        if arr.shape[0] != self.input_dimension():
            raise DimensionMismatchError(f"Measurement must have length {self.input_dimension()}, got {arr.shape[0]}")
        return arr

    def _check_measurements(self, measurements: np.ndarray) -> np.ndarray:
        arr = as_matrix(measurements, name="measurements")
        if arr.shape[0] != self.input_dimension():
            raise DimensionMismatchError(f"Measurements must have {self.input_dimension()} rows, got {arr.shape[0]}")
        return arr

    def project(self, measurement: np.ndarray) -> np.ndarray:
        arr = self._check_measurement(measurement)
        result = np.zeros(self.output_dimension(), dtype=np.float64)
        self._apply(arr, result)
        return result

    def project_into(self, measurement: np.ndarray, target: np.ndarray) -> None:
        arr = self._check_measurement(measurement)
        _check_target(target, (self.output_dimension(),))
        self._apply(arr, target)

    def project_many(self, measurements: np.ndarray) -> np.ndarray:
        arr = self._check_measurements(measurements)
        result = np.zeros((self.output_dimension(), arr.shape[1]), dtype=np.float64)
        self._apply(arr, result)
        return result

    def project_many_into(self, measurements: np.ndarray, targets: np.ndarray) -> None:
        arr = self._check_measurements(measurements)
        _check_target(targets, (self.output_dimension(), arr.shape[1]), name="targets")
        self._apply(arr, targets)


__all__ = ["StateProjectionBase"]
