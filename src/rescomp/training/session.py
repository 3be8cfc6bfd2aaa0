"""
src/rescomp/training/session.py
Training session: holds raw series, records reservoir states over the training
window and fits a linear readout by ridge or Tikhonov regression.

Alignment for one series with S = train_sync_steps and T = train_steps:

    columns [0, S)          synchronization (states discarded)
    columns [S, S + T - 1)  one recorded state per column c ...
    columns [S + 1, S + T)  ... paired with target column c + 1

so T - 1 state/target pairs are fitted and the reservoir ends in the state
reached after column S + T - 2. The prediction kickstarter is the trailing
window of the training block, which continues the simulation seamlessly.
"""
from __future__ import annotations

from typing import Optional

import numpy as np

from rescomp.core.errors import ConfigurationError, DimensionMismatchError, UnsupportedFeatureError
from rescomp.core.interfaces import StateMeasurement
from rescomp.core.types import as_count, as_matrix
from rescomp.models.computer import ReservoirComputer
from rescomp.models.reservoir.model import Reservoir
from rescomp.readout.linear import LinearStateProjection
from rescomp.training.config import TrainingConfig

DEFAULT_RIDGE_BETA = 1e-7


class ReservoirTraining:
    """Collects series and produces a trained ReservoirComputer."""

    def __init__(
        self,
        config: TrainingConfig | int,
        train_steps: Optional[int] = None,
        prediction_sync_steps: int = 0,
        prediction_steps: int = 0,
    ) -> None:
        if isinstance(config, TrainingConfig):
            if train_steps is not None:
                raise ConfigurationError("Pass either a TrainingConfig or the four step counts, not both.")
        else:
            if train_steps is None:
                raise ConfigurationError("train_steps is required when step counts are given individually.")
            config = TrainingConfig(
                train_sync_steps=config,
                train_steps=train_steps,
                prediction_sync_steps=prediction_sync_steps,
                prediction_steps=prediction_steps,
            )
        config.validate(context="ReservoirTraining")
        self.config = config
        self.data: list[np.ndarray] = []

    @property
    def train_end(self) -> int:
        """First column after the training block."""
        return self.config.train_sync_steps + self.config.train_steps

    def add_data(self, data: np.ndarray) -> "ReservoirTraining":
        arr = np.array(as_matrix(data, name="data"), dtype=np.float64)
        if arr.shape[1] < self.config.total_steps:
            raise ConfigurationError(
                f"Series has {arr.shape[1]} columns but the session needs at least {self.config.total_steps}."
            )
        if self.data and arr.shape[0] != self.data[0].shape[0]:
            raise DimensionMismatchError(
                f"All series must have the same channels; expected {self.data[0].shape[0]}, got {arr.shape[0]}."
            )
        self.data.append(arr)
        return self

    def _series(self, index: int) -> np.ndarray:
        if not (0 <= index < len(self.data)):
            raise IndexError(f"Series index {index} out of range for {len(self.data)} series.")
        return self.data[index]

    def _single_series(self) -> np.ndarray:
        if not self.data:
            raise ConfigurationError("No data added to the training session.")
        if len(self.data) != 1:
            raise UnsupportedFeatureError(f"Training on multiple series is not supported, got {len(self.data)}.")
        return self.data[0]

    def _measured_pairs(
        self, reservoir: Reservoir, measurement: StateMeasurement, verbose: bool
    ) -> tuple[np.ndarray, np.ndarray]:
        series = self._single_series()
        sync = self.config.train_sync_steps
        minimum = reservoir.required_input_columns() - 1
        if sync < minimum:
            raise ConfigurationError(
                f"train_sync_steps={sync} is shorter than the {minimum} history columns the input projection needs."
            )
        states = reservoir.record_states(series[:, : self.train_end - 1], sync)
        targets = series[:, sync + 1 : self.train_end]
        if states.shape[1] != targets.shape[1]:
            raise DimensionMismatchError(
                f"Recorded {states.shape[1]} states but sliced {targets.shape[1]} targets."
            )
        if verbose:
            print(f"[session.py] Recorded {states.shape[1]} states (dim={states.shape[0]})")
        measured = measurement.measure_many(states)
        return measured, targets

    def train_via_ridge_regression(
        self,
        reservoir: Reservoir,
        measurement: StateMeasurement,
        beta: float = DEFAULT_RIDGE_BETA,
        verbose: bool = False,
    ) -> ReservoirComputer:
        measured, targets = self._measured_pairs(reservoir, measurement, verbose)
        if verbose:
            print(f"[session.py] Solving ridge regression (beta={beta:.1e}, features={measured.shape[0]})...")
        projection = LinearStateProjection.via_ridge_regression(beta, measured, targets)
        return ReservoirComputer(reservoir, measurement, projection)

    def train_via_tikhonov_regularization(
        self,
        tikhonov: np.ndarray,
        reservoir: Reservoir,
        measurement: StateMeasurement,
        verbose: bool = False,
    ) -> ReservoirComputer:
        measured, targets = self._measured_pairs(reservoir, measurement, verbose)
        if verbose:
            print(f"[session.py] Solving Tikhonov regression (features={measured.shape[0]})...")
        projection = LinearStateProjection.via_tikhonov_regularization(tikhonov, measured, targets)
        return ReservoirComputer(reservoir, measurement, projection)

    def get_prediction_kickstarter(self, index: int, required_elements: int) -> np.ndarray:
        """Trailing `required_elements` columns of the training block of series `index`."""
        series = self._series(index)
        required_elements = as_count(required_elements, name="required_elements", error=DimensionMismatchError)
        if not (1 <= required_elements <= self.train_end):
            raise DimensionMismatchError(
                f"required_elements must lie in [1, {self.train_end}], got {required_elements}."
            )
        return series[:, self.train_end - required_elements : self.train_end].copy()

    def get_true_future(self, index: int) -> np.ndarray:
        """Every column after the training block and the prediction synchronization."""
        series = self._series(index)
        return series[:, self.train_end + self.config.prediction_sync_steps :].copy()

    def __repr__(self) -> str:
        return f"ReservoirTraining(config={self.config}, series={len(self.data)})"


__all__ = ["ReservoirTraining", "DEFAULT_RIDGE_BETA"]
