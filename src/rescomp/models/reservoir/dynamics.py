"""
src/rescomp/models/reservoir/dynamics.py
Orchestration of input projection and time evolution: synchronize, record, predict.

The dynamics object never owns a state; every operation receives the state
vector and mutates it in place. `Reservoir` (model.py) pairs the two.

Window convention: with r = input_projection.required_input_columns(), the k-th
step of a pass over an input matrix projects columns [k, k + r).
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from rescomp.core.errors import ConfigurationError, DimensionMismatchError, UnsupportedFeatureError
from rescomp.core.interfaces import InputProjection, StateMeasurement, StateProjection, TimeEvolution
from rescomp.core.types import as_count, as_matrix

if TYPE_CHECKING:
    from rescomp.models.reservoir.model import Reservoir


class ReservoirDynamics[I: InputProjection, E: TimeEvolution]:
    """Stateless driver pairing one input projection with one time evolution."""

    def __init__(self, input_projection: I, time_evolution: E) -> None:
        if input_projection.output_dimensions() != time_evolution.input_dimension():
            raise ConfigurationError(
                f"Input projection emits {input_projection.output_dimensions()} values but the time evolution "
                f"expects {time_evolution.input_dimension()}"
            )
        self._input_projection = input_projection
        self._time_evolution = time_evolution

    @property
    def input_projection(self) -> I:
        return self._input_projection

    @property
    def time_evolution(self) -> E:
        return self._time_evolution

    def state_dimension(self) -> int:
        return self._time_evolution.input_dimension()

    def required_input_columns(self) -> int:
        return self._input_projection.required_input_columns()

    def into_reservoir(self) -> "Reservoir":
        from rescomp.models.reservoir.model import Reservoir

        return Reservoir(self)

    # ------------------------------------------------------------------
    # Validation (runs before anything is written)
    # ------------------------------------------------------------------
    def _check_state(self, state: np.ndarray) -> None:
        if not isinstance(state, np.ndarray) or state.dtype != np.float64:
            raise DimensionMismatchError(f"state must be a float64 numpy array, got {type(state).__name__}")
        if state.shape != (self.state_dimension(),):
            raise DimensionMismatchError(f"state must have shape ({self.state_dimension()},), got {state.shape}")

    def _check_inputs(self, inputs: np.ndarray, *, name: str = "inputs") -> np.ndarray:
        arr = as_matrix(inputs, name=name)
        expected = self._input_projection.input_dimension()
        if arr.shape[0] != expected:
            raise DimensionMismatchError(f"{name} must have {expected} rows, got {arr.shape[0]}")
        return arr

    def _check_result(self, result: np.ndarray, shape: tuple[int, int]) -> None:
        if not isinstance(result, np.ndarray) or result.dtype != np.float64:
            raise DimensionMismatchError(f"result must be a float64 numpy array, got {type(result).__name__}")
        if result.shape != shape:
            raise DimensionMismatchError(f"result must have shape {shape}, got {result.shape}")

    def _check_readout_chain(self, measurement: StateMeasurement, projection: StateProjection) -> None:
        if measurement.output_dimension() != projection.input_dimension():
            raise DimensionMismatchError(
                f"Measurement emits {measurement.output_dimension()} features but the readout expects "
                f"{projection.input_dimension()}"
            )

    def _record_shape(self, inputs: np.ndarray, sync_steps: int) -> tuple[np.ndarray, int, tuple[int, int]]:
        arr = self._check_inputs(inputs)
        sync_steps = as_count(sync_steps, name="sync_steps", error=DimensionMismatchError)
        n_cols = arr.shape[1]
        minimum = self.required_input_columns() - 1
        if not (minimum <= sync_steps <= n_cols):
            raise DimensionMismatchError(
                f"sync_steps must lie in [{minimum}, {n_cols}] for {n_cols} input columns, got {sync_steps}"
            )
        return arr, sync_steps, (self._time_evolution.output_dimension(), n_cols - sync_steps)

    def _predict_shape(
        self,
        kickstarter: np.ndarray,
        sync_steps: int,
        predict_steps: int,
        measurement: StateMeasurement,
        projection: StateProjection,
    ) -> tuple[np.ndarray, tuple[int, int]]:
        if as_count(sync_steps, name="sync_steps", error=DimensionMismatchError) != 0:
            raise UnsupportedFeatureError(f"Synchronization before prediction is not supported (sync_steps={sync_steps})")
        arr = self._check_inputs(kickstarter, name="kickstarter")
        required = self.required_input_columns()
        if arr.shape[1] != required:
            raise DimensionMismatchError(f"kickstarter must have exactly {required} columns, got {arr.shape[1]}")
        predict_steps = as_count(predict_steps, name="predict_steps", error=DimensionMismatchError)
        if predict_steps < 0:
            raise DimensionMismatchError(f"predict_steps must be >= 0, got {predict_steps}")
        self._check_readout_chain(measurement, projection)
        if projection.output_dimension() != self._input_projection.input_dimension():
            raise DimensionMismatchError(
                f"Readout emits {projection.output_dimension()} values but predictions are fed back into "
                f"{self._input_projection.input_dimension()} input channels"
            )
        return arr, (projection.output_dimension(), predict_steps)

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------
    def _advance(self, state: np.ndarray, window: np.ndarray) -> None:
        self._time_evolution.time_evolution(state, self._input_projection.project(window))

    def _run(self, state: np.ndarray, inputs: np.ndarray) -> None:
        steps = inputs.shape[1] - self.required_input_columns() + 1
        if steps <= 0:
            return
        projected = self._input_projection.project_many(inputs)
        for k in range(steps):
            self._time_evolution.time_evolution(state, projected[:, k])

    def synchronize_state(self, state: np.ndarray, inputs: np.ndarray) -> None:
        """Drive `state` through every window of `inputs`, discarding the intermediate states.

        S columns give S - r + 1 steps; S = r - 1 is a legal no-op.
        """
        self._check_state(state)
        arr = self._check_inputs(inputs)
        minimum = self.required_input_columns() - 1
        if arr.shape[1] < minimum:
            raise DimensionMismatchError(f"Synchronization needs at least {minimum} columns, got {arr.shape[1]}")
        self._run(state, arr)

    def record_states(self, state: np.ndarray, inputs: np.ndarray, sync_steps: int) -> np.ndarray:
        """Synchronize on the first `sync_steps` columns, then record one state per remaining column."""
        self._check_state(state)
        arr, sync_steps, shape = self._record_shape(inputs, sync_steps)
        result = np.zeros(shape, dtype=np.float64)
        self._record(state, arr, sync_steps, result)
        return result

    def record_states_into(self, state: np.ndarray, inputs: np.ndarray, sync_steps: int, result: np.ndarray) -> None:
        self._check_state(state)
        arr, sync_steps, shape = self._record_shape(inputs, sync_steps)
        self._check_result(result, shape)
        self._record(state, arr, sync_steps, result)

    def _record(self, state: np.ndarray, inputs: np.ndarray, sync_steps: int, result: np.ndarray) -> None:
        self._run(state, inputs[:, :sync_steps])
        if result.shape[1] == 0:
            return
        # the window for column c is [c - r + 1, c], so start r - 1 columns before the first recorded one
        start = sync_steps - self.required_input_columns() + 1
        projected = self._input_projection.project_many(inputs[:, start:])
        for i in range(result.shape[1]):
            self._time_evolution.time_evolution(state, projected[:, i])
            result[:, i] = state

    def synchronize_and_predict(
        self,
        state: np.ndarray,
        kickstarter: np.ndarray,
        sync_steps: int,
        predict_steps: int,
        measurement: StateMeasurement,
        projection: StateProjection,
    ) -> np.ndarray:
        """Autoregressive forecast seeded by exactly r kickstarter columns."""
        self._check_state(state)
        arr, shape = self._predict_shape(kickstarter, sync_steps, predict_steps, measurement, projection)
        result = np.zeros(shape, dtype=np.float64)
        self._predict(state, arr, measurement, projection, result)
        return result

    def synchronize_and_predict_into(
        self,
        state: np.ndarray,
        kickstarter: np.ndarray,
        sync_steps: int,
        predict_steps: int,
        measurement: StateMeasurement,
        projection: StateProjection,
        result: np.ndarray,
    ) -> None:
        self._check_state(state)
        arr, shape = self._predict_shape(kickstarter, sync_steps, predict_steps, measurement, projection)
        self._check_result(result, shape)
        self._predict(state, arr, measurement, projection, result)

    def _predict(
        self,
        state: np.ndarray,
        kickstarter: np.ndarray,
        measurement: StateMeasurement,
        projection: StateProjection,
        result: np.ndarray,
    ) -> None:
        r = self.required_input_columns()
        self._advance(state, kickstarter)

        # Until r predictions exist the window mixes kickstarter tail and predictions.
        buffer = np.zeros((kickstarter.shape[0], 2 * r), dtype=np.float64)
        buffer[:, : r - 1] = kickstarter[:, 1:]

        for step in range(result.shape[1]):
            projection.project_into(measurement.measure(state), result[:, step])
            if step < r:
                buffer[:, r - 1 + step] = result[:, step]
                window = buffer[:, step : step + r]
            else:
                window = result[:, step - r + 1 : step + 1]
            self._advance(state, window)

    def predict_from_input_sequence(
        self,
        state: np.ndarray,
        inputs: np.ndarray,
        sync_steps: int,
        measurement: StateMeasurement,
        projection: StateProjection,
    ) -> np.ndarray:
        """Open-loop readout: one output per input window, no feedback."""
        self._check_state(state)
        arr, shape = self._sequence_shape(inputs, sync_steps, measurement, projection)
        result = np.zeros(shape, dtype=np.float64)
        self._predict_sequence(state, arr, measurement, projection, result)
        return result

    def predict_from_input_sequence_into(
        self,
        state: np.ndarray,
        inputs: np.ndarray,
        sync_steps: int,
        measurement: StateMeasurement,
        projection: StateProjection,
        result: np.ndarray,
    ) -> None:
        self._check_state(state)
        arr, shape = self._sequence_shape(inputs, sync_steps, measurement, projection)
        self._check_result(result, shape)
        self._predict_sequence(state, arr, measurement, projection, result)

    def _sequence_shape(
        self,
        inputs: np.ndarray,
        sync_steps: int,
        measurement: StateMeasurement,
        projection: StateProjection,
    ) -> tuple[np.ndarray, tuple[int, int]]:
        if as_count(sync_steps, name="sync_steps", error=DimensionMismatchError) != 0:
            raise UnsupportedFeatureError(f"Synchronization before prediction is not supported (sync_steps={sync_steps})")
        arr = self._check_inputs(inputs)
        required = self.required_input_columns()
        if arr.shape[1] < required:
            raise DimensionMismatchError(f"Need at least {required} input columns, got {arr.shape[1]}")
        self._check_readout_chain(measurement, projection)
        return arr, (projection.output_dimension(), arr.shape[1] - required + 1)

    def _predict_sequence(
        self,
        state: np.ndarray,
        inputs: np.ndarray,
        measurement: StateMeasurement,
        projection: StateProjection,
        result: np.ndarray,
    ) -> None:
        projected = self._input_projection.project_many(inputs)
        for k in range(result.shape[1]):
            self._time_evolution.time_evolution(state, projected[:, k])
            projection.project_into(measurement.measure(state), result[:, k])

    def __repr__(self) -> str:
        return f"ReservoirDynamics(input_projection={self._input_projection!r}, time_evolution={self._time_evolution!r})"


__all__ = ["ReservoirDynamics"]
