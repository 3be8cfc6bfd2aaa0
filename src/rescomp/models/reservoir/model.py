"""src/rescomp/models/reservoir/model.py
A reservoir simulation: ReservoirDynamics plus the state vector it advances.
"""
from __future__ import annotations

import copy

import numpy as np

from rescomp.core.interfaces import InputProjection, StateMeasurement, StateProjection, TimeEvolution
from rescomp.models.reservoir.dynamics import ReservoirDynamics


class Reservoir[I: InputProjection, E: TimeEvolution]:
    """Owns the state (zeros at creation) and forwards every operation to the dynamics."""

    def __init__(self, dynamics: ReservoirDynamics[I, E]) -> None:
        self.dynamics = dynamics
        self._state = np.zeros(dynamics.state_dimension(), dtype=np.float64)

    @classmethod
    def from_parts(cls, input_projection: I, time_evolution: E) -> "Reservoir[I, E]":
        return cls(ReservoirDynamics(input_projection, time_evolution))

    @property
    def state(self) -> np.ndarray:
        """Live state vector; mutated in place by every step."""
        return self._state

    def reset_state(self) -> None:
        self._state[:] = 0.0

    def required_input_columns(self) -> int:
        return self.dynamics.required_input_columns()

    def clone(self) -> "Reservoir[I, E]":
        """Independent simulation: copies state and input projection, shares the scratch-free time evolution."""
        twin = Reservoir(
            ReservoirDynamics(copy.deepcopy(self.dynamics.input_projection), self.dynamics.time_evolution)
        )
        twin._state[:] = self._state
        return twin

    def synchronize(self, inputs: np.ndarray) -> None:
        self.dynamics.synchronize_state(self._state, inputs)

    def record_states(self, inputs: np.ndarray, sync_steps: int) -> np.ndarray:
        return self.dynamics.record_states(self._state, inputs, sync_steps)

    def record_states_into(self, inputs: np.ndarray, sync_steps: int, result: np.ndarray) -> None:
        self.dynamics.record_states_into(self._state, inputs, sync_steps, result)

    def synchronize_and_predict(
        self,
        kickstarter: np.ndarray,
        sync_steps: int,
        predict_steps: int,
        measurement: StateMeasurement,
        projection: StateProjection,
    ) -> np.ndarray:
        return self.dynamics.synchronize_and_predict(
            self._state, kickstarter, sync_steps, predict_steps, measurement, projection
        )

    def synchronize_and_predict_into(
        self,
        kickstarter: np.ndarray,
        sync_steps: int,
        predict_steps: int,
        measurement: StateMeasurement,
        projection: StateProjection,
        result: np.ndarray,
    ) -> None:
        self.dynamics.synchronize_and_predict_into(
            self._state, kickstarter, sync_steps, predict_steps, measurement, projection, result
        )

    def predict_from_input_sequence(
        self,
        inputs: np.ndarray,
        sync_steps: int,
        measurement: StateMeasurement,
        projection: StateProjection,
    ) -> np.ndarray:
        return self.dynamics.predict_from_input_sequence(self._state, inputs, sync_steps, measurement, projection)

    def predict_from_input_sequence_into(
        self,
        inputs: np.ndarray,
        sync_steps: int,
        measurement: StateMeasurement,
        projection: StateProjection,
        result: np.ndarray,
    ) -> None:
        self.dynamics.predict_from_input_sequence_into(
            self._state, inputs, sync_steps, measurement, projection, result
        )

    def __repr__(self) -> str:
        return f"Reservoir(state_dimension={self._state.shape[0]}, dynamics={self.dynamics!r})"


__all__ = ["Reservoir"]
