"""
src/rescomp/models/computer.py
Trained reservoir computer: reservoir + state measurement + readout, ready to forecast.
"""
from __future__ import annotations

import copy

import numpy as np

from rescomp.core.errors import ConfigurationError
from rescomp.core.interfaces import StateMeasurement, StateProjection
from rescomp.core.types import TopologyMeta
from rescomp.models.reservoir.model import Reservoir


class ReservoirComputer[M: StateMeasurement, P: StateProjection]:
    """Forwards prediction calls to the reservoir with the fitted measurement and readout bound in."""

    def __init__(self, reservoir: Reservoir, measurement: M, projection: P) -> None:
        if measurement.output_dimension() != projection.input_dimension():
            raise ConfigurationError(
                f"Measurement emits {measurement.output_dimension()} features but the readout expects "
                f"{projection.input_dimension()}"
            )
        self.reservoir = reservoir
        self.measurement = measurement
        self.projection = projection

    def required_input_columns(self) -> int:
        return self.reservoir.required_input_columns()

    def clone(self) -> "ReservoirComputer[M, P]":
        """Independent forecaster: own reservoir and measurement scratch, shared read-only readout."""
        return ReservoirComputer(self.reservoir.clone(), copy.deepcopy(self.measurement), self.projection)

    def synchronize_and_predict(
        self, kickstarter: np.ndarray, sync_steps: int, predict_steps: int, verbose: bool = False
    ) -> np.ndarray:
        if verbose:
            print(f"[computer.py] Generating {predict_steps} steps from a {np.shape(kickstarter)} kickstarter...")
        result = self.reservoir.synchronize_and_predict(
            kickstarter, sync_steps, predict_steps, self.measurement, self.projection
        )
        if verbose:
            print("[computer.py] Finished generating.")
        return result

    def synchronize_and_predict_into(
        self, kickstarter: np.ndarray, sync_steps: int, predict_steps: int, result: np.ndarray
    ) -> None:
        self.reservoir.synchronize_and_predict_into(
            kickstarter, sync_steps, predict_steps, self.measurement, self.projection, result
        )

    def predict_from_input_sequence(self, inputs: np.ndarray, sync_steps: int) -> np.ndarray:
        return self.reservoir.predict_from_input_sequence(inputs, sync_steps, self.measurement, self.projection)

    def predict_from_input_sequence_into(self, inputs: np.ndarray, sync_steps: int, result: np.ndarray) -> None:
        self.reservoir.predict_from_input_sequence_into(
            inputs, sync_steps, self.measurement, self.projection, result
        )

    def get_topology_meta(self) -> TopologyMeta:
        """Return topology metadata dict for rescomp.utils.printing.print_topology."""
        dynamics = self.reservoir.dynamics
        input_projection = dynamics.input_projection
        time_evolution = dynamics.time_evolution
        return {
            "type": "reservoir",
            "shapes": {
                "window": (input_projection.input_dimension(), input_projection.required_input_columns()),
                "projected": (input_projection.output_dimensions(),),
                "internal": (time_evolution.output_dimension(),),
                "feature": (self.measurement.output_dimension(),),
                "output": (self.projection.output_dimension(),),
            },
            "details": {
                "projection": type(input_projection).__name__,
                "evolution": type(time_evolution).__name__,
                "measurement": type(self.measurement).__name__,
                "embeddings": input_projection.embeddings(),
                "stride": getattr(input_projection, "stride", 0),
            },
        }

    def __repr__(self) -> str:
        return (
            f"ReservoirComputer(reservoir={self.reservoir!r}, measurement={self.measurement!r}, "
            f"projection={self.projection!r})"
        )


__all__ = ["ReservoirComputer"]
