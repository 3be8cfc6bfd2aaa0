"""
src/rescomp/models/reservoir/base.py
Base class for time evolutions implementing the TimeEvolution protocol.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict

import numpy as np

from rescomp.core.errors import DimensionMismatchError


class TimeEvolutionBase(ABC):
    """Abstract base providing the shape checks around a single in-place state update."""

    def __init__(self, n_units: int) -> None:
        self.n_units = int(n_units)

    def input_dimension(self) -> int:
        return self.n_units

    def output_dimension(self) -> int:
        return self.n_units

    @abstractmethod
    def _step(self, state: np.ndarray, projected_input: np.ndarray) -> None:
        """Advance `state` in place (must be implemented by subclasses)."""
        raise NotImplementedError

    def time_evolution(self, state: np.ndarray, projected_input: np.ndarray) -> None:
        if state.shape != (self.n_units,):
            raise DimensionMismatchError(f"State must have shape ({self.n_units},), got {state.shape}")
        if projected_input.shape != (self.input_dimension(),):
            raise DimensionMismatchError(
                f"Projected input must have shape ({self.input_dimension()},), got {projected_input.shape}"
            )
        self._step(state, projected_input)

    def to_dict(self) -> Dict[str, Any]:
        return {"n_units": self.n_units}
