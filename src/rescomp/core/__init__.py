"""Contracts, type aliases and the error taxonomy shared by every rescomp module."""

from .errors import (  # noqa: F401
    ConfigurationError,
    DimensionMismatchError,
    ReservoirError,
    SolverError,
    UnsupportedFeatureError,
)
from .interfaces import (  # noqa: F401
    ActivationFunction,
    InputProjection,
    StateMeasurement,
    StateProjection,
    TimeEvolution,
)

__all__ = [
    "ConfigurationError",
    "DimensionMismatchError",
    "ReservoirError",
    "SolverError",
    "UnsupportedFeatureError",
    "ActivationFunction",
    "InputProjection",
    "StateMeasurement",
    "StateProjection",
    "TimeEvolution",
]
