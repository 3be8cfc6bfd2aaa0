"""Reservoir time evolutions, their configuration, and the stepping engine."""

from .activation import ActivationFunctionWrapper, BiasedActivationFunction  # noqa: F401
from .base import TimeEvolutionBase  # noqa: F401
from .classical import (  # noqa: F401
    DiscreteEchoStateNetwork,
    EchoStateNetworkBuilder,
    LeakyIntegratorEchoStateNetwork,
    from_config,
)
from .config import EchoStateNetworkConfig  # noqa: F401
from .dynamics import ReservoirDynamics  # noqa: F401
from .model import Reservoir  # noqa: F401

__all__ = [
    "ActivationFunctionWrapper",
    "BiasedActivationFunction",
    "TimeEvolutionBase",
    "DiscreteEchoStateNetwork",
    "EchoStateNetworkBuilder",
    "LeakyIntegratorEchoStateNetwork",
    "from_config",
    "EchoStateNetworkConfig",
    "ReservoirDynamics",
    "Reservoir",
]
