from .computer import ReservoirComputer  # noqa: F401
from .reservoir import Reservoir, ReservoirDynamics  # noqa: F401

__all__ = ["ReservoirComputer", "Reservoir", "ReservoirDynamics"]
