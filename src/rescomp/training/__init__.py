from .config import TrainingConfig  # noqa: F401
from .session import ReservoirTraining  # noqa: F401

__all__ = ["TrainingConfig", "ReservoirTraining"]
