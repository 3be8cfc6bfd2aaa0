# Package init
# Enforce 64-bit precision globally for numerical stability and determinism
import os
os.environ["JAX_ENABLE_X64"] = "True"

from rescomp.utils.jax_config import ensure_x64_enabled  # noqa: E402

ensure_x64_enabled()

from rescomp.core.errors import (  # noqa: E402
    ConfigurationError,
    DimensionMismatchError,
    ReservoirError,
    SolverError,
    UnsupportedFeatureError,
)
from rescomp.models.reservoir.dynamics import ReservoirDynamics  # noqa: E402
from rescomp.models.reservoir.model import Reservoir  # noqa: E402
from rescomp.models.computer import ReservoirComputer  # noqa: E402
from rescomp.training.config import TrainingConfig  # noqa: E402
from rescomp.training.session import ReservoirTraining  # noqa: E402

__all__ = [
    "ConfigurationError",
    "DimensionMismatchError",
    "ReservoirError",
    "SolverError",
    "UnsupportedFeatureError",
    "ReservoirDynamics",
    "Reservoir",
    "ReservoirComputer",
    "TrainingConfig",
    "ReservoirTraining",
]
