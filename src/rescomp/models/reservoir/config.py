"""src/rescomp/models/reservoir/config.py"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from rescomp.core.errors import ConfigurationError


@dataclass(frozen=True)
class EchoStateNetworkConfig:
    """
    Configuration for echo state network time evolutions.
    leak_rate=None selects the discrete network, anything else the leaky integrator.
    """

    n_units: Optional[int] = None  # defined by the caller / CLI
    average_degree: float = 3.0
    spectral_radius: float = 0.9
    leak_rate: Optional[float] = None
    bias_scale: float = 0.0
    seed: int = 42

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in self.__dict__.items() if v is not None}

    def validate(self, *, context: str = "") -> None:
        prefix = f"{context}: " if context else ""
        if self.n_units is None or self.n_units <= 0:
            raise ConfigurationError(f"{prefix}n_units must be > 0.")
        if self.average_degree < 0.0:
            raise ConfigurationError(f"{prefix}average_degree must be >= 0.")
        if self.n_units > 1 and self.average_degree > self.n_units - 1:
            raise ConfigurationError(f"{prefix}average_degree must be <= n_units - 1 ({self.n_units - 1}).")
        if not (0.0 < self.spectral_radius):
            raise ConfigurationError(f"{prefix}spectral_radius must be > 0.")
        if self.leak_rate is not None and not (0.0 < self.leak_rate <= 1.0):
            raise ConfigurationError(f"{prefix}leak_rate must be in (0, 1].")
        if self.bias_scale < 0.0:
            raise ConfigurationError(f"{prefix}bias_scale must be >= 0.")


__all__ = ["EchoStateNetworkConfig"]
