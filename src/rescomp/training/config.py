"""
src/rescomp/training/config.py
Step-count configuration for a training session.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from rescomp.core.errors import ConfigurationError, UnsupportedFeatureError
from rescomp.core.types import as_count


@dataclass(frozen=True)
class TrainingConfig:
    """How each series is split: [train sync | train | prediction sync | prediction]."""

    train_sync_steps: int
    train_steps: int
    prediction_sync_steps: int = 0
    prediction_steps: int = 0

    @property
    def total_steps(self) -> int:
        """Minimum number of columns every series must have."""
        return self.train_sync_steps + self.train_steps + self.prediction_sync_steps + self.prediction_steps

    def validate(self, *, context: str = "") -> None:
        prefix = f"{context}: " if context else ""
        for name in ("train_sync_steps", "train_steps", "prediction_sync_steps", "prediction_steps"):
            value = as_count(getattr(self, name), name=f"{prefix}{name}")
            if value < 0:
                raise ConfigurationError(f"{prefix}{name} must be >= 0, got {value}.")
        if self.train_steps < 2:
            raise ConfigurationError(f"{prefix}train_steps must be >= 2 to pair states with targets, got {self.train_steps}.")
        if self.prediction_sync_steps != 0:
            raise UnsupportedFeatureError(
                f"{prefix}synchronization before prediction is not supported "
                f"(prediction_sync_steps={self.prediction_sync_steps})."
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "train_sync_steps": int(self.train_sync_steps),
            "train_steps": int(self.train_steps),
            "prediction_sync_steps": int(self.prediction_sync_steps),
            "prediction_steps": int(self.prediction_steps),
        }


__all__ = ["TrainingConfig"]
