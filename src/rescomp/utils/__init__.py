"""Utility helpers: JAX configuration, metrics and printing."""

from .jax_config import ensure_x64_enabled  # noqa: F401
from .metrics import calculate_mae, calculate_mse, calculate_nrmse, valid_prediction_steps  # noqa: F401
from .printing import format_shape, print_topology  # noqa: F401

__all__ = [
    "ensure_x64_enabled",
    "calculate_mae",
    "calculate_mse",
    "calculate_nrmse",
    "valid_prediction_steps",
    "format_shape",
    "print_topology",
]
