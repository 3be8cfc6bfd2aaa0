"""src/rescomp/utils/metrics.py
Forecast error metrics. Inputs are (channels, time) matrices of equal shape.
"""

from .jax_config import ensure_x64_enabled

ensure_x64_enabled()

import jax.numpy as jnp  # noqa: E402
import numpy as np  # noqa: E402

from rescomp.core.errors import DimensionMismatchError  # noqa: E402


def _pair(predictions: np.ndarray, targets: np.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    preds = jnp.asarray(predictions, dtype=jnp.float64)
    targs = jnp.asarray(targets, dtype=jnp.float64)
    if preds.shape != targs.shape:
        raise DimensionMismatchError(f"Shape mismatch: predictions {preds.shape} vs targets {targs.shape}")
    return preds, targs


def calculate_mse(predictions: np.ndarray, targets: np.ndarray) -> float:
    """Mean squared error, MSE = (1/n) * Σ(y_pred - y_true)²."""
    preds, targs = _pair(predictions, targets)
    return float(jnp.mean((preds - targs) ** 2))


def calculate_mae(predictions: np.ndarray, targets: np.ndarray) -> float:
    preds, targs = _pair(predictions, targets)
    return float(jnp.mean(jnp.abs(preds - targs)))


def calculate_nrmse(predictions: np.ndarray, targets: np.ndarray) -> float:
    """RMSE normalised by the per-channel standard deviation of the targets (time along axis 1)."""
    preds, targs = _pair(predictions, targets)
    rmse = jnp.sqrt(jnp.mean((preds - targs) ** 2, axis=-1))
    std = jnp.std(targs, axis=-1)
    return float(jnp.mean(rmse / jnp.where(std > 0.0, std, 1.0)))


def valid_prediction_steps(predictions: np.ndarray, targets: np.ndarray, threshold: float = 0.4) -> int:
    """Number of leading steps whose normalised error stays below `threshold`."""
    preds, targs = _pair(predictions, targets)
    if preds.ndim != 2:
        raise DimensionMismatchError(f"Expected (channels, time) matrices, got shape {preds.shape}")
    scale = jnp.sqrt(jnp.mean(targs ** 2, axis=-1, keepdims=True))
    err = jnp.sqrt(jnp.mean(((preds - targs) / jnp.where(scale > 0.0, scale, 1.0)) ** 2, axis=0))
    above = np.flatnonzero(np.asarray(err) > threshold)
    return int(above[0]) if above.size else int(preds.shape[1])


__all__ = ["calculate_mse", "calculate_mae", "calculate_nrmse", "valid_prediction_steps"]
