"""
src/rescomp/readout/linear.py
Linear readout W_out learned by regularized least squares, solved with JAX linear algebra.

Both solvers form the normal equations (X Xᵀ + R) W_outᵀ = X Yᵀ, with X the
measured states (M × T) and Y the targets (O × T), and solve them by LU
factorization. R = βI for ridge, R = ΓᵀΓ for Tikhonov.
"""
from __future__ import annotations

from typing import Any, Dict

import jax.numpy as jnp
import jax.scipy.linalg
import numpy as np

from rescomp.core.errors import ConfigurationError, DimensionMismatchError, SolverError
from rescomp.core.types import JaxF64, as_matrix, to_jax_f64, to_np_f64
from rescomp.readout.base import StateProjectionBase


def _check_training_pair(measured: np.ndarray, targets: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    X = as_matrix(measured, name="measured")
    Y = as_matrix(targets, name="targets")
    if X.shape[1] != Y.shape[1]:
        raise DimensionMismatchError(
            f"Mismatched samples: measured states have {X.shape[1]} columns, targets have {Y.shape[1]}."
        )
    if X.shape[1] == 0:
        raise DimensionMismatchError("Cannot fit a readout on zero samples.")
    return X, Y


def solve_normal_equations(lhs: JaxF64, rhs: JaxF64) -> JaxF64:
    """Solve lhs @ w = rhs by LU; raises SolverError on a zero pivot or a non-finite solution."""
    lu, piv = jax.scipy.linalg.lu_factor(lhs)
    pivots = jnp.abs(jnp.diag(lu))
    stats = {
        "min_abs_pivot": float(jnp.min(pivots)),
        "max_abs_pivot": float(jnp.max(pivots)),
        "size": float(lhs.shape[0]),
    }
    if stats["min_abs_pivot"] == 0.0:
        raise SolverError(f"Normal equations are singular (zero pivot in LU factorization), stats={stats}", stats)
    w = jax.scipy.linalg.lu_solve((lu, piv), rhs)
    if not bool(jnp.all(jnp.isfinite(w))):
        raise SolverError(f"Normal equations produced a non-finite solution, stats={stats}", stats)
    return w


class LinearStateProjection(StateProjectionBase):
    """Readout y = W_out @ m with a fixed, read-only W_out of shape (outputs, measurements)."""

    def __init__(self, w_out: np.ndarray) -> None:
        matrix = np.array(w_out, dtype=np.float64)
        if matrix.ndim != 2 or matrix.shape[0] < 1 or matrix.shape[1] < 1:
            raise ConfigurationError(f"W_out must be a non-empty 2D matrix, got shape {matrix.shape}")
        matrix.setflags(write=False)
        self._w_out = matrix

    @property
    def w_out(self) -> np.ndarray:
        return self._w_out

    def output_dimension(self) -> int:
        return self._w_out.shape[0]

    def input_dimension(self) -> int:
        return self._w_out.shape[1]

    def _apply(self, measurements: np.ndarray, out: np.ndarray) -> None:
        out[...] = self._w_out @ measurements

    @classmethod
    def via_ridge_regression(cls, beta: float, measured: np.ndarray, targets: np.ndarray) -> "LinearStateProjection":
        """argmin ‖W X − Y‖² + β‖W‖²; β = 0 is ordinary least squares."""
        beta = float(beta)
        if beta < 0.0:
            raise ConfigurationError(f"Ridge coefficient beta must be >= 0, got {beta}.")
        X, Y = _check_training_pair(measured, targets)
        X_j = to_jax_f64(X)
        Y_j = to_jax_f64(Y)
        lhs = X_j @ X_j.T + beta * jnp.eye(X.shape[0], dtype=jnp.float64)
        rhs = X_j @ Y_j.T
        return cls(to_np_f64(solve_normal_equations(lhs, rhs).T))

    @classmethod
    def via_tikhonov_regularization(
        cls, tikhonov: np.ndarray, measured: np.ndarray, targets: np.ndarray
    ) -> "LinearStateProjection":
        """argmin ‖W X − Y‖² + ‖Γ Wᵀ‖²; Γ must have one column per measurement row."""
        X, Y = _check_training_pair(measured, targets)
        gamma = as_matrix(tikhonov, name="tikhonov")
        if gamma.shape[1] != X.shape[0]:
            raise DimensionMismatchError(
                f"Tikhonov matrix must have {X.shape[0]} columns (one per measurement), got {gamma.shape[1]}."
            )
        X_j = to_jax_f64(X)
        Y_j = to_jax_f64(Y)
        G_j = to_jax_f64(gamma)
        lhs = X_j @ X_j.T + G_j.T @ G_j
        rhs = X_j @ Y_j.T
        return cls(to_np_f64(solve_normal_equations(lhs, rhs).T))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "linear",
            "input_dimension": self.input_dimension(),
            "output_dimension": self.output_dimension(),
        }

    def __repr__(self) -> str:
        return f"LinearStateProjection(input_dimension={self.input_dimension()}, output_dimension={self.output_dimension()})"


__all__ = ["LinearStateProjection", "solve_normal_equations"]
