"""src/rescomp/layers/projection.py
Step 1 Input projection: raw input window (current column + strided history) -> projected vector.

A projection with `embeddings = e` and `stride = s` needs `1 + e*s` consecutive
raw columns and reads the taps at offsets 0, s, 2s, ..., e*s. The taps are
stacked channel-block by channel-block (current column first) and then either
copied through (identity) or multiplied by a fixed input matrix.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

import jax
import jax.numpy as jnp
import numpy as np

from rescomp.core.errors import ConfigurationError, DimensionMismatchError
from rescomp.core.types import as_count, as_matrix, to_np_f64


def _check_target(target: np.ndarray, shape: tuple[int, ...], *, name: str = "target") -> None:
    if not isinstance(target, np.ndarray) or target.dtype != np.float64:
        raise DimensionMismatchError(f"{name} must be a float64 numpy array, got {type(target).__name__}")
    if target.shape != shape:
        raise DimensionMismatchError(f"{name} must have shape {shape}, got {target.shape}")


def single_tap_matrix(output_dim: int, input_dim: int, input_strength: float, seed: int) -> np.ndarray:
    """Random input matrix with exactly one nonzero entry per row.

    Each row picks a uniformly random column and stores `input_strength * U(-1, 1)` there.
    """
    output_dim = as_count(output_dim, name="output_dim")
    input_dim = as_count(input_dim, name="input_dim")
    if output_dim < 1 or input_dim < 1:
        raise ConfigurationError(f"Input matrix needs positive dimensions, got ({output_dim}, {input_dim})")
    k_choice, k_value = jax.random.split(jax.random.PRNGKey(int(seed)))
    choices = jax.random.randint(k_choice, (output_dim,), 0, input_dim)
    values = jax.random.uniform(k_value, (output_dim,), minval=-1.0, maxval=1.0, dtype=jnp.float64)
    W = jnp.zeros((output_dim, input_dim), dtype=jnp.float64)
    W = W.at[jnp.arange(output_dim), choices].set(float(input_strength) * values)
    return to_np_f64(W)


class BaseInputProjection(ABC):
    """Shared window bookkeeping; subclasses only decide how the stacked taps are mapped."""

    def __init__(self, input_dimension: int, output_dimension: int, embeddings: int, stride: int) -> None:
        input_dimension = as_count(input_dimension, name="input_dimension")
        embeddings = as_count(embeddings, name="embeddings")
        stride = as_count(stride, name="stride")
        if input_dimension < 1:
            raise ConfigurationError(f"input_dimension must be positive, got {input_dimension}")
        if embeddings < 0 or stride < 0:
            raise ConfigurationError(f"embeddings and stride must be non-negative, got embeddings={embeddings}, stride={stride}")
        if embeddings > 0 and stride == 0:
            raise ConfigurationError(f"stride=0 is only legal without embeddings, got embeddings={embeddings}")
        self._input_dimension = input_dimension
        self._embeddings = embeddings
        self._stride = stride
        # scratch buffers, overwritten on every single-window call
        self._embedded = np.zeros(input_dimension * (1 + embeddings), dtype=np.float64)
        self._result = np.zeros(as_count(output_dimension, name="output_dimension"), dtype=np.float64)

    @property
    def stride(self) -> int:
        return self._stride

    def output_dimensions(self) -> int:
        return self._result.shape[0]

    def input_dimension(self) -> int:
        return self._input_dimension

    def embeddings(self) -> int:
        return self._embeddings

    def required_input_columns(self) -> int:
        return 1 + self._embeddings * self._stride

    def tap_offsets(self) -> tuple[int, ...]:
        """Column offsets read from a window, current column first."""
        return tuple(e * self._stride for e in range(self._embeddings + 1))

    def _check_rows(self, arr: np.ndarray) -> None:
        if arr.shape[0] != self._input_dimension:
            raise DimensionMismatchError(
                f"Expected {self._input_dimension} input channels, got {arr.shape[0]}"
            )

    def _check_window(self, window: np.ndarray) -> np.ndarray:
        arr = as_matrix(window, name="window")
        self._check_rows(arr)
        required = self.required_input_columns()
        if arr.shape[1] != required:
            raise DimensionMismatchError(f"Window must have exactly {required} columns, got {arr.shape[1]}")
        return arr

    def _check_many(self, inputs: np.ndarray) -> tuple[np.ndarray, int]:
        arr = as_matrix(inputs, name="inputs")
        self._check_rows(arr)
        required = self.required_input_columns()
        if arr.shape[1] < required:
            raise DimensionMismatchError(f"Need at least {required} columns to project, got {arr.shape[1]}")
        return arr, arr.shape[1] - required + 1

    def _embed(self, window: np.ndarray, out: np.ndarray) -> None:
        d = self._input_dimension
        for block, offset in enumerate(self.tap_offsets()):
            out[block * d:(block + 1) * d] = window[:, offset]

    def _embed_many(self, inputs: np.ndarray, positions: int) -> np.ndarray:
        return np.concatenate([inputs[:, offset:offset + positions] for offset in self.tap_offsets()], axis=0)

    @abstractmethod
    def _apply(self, embedded: np.ndarray, out: np.ndarray) -> None:
        """Map stacked taps (1D vector or one column per position) into `out`."""

    def project(self, window: np.ndarray) -> np.ndarray:
        arr = self._check_window(window)
        self._embed(arr, self._embedded)
        self._apply(self._embedded, self._result)
        return self._result

    def project_into(self, window: np.ndarray, target: np.ndarray) -> None:
        arr = self._check_window(window)
        _check_target(target, (self.output_dimensions(),))
        self._embed(arr, self._embedded)
        self._apply(self._embedded, target)

    def project_many(self, inputs: np.ndarray) -> np.ndarray:
        arr, positions = self._check_many(inputs)
        result = np.zeros((self.output_dimensions(), positions), dtype=np.float64)
        self._apply(self._embed_many(arr, positions), result)
        return result

    def project_many_into(self, inputs: np.ndarray, targets: np.ndarray) -> None:
        arr, positions = self._check_many(inputs)
        _check_target(targets, (self.output_dimensions(), positions), name="targets")
        self._apply(self._embed_many(arr, positions), targets)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(input_dimension={self._input_dimension}, "
            f"output_dimensions={self.output_dimensions()}, embeddings={self._embeddings}, stride={self._stride})"
        )


class _MatrixProjection(BaseInputProjection):
    """Projection applying a fixed, read-only input matrix to the stacked taps."""

    def __init__(self, w_in: np.ndarray, embeddings: int, stride: int) -> None:
        matrix = np.array(w_in, dtype=np.float64)
        if matrix.ndim != 2:
            raise ConfigurationError(f"Input matrix must be 2D, got shape {matrix.shape}")
        embeddings = as_count(embeddings, name="embeddings")
        if embeddings < 0:
            raise ConfigurationError(f"embeddings must be non-negative, got {embeddings}")
        blocks = 1 + embeddings
        if matrix.shape[0] < 1 or matrix.shape[1] < 1 or matrix.shape[1] % blocks != 0:
            raise ConfigurationError(
                f"Input matrix with shape {matrix.shape} cannot serve {embeddings} embeddings "
                f"(column count must be a positive multiple of {blocks})"
            )
        super().__init__(matrix.shape[1] // blocks, matrix.shape[0], embeddings, stride)
        matrix.setflags(write=False)
        self._w_in = matrix

    @property
    def w_in(self) -> np.ndarray:
        return self._w_in

    def _apply(self, embedded: np.ndarray, out: np.ndarray) -> None:
        out[...] = self._w_in @ embedded


class DefaultInputProjection(_MatrixProjection):
    """Plain linear input map without embedding (one raw column per step)."""

    def __init__(self, w_in: np.ndarray) -> None:
        super().__init__(w_in, embeddings=0, stride=0)

    @classmethod
    def new_random(cls, input_dim: int, output_dim: int, input_strength: float, seed: int = 0) -> "DefaultInputProjection":
        return cls(single_tap_matrix(output_dim, input_dim, input_strength, seed))

    @classmethod
    def new_with_matrix(cls, matrix: np.ndarray) -> "DefaultInputProjection":
        return cls(matrix)


class InputProjectionWithEmbedding(_MatrixProjection):
    """Linear input map applied to the current column stacked with `embeddings` strided history taps."""

    @classmethod
    def new_random(
        cls,
        system_dim: int,
        output_dim: int,
        embeddings: int,
        stride: int,
        seed: int = 0,
        input_strength: float = 1.0,
    ) -> "InputProjectionWithEmbedding":
        n_taps = as_count(system_dim, name="system_dim") * (1 + as_count(embeddings, name="embeddings"))
        matrix = single_tap_matrix(output_dim, n_taps, input_strength, seed)
        return cls(matrix, embeddings, stride)

    @classmethod
    def new_with_matrix(cls, matrix: np.ndarray, embeddings: int, stride: int) -> "InputProjectionWithEmbedding":
        return cls(matrix, embeddings, stride)


class IdentityProjectionWithEmbedding(BaseInputProjection):
    """Copies the stacked taps through: output dimension is system_dim * (1 + embeddings)."""

    def __init__(self, system_dim: int, embeddings: int, stride: int) -> None:
        system_dim = as_count(system_dim, name="system_dim")
        super().__init__(system_dim, system_dim * (1 + as_count(embeddings, name="embeddings")), embeddings, stride)

    def _apply(self, embedded: np.ndarray, out: np.ndarray) -> None:
        out[...] = embedded


__all__ = [
    "BaseInputProjection",
    "DefaultInputProjection",
    "InputProjectionWithEmbedding",
    "IdentityProjectionWithEmbedding",
    "single_tap_matrix",
]
