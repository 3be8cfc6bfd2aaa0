"""
src/rescomp/core/types.py
Central type definitions and the NumPy/JAX domain gateway.

Strict array aliases shared by every module.

NUMPY Domain → NpF64 (stepping engine: projections, measurements, dynamics)
JAX Domain   → JaxF64 (random construction and the regression solver)

Crossing between the two domains always goes through to_jax_f64() / to_np_f64().
Caller-supplied data enters the NumPy domain through as_matrix() / as_vector().
"""
from typing import TypedDict

from beartype import beartype
from jaxtyping import Float64, jaxtyped
import jax
from jax import Array
import jax.numpy as jnp
import numpy as np

from rescomp.core.errors import ConfigurationError, DimensionMismatchError

# ==========================================
# Type aliases
# ==========================================
NpF64 = Float64[np.ndarray, "..."]
NpVector = Float64[np.ndarray, "dim"]
NpMatrix = Float64[np.ndarray, "rows cols"]
JaxF64 = Float64[Array, "..."]


class TopologyMeta(TypedDict, total=False):
    """Architecture summary consumed by rescomp.utils.printing.print_topology."""
    type: str
    shapes: dict[str, tuple[int, ...] | None]
    details: dict[str, str | int | float | None]


# ==========================================
# Caller data → NumPy domain
# ==========================================

def as_matrix(data: object, *, name: str = "input") -> NpMatrix:
    """Coerce caller data to a 2D float64 matrix (rows = channels, columns = time steps)."""
    arr = np.asarray(data, dtype=np.float64)
    if arr.ndim != 2:
        raise DimensionMismatchError(f"{name} must be a 2D (channels, time) matrix, got shape {arr.shape}")
    return arr


def as_vector(data: object, *, name: str = "vector") -> NpVector:
    """Coerce caller data to a 1D float64 vector."""
    arr = np.asarray(data, dtype=np.float64)
    if arr.ndim != 1:
        raise DimensionMismatchError(f"{name} must be a 1D vector, got shape {arr.shape}")
    return arr


def as_count(value: object, *, name: str, error: type[ValueError] = ConfigurationError) -> int:
    """Accept an integral step/column count; floats and bools are rejected rather than truncated."""
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise error(f"{name} must be an integer, got {value!r} ({type(value).__name__})")
    return int(value)


# ==========================================
# Domain Gateway: NumPy ↔ JAX
# ==========================================

@jaxtyped(typechecker=beartype)
def to_jax_f64(x: NpF64) -> JaxF64:
    """NumPy → JAX conversion gateway.

    - beartype only accepts float64 numpy arrays
    - NaN/Inf fail immediately
    - jax.device_put places the array explicitly
    """
    if np.any(np.isnan(x)):
        raise ValueError(f"NaN detected at NumPy→JAX boundary! shape={x.shape}")
    if np.any(np.isinf(x)):
        raise ValueError(f"Inf detected at NumPy→JAX boundary! shape={x.shape}")
    return jax.device_put(jnp.array(x, dtype=jnp.float64))


@jaxtyped(typechecker=beartype)
def to_np_f64(x: JaxF64) -> NpF64:
    """JAX → NumPy conversion gateway.

    - beartype only accepts float64 jax arrays
    - NaN/Inf fail immediately
    - the result is a writable host copy, safe to mutate in place
    """
    result = np.array(x, dtype=np.float64)
    if np.any(np.isnan(result)):
        raise ValueError(f"NaN detected at JAX→NumPy boundary! shape={result.shape}")
    if np.any(np.isinf(result)):
        raise ValueError(f"Inf detected at JAX→NumPy boundary! shape={result.shape}")
    return result


__all__ = [
    "NpF64",
    "NpVector",
    "NpMatrix",
    "JaxF64",
    "TopologyMeta",
    "as_count",
    "as_matrix",
    "as_vector",
    "to_jax_f64",
    "to_np_f64",
]
