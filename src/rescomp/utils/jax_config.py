"""JAX configuration for rescomp: every array in the package is float64."""

from __future__ import annotations

import threading

import jax
import jax.numpy as jnp

_CONFIG_LOCK = threading.Lock()
_CONFIGURED = False


def ensure_x64_enabled() -> None:
    """Enable 64-bit support in JAX once per process."""
    global _CONFIGURED
    if _CONFIGURED:
        return
    with _CONFIG_LOCK:
        if not _CONFIGURED:
            jax.config.update("jax_enable_x64", True)
            _CONFIGURED = True


def x64_enabled() -> bool:
    return jnp.zeros(1).dtype == jnp.float64


__all__ = ["ensure_x64_enabled", "x64_enabled"]
