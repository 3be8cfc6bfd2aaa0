"""
src/rescomp/core/errors.py
Error taxonomy for the reservoir engine.

Every error is fatal to the call that raised it. Each class also derives from
the builtin exception raised for the same situation elsewhere, so callers can
catch either.
"""
from __future__ import annotations


class ReservoirError(Exception):
    """Base class for every error raised by rescomp."""


class ConfigurationError(ReservoirError, ValueError):
    """Invalid construction or setup parameters (embeddings/stride, shapes, step counts)."""


class DimensionMismatchError(ReservoirError, ValueError):
    """A per-call precondition on window size, row count or buffer shape was violated."""


class UnsupportedFeatureError(ReservoirError, NotImplementedError):
    """The requested mode exists conceptually but is not implemented."""


class SolverError(ReservoirError, ArithmeticError):
    """Raised when the normal equations cannot be solved, carrying diagnostic stats."""

    def __init__(self, message: str, stats: dict[str, float] | None = None) -> None:
        super().__init__(message)
        self.stats: dict[str, float] = dict(stats or {})


__all__ = [
    "ReservoirError",
    "ConfigurationError",
    "DimensionMismatchError",
    "UnsupportedFeatureError",
    "SolverError",
]
