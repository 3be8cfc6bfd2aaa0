"""Readout (state projection) components."""

from .base import StateProjectionBase  # noqa: F401
from .linear import LinearStateProjection  # noqa: F401

__all__ = ["StateProjectionBase", "LinearStateProjection"]
