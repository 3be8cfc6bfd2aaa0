"""Stateless-per-call building blocks around the reservoir: input projections and state measurements."""

from .projection import (  # noqa: F401
    BaseInputProjection,
    DefaultInputProjection,
    IdentityProjectionWithEmbedding,
    InputProjectionWithEmbedding,
)
from .measurement import (  # noqa: F401
    BaseStateMeasurement,
    ConstantExtensionStateMeasurement,
    DefaultStateMeasurement,
    ExtendedLuStateMeasurement,
    LuStateMeasurement,
)

__all__ = [
    "BaseInputProjection",
    "DefaultInputProjection",
    "IdentityProjectionWithEmbedding",
    "InputProjectionWithEmbedding",
    "BaseStateMeasurement",
    "ConstantExtensionStateMeasurement",
    "DefaultStateMeasurement",
    "ExtendedLuStateMeasurement",
    "LuStateMeasurement",
]
