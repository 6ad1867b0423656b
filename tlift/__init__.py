"""
Temporal Lifting for person re-identification.
Model-free re-weighting of gallery-probe scores by temporal co-occurrence.
"""

from .config import LiftingConfig
from .errors import (
    TLiftError,
    InvalidDimension,
    InvalidCameraIndex,
    InsufficientPivotCandidates,
    InvalidParameter,
    NonFiniteValues,
)
from .lifting import TemporalLifter, tlift

__version__ = "0.1.0"


__all__ = [
    'LiftingConfig',
    'TemporalLifter',
    'tlift',
    # Errors
    'TLiftError',
    'InvalidDimension',
    'InvalidCameraIndex',
    'InsufficientPivotCandidates',
    'InvalidParameter',
    'NonFiniteValues',
]
